"""Tests for settings loading."""

from pathlib import Path
from tempfile import TemporaryDirectory

import pytest

from watchlist.config import get_settings


def write_config(tmpdir, text) -> Path:
    path = Path(tmpdir) / "config.yaml"
    path.write_text(text, encoding="utf-8")
    return path


def test_defaults_without_config_file(monkeypatch) -> None:
    """Test a missing config file yields default settings."""
    monkeypatch.setenv("DISCORD_BOT_TOKEN", "secret")
    with TemporaryDirectory() as tmpdir:
        settings = get_settings(Path(tmpdir) / "missing.yaml")

    assert settings.discord_token == "secret"
    assert settings.bot.prefix == "./watchlist"
    assert settings.storage.database == Path("watchlist.db")
    assert settings.storage.timeout == 5.0
    assert settings.rating_rule.minimum is None
    assert settings.rating_rule.maximum is None


def test_yaml_overrides() -> None:
    """Test YAML sections override defaults."""
    with TemporaryDirectory() as tmpdir:
        path = write_config(tmpdir, (
            "bot:\n"
            "  prefix: '!wl'\n"
            "storage:\n"
            "  database: data/list.db\n"
            "  timeout: 2\n"
            "rating:\n"
            "  min: 1\n"
            "  max: 10\n"
        ))
        settings = get_settings(path)

    assert settings.bot.prefix == "!wl"
    assert settings.storage.database == Path("data/list.db")
    assert settings.storage.timeout == 2.0
    assert settings.rating_rule.describe() == "a whole number from 1 to 10"


def test_config_path_from_environment(monkeypatch) -> None:
    """Test WATCHLIST_CONFIG selects the config file."""
    with TemporaryDirectory() as tmpdir:
        path = write_config(tmpdir, "bot:\n  contact_url: https://example.org\n")
        monkeypatch.setenv("WATCHLIST_CONFIG", str(path))
        settings = get_settings()

    assert settings.bot.contact_url == "https://example.org"


def test_unknown_keys_rejected() -> None:
    """Test typos in the config are reported."""
    with TemporaryDirectory() as tmpdir:
        with pytest.raises(ValueError, match="bot.prefx"):
            get_settings(write_config(tmpdir, "bot:\n  prefx: x\n"))

        with pytest.raises(ValueError, match="Unknown config section"):
            get_settings(write_config(tmpdir, "cache:\n  size: 1\n"))

        with pytest.raises(ValueError, match="rating.min"):
            get_settings(write_config(tmpdir, "rating:\n  min: 5\n  max: 1\n"))


def test_log_level_is_checked() -> None:
    """Test log levels are normalized and unknown names rejected."""
    with TemporaryDirectory() as tmpdir:
        settings = get_settings(write_config(tmpdir, "bot:\n  log_level: debug\n"))
        assert settings.bot.log_level == "DEBUG"

        with pytest.raises(ValueError, match="bot.log_level"):
            get_settings(write_config(tmpdir, "bot:\n  log_level: loud\n"))
