"""
Author: Ashwin Nair
Date: 2025-08-22
Project name: config.py
Summary: Settings from config.yaml and the environment.
"""

import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Optional

import yaml

from watchlist.entry import RatingRule

DEFAULT_CONFIG_PATH = Path("config.yaml")


@dataclass
class BotConfig:
    """Chat-facing settings."""
    prefix: str = "./watchlist"
    contact_url: str = "https://github.com/ttamre/go.watchlist"
    log_level: str = "INFO"


@dataclass
class StorageConfig:
    """Database settings."""
    database: Path = Path("watchlist.db")
    timeout: float = 5.0


@dataclass
class RatingConfig:
    """Accepted rating range. Leave both unset for any integer."""
    min: Optional[int] = None
    max: Optional[int] = None


@dataclass
class Settings:
    """Application settings."""

    # Secrets (from environment only)
    discord_token: str = ""

    bot: BotConfig = field(default_factory=BotConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    rating: RatingConfig = field(default_factory=RatingConfig)

    @property
    def rating_rule(self) -> RatingRule:
        return RatingRule(self.rating.min, self.rating.max)


def load_config(config_path: Path = DEFAULT_CONFIG_PATH) -> dict:
    """Load configuration from a YAML file; a missing file means defaults."""
    if not config_path.exists():
        return {}

    with open(config_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _apply(section, values: dict, name: str) -> None:
    known = {f.name for f in fields(section)}
    for key, value in values.items():
        if key not in known:
            raise ValueError(f"Unknown setting {name}.{key}")
        setattr(section, key, value)


def get_settings(config_path: Optional[Path] = None) -> Settings:
    """Get application settings from YAML config and environment."""
    if config_path is None:
        config_path = Path(os.getenv("WATCHLIST_CONFIG", DEFAULT_CONFIG_PATH))
    config = load_config(Path(config_path))

    settings = Settings(discord_token=os.getenv("DISCORD_BOT_TOKEN", ""))

    for name, values in config.items():
        if name not in ("bot", "storage", "rating"):
            raise ValueError(f"Unknown config section {name!r}")
        _apply(getattr(settings, name), values or {}, name)

    settings.bot.log_level = str(settings.bot.log_level).upper()
    if not isinstance(logging.getLevelName(settings.bot.log_level), int):
        raise ValueError(f"Unknown log level bot.log_level={settings.bot.log_level!r}")
    settings.storage.database = Path(settings.storage.database)
    settings.storage.timeout = float(settings.storage.timeout)
    if settings.rating.min is not None and settings.rating.max is not None \
            and settings.rating.min > settings.rating.max:
        raise ValueError("rating.min must not be greater than rating.max")

    return settings
