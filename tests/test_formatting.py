"""Tests for reply formatting."""

from datetime import datetime, timezone

from watchlist.entry import Category, Entry
from watchlist.formatting import MAX_FIELDS, entry_field, watchlist_reply, watchlist_text


def make_entry(title, **kwargs) -> Entry:
    return Entry(
        owner="u1",
        title=title,
        category=Category.SHOW,
        created_at=datetime(2024, 3, 9, tzinfo=timezone.utc),
        **kwargs,
    )


def test_entry_field() -> None:
    """Test the card field shows status, rating, date and link."""
    field = entry_field(make_entry("Severance", done=True, rating=5, link="https://x"))

    assert field.name == "Severance (show)"
    assert field.value == "✅ watched · ⭐ 5 · added 2024-03-09\nhttps://x"


def test_watchlist_text() -> None:
    """Test the plain-text list has an underlined heading and numbered lines."""
    text = watchlist_text("Ashwin", [make_entry("Severance"), make_entry("Lost", done=True)])

    lines = text.splitlines()
    assert lines[0] == "Watchlist for Ashwin:"
    assert lines[1] == "-" * len(lines[0])
    assert lines[2] == "  1. [ ] Severance (show)"
    assert lines[3] == "  2. [x] Lost (show)"


def test_long_watchlist_falls_back_to_text() -> None:
    """Test lists too long for a card are sent as text."""
    entries = [make_entry(f"Show {i}") for i in range(MAX_FIELDS + 1)]

    reply = watchlist_reply("Ashwin", entries, note="⚠️ note")

    assert not reply.is_card
    assert reply.text.startswith("⚠️ note\nWatchlist for Ashwin:")


def test_short_watchlist_is_a_card() -> None:
    """Test short lists become a card with the avatar as thumbnail."""
    reply = watchlist_reply("Ashwin", [make_entry("Lost")], avatar_url="https://a")

    assert reply.is_card
    assert reply.thumbnail == "https://a"
    assert len(reply.fields) == 1
