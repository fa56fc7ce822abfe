"""Tests for the sort engine."""

from datetime import datetime, timedelta, timezone

from watchlist.entry import Category, Entry
from watchlist.sorting import SortKey, sort_entries

BASE = datetime(2024, 1, 1, tzinfo=timezone.utc)


def make_entry(title, category=Category.MOVIE, days=0, done=False, rating=0) -> Entry:
    return Entry(
        owner="u1",
        title=title,
        category=category,
        created_at=BASE + timedelta(days=days),
        done=done,
        rating=rating,
    )


def titles(result):
    return [e.title for e in result.entries]


def test_sort_by_title() -> None:
    """Test title order is lexicographic."""
    entries = [make_entry("Zeta"), make_entry("Alpha"), make_entry("Mu")]

    result = sort_entries(entries, "title")

    assert titles(result) == ["Alpha", "Mu", "Zeta"]
    assert result.key is SortKey.TITLE
    assert result.rejected_key is None


def test_sort_by_date() -> None:
    """Test older entries come first."""
    entries = [make_entry("new", days=5), make_entry("old", days=0), make_entry("mid", days=2)]

    assert titles(sort_entries(entries, "date")) == ["old", "mid", "new"]


def test_sort_by_category() -> None:
    """Test category order follows the category names."""
    entries = [
        make_entry("a", Category.SHOW),
        make_entry("b", Category.ANIME),
        make_entry("c", Category.MOVIE),
    ]

    assert titles(sort_entries(entries, "category")) == ["b", "c", "a"]


def test_sort_by_watched_is_stable() -> None:
    """Test pending entries come before watched ones, keeping their order."""
    entries = [
        make_entry("w1", done=True),
        make_entry("p1"),
        make_entry("w2", done=True),
        make_entry("p2"),
    ]

    assert titles(sort_entries(entries, "watched")) == ["p1", "p2", "w1", "w2"]


def test_sort_by_rating() -> None:
    """Test ratings are sorted ascending."""
    entries = [make_entry("a", rating=5), make_entry("b", rating=1), make_entry("c", rating=3)]

    assert titles(sort_entries(entries, "rating")) == ["b", "c", "a"]


def test_default_key_is_watched() -> None:
    """Test an omitted key sorts by watched state."""
    entries = [make_entry("w", done=True), make_entry("p")]

    result = sort_entries(entries)

    assert result.key is SortKey.WATCHED
    assert titles(result) == ["p", "w"]


def test_unknown_key_keeps_order_and_reports_it() -> None:
    """Test an unrecognized key is a soft failure."""
    entries = [make_entry("Zeta"), make_entry("Alpha")]

    result = sort_entries(entries, "popularity")

    assert titles(result) == ["Zeta", "Alpha"]
    assert result.key is None
    assert result.rejected_key == "popularity"


def test_sort_does_not_modify_input() -> None:
    """Test the caller's list is left alone."""
    entries = [make_entry("b"), make_entry("a")]

    sort_entries(entries, "title")

    assert [e.title for e in entries] == ["b", "a"]
