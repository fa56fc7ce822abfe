"""
Author: Ashwin Nair
Date: 2025-08-22
Project name: sorting.py
Summary: Orders entries for the view command.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class SortKey(str, Enum):
    TITLE = "title"
    DATE = "date"
    CATEGORY = "category"
    WATCHED = "watched"
    RATING = "rating"


DEFAULT_SORT_KEY = SortKey.WATCHED

# Python's sort is stable, so entries with equal keys keep their stored order.
SORT_KEYS = {
    SortKey.TITLE: lambda e: e.title,
    SortKey.DATE: lambda e: e.created_at,
    SortKey.CATEGORY: lambda e: str(e.category),
    SortKey.WATCHED: lambda e: e.done,  # pending first
    SortKey.RATING: lambda e: e.rating,
}


@dataclass
class SortResult:
    entries: list
    key: Optional[SortKey] = None
    rejected_key: Optional[str] = None


def sort_entries(entries, key=None):
    """Sort entries by a key name.

    An unknown key returns the entries in their original order and reports
    the key back in rejected_key instead of failing.
    """
    entries = list(entries)
    if key is None or key == "":
        key = DEFAULT_SORT_KEY
    try:
        sort_key = key if isinstance(key, SortKey) else SortKey(str(key).lower())
    except ValueError:
        return SortResult(entries, None, str(key))
    return SortResult(sorted(entries, key=SORT_KEYS[sort_key]), sort_key)
