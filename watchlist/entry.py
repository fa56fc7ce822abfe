"""
Author: Ashwin Nair
Date: 2025-08-22
Project name: entry.py
Summary: A single watchlist entry and its validation rules.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from watchlist.errors import (
    InvalidCategoryError,
    InvalidOwnerError,
    InvalidRatingError,
    InvalidTimestampError,
    InvalidTitleError,
)


class Category(str, Enum):
    """Kind of item on a watchlist."""

    MOVIE = "movie"
    SHOW = "show"
    ANIME = "anime"

    def __str__(self):
        return self.value


def parse_category(value):
    """Turn user text into a Category, case-insensitively."""
    if isinstance(value, Category):
        return value
    try:
        return Category(str(value or "").strip().lower())
    except ValueError:
        raise InvalidCategoryError(value) from None


def utcnow():
    return datetime.now(timezone.utc)


@dataclass
class Entry:
    """One tracked item, keyed by (owner, title, category)."""

    owner: str
    title: str
    category: Category
    created_at: datetime = field(default_factory=utcnow)
    done: bool = False
    rating: int = 0
    link: str = ""

    @property
    def key(self):
        return (self.owner, self.title, self.category)

    def __str__(self):
        if self.link:
            return f"{self.title} ({self.category})\n{self.link}"
        return f"{self.title} ({self.category})"


def validate(entry):
    """Check an entry before it is stored. Raises a ValidationError subclass."""
    if not entry.owner:
        raise InvalidOwnerError(entry.owner)
    if not entry.title or not entry.title.strip():
        raise InvalidTitleError(entry.title)
    parse_category(entry.category)
    if not isinstance(entry.created_at, datetime):
        raise InvalidTimestampError(entry.created_at)


# sqlite stores INTEGER columns as signed 64-bit values.
SQLITE_INT_MIN = -2**63
SQLITE_INT_MAX = 2**63 - 1


@dataclass
class RatingRule:
    """Optional inclusive bounds for ratings. Unset bounds are open."""

    minimum: Optional[int] = None
    maximum: Optional[int] = None

    def check(self, rating: int) -> int:
        if not SQLITE_INT_MIN <= rating <= SQLITE_INT_MAX:
            raise InvalidRatingError(rating, self.minimum, self.maximum)
        if self.minimum is not None and rating < self.minimum:
            raise InvalidRatingError(rating, self.minimum, self.maximum)
        if self.maximum is not None and rating > self.maximum:
            raise InvalidRatingError(rating, self.minimum, self.maximum)
        return rating

    def describe(self) -> str:
        if self.minimum is None and self.maximum is None:
            return "any whole number"
        if self.minimum is None:
            return f"a whole number up to {self.maximum}"
        if self.maximum is None:
            return f"a whole number from {self.minimum}"
        return f"a whole number from {self.minimum} to {self.maximum}"


def parse_rating(text, rule=None):
    """Parse a rating token into an int, applying the configured bounds."""
    try:
        rating = int(text)
    except (TypeError, ValueError):
        raise InvalidRatingError(text) from None
    return (rule or RatingRule()).check(rating)
