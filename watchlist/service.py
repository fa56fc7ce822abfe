"""
Author: Ashwin Nair
Date: 2025-08-22
Project name: service.py
Summary: Per-user watchlist operations on top of an EntryStore.
"""

import logging
import random
import threading
import weakref
from typing import Optional

from watchlist.entry import Entry, RatingRule, parse_category, utcnow, validate
from watchlist.errors import AmbiguousEntryError, NotFoundError, NothingToChooseError
from watchlist.store import EntryStore

logger = logging.getLogger(__name__)


class OwnerLock:
    """A mutex that can be weakly referenced."""

    def __init__(self):
        self._lock = threading.Lock()

    def __enter__(self):
        self._lock.acquire()
        return self

    def __exit__(self, *exc):
        self._lock.release()


class WatchlistService:
    """Fetch and mutate a user's watchlist.

    Every lookup-then-write runs under a lock for the owner, so two commands
    from the same user cannot interleave between the lookup and the write.
    All methods block on the store; callers in async code should run them in
    a worker thread.
    """

    def __init__(self, store: EntryStore, rating_rule: Optional[RatingRule] = None, rng=None) -> None:
        self.store = store
        self.rating_rule = rating_rule or RatingRule()
        self.rng = rng or random.Random()
        # Locks live only while some call holds them.
        self._locks = weakref.WeakValueDictionary()
        self._locks_guard = threading.Lock()

    def _owner_lock(self, owner):
        with self._locks_guard:
            lock = self._locks.get(owner)
            if lock is None:
                lock = OwnerLock()
                self._locks[owner] = lock
            return lock

    # --- Queries ---
    def exists(self, owner: str) -> bool:
        return self.store.exists(owner)

    def fetch(self, owner: str, include_done: bool = True) -> list[Entry]:
        """All entries of an owner; empty list when there are none."""
        return self.store.select_all(owner, include_done)

    def resolve(self, owner: str, title: str, category=None) -> Entry:
        """Find the entry a command refers to.

        With a category this is a point lookup. Without one, the title must
        match exactly one entry across all categories.
        """
        if category:
            category = parse_category(category)
            entry = self.store.get(owner, title, category)
            if entry is None:
                raise NotFoundError(owner, title, str(category))
            return entry

        matches = self.store.select_title(owner, title)
        if not matches:
            raise NotFoundError(owner, title)
        if len(matches) > 1:
            raise AmbiguousEntryError(owner, title, [str(e.category) for e in matches])
        return matches[0]

    # --- Mutations ---
    def add(self, owner: str, title: str, category, link: str = "") -> Entry:
        entry = Entry(owner=owner, title=title, category=category,
                      created_at=utcnow(), link=link or "")
        validate(entry)
        entry.category = parse_category(entry.category)
        with self._owner_lock(owner):
            self.store.insert(entry)
        logger.info("Added %s for %s", entry.key, owner)
        return entry

    def delete(self, owner: str, title: str, category=None) -> Entry:
        with self._owner_lock(owner):
            entry = self.resolve(owner, title, category)
            if not self.store.delete_where(owner, entry.title, entry.category):
                raise NotFoundError(owner, title, str(entry.category))
        logger.info("Deleted %s for %s", entry.key, owner)
        return entry

    def update(self, owner: str, title: str, category, new_link: str) -> Entry:
        """Replace the link of an entry."""
        return self._set(owner, title, category, "link", new_link or "")

    def mark_done(self, owner: str, title: str, category=None) -> Entry:
        """Mark an entry as watched. Marking twice is harmless."""
        return self._set(owner, title, category, "done", True)

    def rate(self, owner: str, title: str, category, rating: int) -> Entry:
        """Overwrite the rating of an entry."""
        self.rating_rule.check(rating)
        return self._set(owner, title, category, "rating", rating)

    def _set(self, owner, title, category, field, value):
        with self._owner_lock(owner):
            entry = self.resolve(owner, title, category)
            if not self.store.update_field(owner, entry.title, entry.category, field, value):
                raise NotFoundError(owner, title, str(entry.category))
        setattr(entry, field, value)
        logger.info("Set %s=%r on %s for %s", field, value, entry.key, owner)
        return entry

    def pick_random(self, owner: str) -> Entry:
        """A uniformly random entry among the ones not watched yet."""
        pending = self.fetch(owner, include_done=False)
        if not pending:
            raise NothingToChooseError(owner)
        return self.rng.choice(pending)
