"""
Author: Ashwin Nair
Date: 2025-08-22
Project name: store.py
Summary: Keyed persistence for watchlist entries (sqlite).
"""

import logging
import sqlite3
import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from datetime import datetime
from typing import Optional

from watchlist.entry import Entry, parse_category
from watchlist.errors import DuplicateKeyError, StoreError

logger = logging.getLogger(__name__)

# One row per (owner, title, category); the composite key doubles as the
# lookup index for every point query below.
SCHEMA = """CREATE TABLE IF NOT EXISTS entries (
    userID      TEXT NOT NULL,
    title       TEXT NOT NULL,
    category    TEXT CHECK(category IN ('movie','show','anime')) NOT NULL,
    date        TEXT NOT NULL,
    done        INTEGER NOT NULL DEFAULT 0,
    rating      INTEGER NOT NULL DEFAULT 0,
    link        TEXT NOT NULL DEFAULT '',
    PRIMARY KEY (userID, title, category)
)"""

UPDATABLE_FIELDS = {"done", "rating", "link"}


class EntryStore(ABC):
    """Interface for the persistence collaborator."""

    @abstractmethod
    def exists(self, owner: str) -> bool:
        """Whether the owner has any entries at all."""

    @abstractmethod
    def select_all(self, owner: str, include_done: bool = True) -> list[Entry]:
        """All entries of one owner in insertion order."""

    @abstractmethod
    def select_title(self, owner: str, title: str) -> list[Entry]:
        """Entries of one owner sharing a title, one per category."""

    @abstractmethod
    def get(self, owner: str, title: str, category: str) -> Optional[Entry]:
        """Point lookup by the full key."""

    @abstractmethod
    def insert(self, entry: Entry) -> None:
        """Persist a new entry. Raises DuplicateKeyError if the key is taken."""

    @abstractmethod
    def delete_where(self, owner: str, title: str, category: str) -> int:
        """Delete by key, returning the number of rows removed."""

    @abstractmethod
    def update_field(self, owner: str, title: str, category: str, field: str, value) -> int:
        """Set one column by key, returning the number of rows changed."""


class SqliteEntryStore(EntryStore):
    """EntryStore on a single sqlite3 connection shared between worker threads."""

    def __init__(self, path="watchlist.db", timeout=5.0):
        self.path = str(path)
        try:
            # timeout bounds how long a statement waits on a locked database.
            self.conn = sqlite3.connect(self.path, timeout=timeout, check_same_thread=False)
        except sqlite3.Error as e:
            raise StoreError(f"cannot open {self.path}: {e}") from e
        self._lock = threading.Lock()
        self.init_schema()

    def init_schema(self):
        with self._cursor() as c:
            c.execute(SCHEMA)
        logger.debug("Schema ready in %s", self.path)

    def close(self):
        with self._lock:
            self.conn.close()

    @contextmanager
    def _cursor(self):
        """Cursor inside one committed transaction; sqlite errors become StoreError."""
        with self._lock:
            try:
                with self.conn:
                    yield self.conn.cursor()
            except sqlite3.IntegrityError:
                raise
            except (sqlite3.Error, OverflowError) as e:
                raise StoreError(str(e)) from e

    # --- Queries ---
    def exists(self, owner):
        with self._cursor() as c:
            c.execute("SELECT 1 FROM entries WHERE userID=? LIMIT 1", (owner,))
            return c.fetchone() is not None

    def select_all(self, owner, include_done=True):
        query = "SELECT userID, title, category, date, done, rating, link FROM entries WHERE userID=?"
        if not include_done:
            query += " AND done=0"
        query += " ORDER BY rowid"
        with self._cursor() as c:
            c.execute(query, (owner,))
            rows = c.fetchall()
        return [_row_to_entry(row) for row in rows]

    def select_title(self, owner, title):
        with self._cursor() as c:
            c.execute("""SELECT userID, title, category, date, done, rating, link
                         FROM entries WHERE userID=? AND title=? ORDER BY rowid""",
                      (owner, title))
            rows = c.fetchall()
        return [_row_to_entry(row) for row in rows]

    def get(self, owner, title, category):
        with self._cursor() as c:
            c.execute("""SELECT userID, title, category, date, done, rating, link
                         FROM entries WHERE userID=? AND title=? AND category=?""",
                      (owner, title, str(category)))
            row = c.fetchone()
        return _row_to_entry(row) if row else None

    # --- Writes ---
    def insert(self, entry):
        try:
            with self._cursor() as c:
                c.execute("""INSERT INTO entries (userID, title, category, date, done, rating, link)
                             VALUES (?, ?, ?, ?, ?, ?, ?)""",
                          (entry.owner, entry.title, str(entry.category),
                           entry.created_at.isoformat(), int(entry.done),
                           entry.rating, entry.link or ""))
        except sqlite3.IntegrityError:
            raise DuplicateKeyError(entry.owner, entry.title, str(entry.category)) from None

    def delete_where(self, owner, title, category):
        with self._cursor() as c:
            c.execute("DELETE FROM entries WHERE userID=? AND title=? AND category=?",
                      (owner, title, str(category)))
            return c.rowcount

    def update_field(self, owner, title, category, field, value):
        if field not in UPDATABLE_FIELDS:
            raise ValueError(f"Field {field!r} cannot be updated")
        if field == "done":
            value = int(bool(value))
        # Column name comes from the whitelist above, never from user input.
        query = f"UPDATE entries SET {field}=? WHERE userID=? AND title=? AND category=?"
        try:
            with self._cursor() as c:
                c.execute(query, (value, owner, title, str(category)))
                return c.rowcount
        except sqlite3.IntegrityError as e:
            raise StoreError(str(e)) from e


def _row_to_entry(row):
    owner, title, category, date, done, rating, link = row
    return Entry(
        owner=owner,
        title=title,
        category=parse_category(category),
        created_at=datetime.fromisoformat(date),
        done=bool(done),
        rating=rating,
        link=link or "",
    )
