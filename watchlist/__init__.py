"""Watchlist bot core: parsing, entries, storage and sorting."""

from watchlist.commands import Dispatcher, IncomingMessage
from watchlist.entry import Category, Entry
from watchlist.formatting import Reply
from watchlist.service import WatchlistService
from watchlist.store import SqliteEntryStore

__all__ = [
    "Category",
    "Dispatcher",
    "Entry",
    "IncomingMessage",
    "Reply",
    "SqliteEntryStore",
    "WatchlistService",
]
