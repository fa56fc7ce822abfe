"""
Author: Ashwin Nair
Date: 2025-08-22
Project name: setup_db.py
Summary: Creates the watchlist database ahead of the first run.
"""

import sys

from watchlist.config import get_settings
from watchlist.store import SqliteEntryStore


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    path = argv[0] if argv else get_settings().storage.database

    store = SqliteEntryStore(path)
    store.close()

    print(f"✅ Database initialized at {path}!")


if __name__ == "__main__":
    main()
