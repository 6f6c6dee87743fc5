"""SQLite connection helpers for backend persistence."""

from __future__ import annotations

import sqlite3

SQLITE_BUSY_TIMEOUT_SECONDS = 5.0


def create_sqlite_connection(path: str) -> sqlite3.Connection:
    """Create a SQLite connection that waits on concurrent writers instead of failing."""
    conn = sqlite3.connect(path, timeout=SQLITE_BUSY_TIMEOUT_SECONDS)
    conn.execute("PRAGMA synchronous=NORMAL")
    return conn
