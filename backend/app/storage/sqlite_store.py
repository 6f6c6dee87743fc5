"""SQLite-backed key-value store and its schema bootstrap.

Values are stored as UTF-8 bytes with lone surrogates passed through, since a
name under evaluation may contain one.
"""

from __future__ import annotations

from app.core.db import create_sqlite_connection

CREATE_KV_SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS kv_entries (
    key TEXT PRIMARY KEY,
    value BLOB NOT NULL
);
"""


def _encode_value(value: str) -> bytes:
    return value.encode("utf-8", "surrogatepass")


def _decode_value(raw: bytes | str) -> str:
    if isinstance(raw, str):
        return raw
    return bytes(raw).decode("utf-8", "surrogatepass")


def init_kv_schema(path: str) -> None:
    """Ensure the key-value table exists."""
    conn = create_sqlite_connection(path)
    try:
        conn.executescript(CREATE_KV_SCHEMA_SQL)
        conn.commit()
    finally:
        conn.close()


class SqliteKeyValueStore:
    """Persist entries in one SQLite table, one connection per call."""

    def __init__(self, path: str) -> None:
        self._path = path

    @property
    def path(self) -> str:
        return self._path

    def init_schema(self) -> None:
        init_kv_schema(self._path)

    def get(self, key: str) -> str | None:
        conn = create_sqlite_connection(self._path)
        try:
            row = conn.execute(
                "SELECT value FROM kv_entries WHERE key = ?",
                (key,),
            ).fetchone()
            if row is None:
                return None
            return _decode_value(row[0])
        finally:
            conn.close()

    def set(self, key: str, value: str) -> None:
        conn = create_sqlite_connection(self._path)
        try:
            conn.execute("BEGIN")
            conn.execute(
                """
                INSERT INTO kv_entries (key, value)
                VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value
                """,
                (key, _encode_value(value)),
            )
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()
