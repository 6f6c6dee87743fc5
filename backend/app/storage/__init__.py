"""Key-value persistence backends for session state."""

from __future__ import annotations

import logging

from app.core.config import Settings
from app.storage.sqlite_store import SqliteKeyValueStore
from app.storage.store import InMemoryKeyValueStore
from app.storage.store import KeyValueStore

logger = logging.getLogger(__name__)


def create_store(settings: Settings) -> KeyValueStore:
    """Build the configured store, creating the SQLite schema when needed."""
    if settings.namecheck_store_backend == "sqlite":
        store = SqliteKeyValueStore(settings.namecheck_sqlite_path)
        store.init_schema()
        logger.info("using sqlite key-value store path=%s", store.path)
        return store
    logger.info("using in-memory key-value store")
    return InMemoryKeyValueStore()


__all__ = [
    "InMemoryKeyValueStore",
    "KeyValueStore",
    "SqliteKeyValueStore",
    "create_store",
]
