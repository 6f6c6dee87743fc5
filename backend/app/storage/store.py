"""Key-value store interface used for session persistence."""

from __future__ import annotations

import threading
from typing import Protocol


class KeyValueStore(Protocol):
    """Minimal get/set-by-key storage owned by the presentation layer."""

    def get(self, key: str) -> str | None:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class InMemoryKeyValueStore:
    """Process-local store; contents are lost on restart."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._entries: dict[str, str] = dict(initial or {})
        self._lock = threading.Lock()

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._entries.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._entries[key] = value

    def snapshot(self) -> dict[str, str]:
        with self._lock:
            return dict(self._entries)
