"""Shared fixtures for session, storage and API tests."""

from __future__ import annotations

import importlib
from collections.abc import Callable
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from app.session.service import SessionService
from app.storage.store import InMemoryKeyValueStore


@pytest.fixture
def memory_store() -> InMemoryKeyValueStore:
    """Fresh in-memory key-value store."""
    return InMemoryKeyValueStore()


@pytest.fixture
def session_service(memory_store: InMemoryKeyValueStore) -> SessionService:
    """Session service over the in-memory store with default policy."""
    return SessionService(memory_store)


@pytest.fixture
def new_client(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> Callable[..., TestClient]:
    """Build a TestClient after applying NAMECHECK_* environment overrides."""

    def _build(**env: str) -> TestClient:
        monkeypatch.setenv("NAMECHECK_SQLITE_PATH", str(tmp_path / "namecheck.sqlite3"))
        for key, value in env.items():
            monkeypatch.setenv(key.upper(), value)

        import app.main as app_main

        app_main = importlib.reload(app_main)
        return TestClient(app_main.app)

    return _build
