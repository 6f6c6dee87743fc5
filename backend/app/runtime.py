"""Process-wide runtime state shared by REST handlers."""

from __future__ import annotations

from app.core.config import Settings
from app.core.config import load_settings
from app.session.service import SessionService
from app.storage import KeyValueStore
from app.storage import create_store

settings = load_settings()
store: KeyValueStore = create_store(settings)


def build_session_service(settings: Settings, store: KeyValueStore) -> SessionService:
    return SessionService(
        store,
        policy=settings.policy(),
        history_limit=settings.namecheck_history_limit,
        default_profile=settings.namecheck_default_profile,
    )


session_service = build_session_service(settings, store)


def startup() -> None:
    """Reload settings and rebuild the store and session service."""
    global settings, store, session_service
    settings = load_settings()
    store = create_store(settings)
    session_service = build_session_service(settings, store)


__all__ = [
    "Settings",
    "build_session_service",
    "session_service",
    "settings",
    "startup",
    "store",
]
