"""Dependency helpers shared by API routers."""

from __future__ import annotations

import app.runtime as runtime
from app.session.service import SessionService


def get_session_service() -> SessionService:
    """Return the process-wide session service built at startup."""
    return runtime.session_service
