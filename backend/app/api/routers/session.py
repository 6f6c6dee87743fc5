"""Session and history REST routes."""

from __future__ import annotations

from fastapi import APIRouter
from fastapi import Depends

from namecheck import StrictnessProfile

from app.api.deps import get_session_service
from app.api.http import raise_api_error
from app.api.report_views import session_view
from app.session.models import SessionActionRequest
from app.session.models import SessionUpdateRequest
from app.session.service import HistoryEntryNotFoundError
from app.session.service import SessionService

router = APIRouter()


@router.get("/api/session", response_model=None)
def get_session(
    profile: StrictnessProfile | None = None,
    service: SessionService = Depends(get_session_service),
) -> dict[str, object]:
    """Return current value, its report and the ok-name history."""
    return session_view(service.snapshot(profile))


@router.put("/api/session", response_model=None)
def update_session(
    payload: SessionUpdateRequest,
    service: SessionService = Depends(get_session_service),
) -> dict[str, object]:
    """Replace the current value; ok-rated names are added to history."""
    return session_view(service.set_value(payload.value, payload.profile))


@router.post("/api/session/actions", response_model=None)
def apply_session_action(
    payload: SessionActionRequest,
    service: SessionService = Depends(get_session_service),
) -> dict[str, object]:
    """Apply NFC/NFKC/suggestion/reset/use-history to the current value."""
    try:
        view = service.apply_action(payload.action, payload.profile, index=payload.index)
    except HistoryEntryNotFoundError:
        raise_api_error(
            status_code=404,
            code="HISTORY_ENTRY_NOT_FOUND",
            message="history entry not found",
            detail={"index": payload.index},
        )
    return session_view(view)


@router.delete("/api/history", response_model=None)
def clear_history(
    profile: StrictnessProfile | None = None,
    service: SessionService = Depends(get_session_service),
) -> dict[str, object]:
    """Forget every recorded name."""
    return session_view(service.clear_history(profile))
