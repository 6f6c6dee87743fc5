"""Stateless evaluation route."""

from __future__ import annotations

from fastapi import APIRouter
from fastapi import Depends

from app.api.deps import get_session_service
from app.api.report_views import report_view
from app.session.models import EvaluateRequest
from app.session.service import SessionService

router = APIRouter()


@router.post("/api/evaluate", response_model=None)
def evaluate_name(
    payload: EvaluateRequest,
    service: SessionService = Depends(get_session_service),
) -> dict[str, object]:
    """Evaluate one name without touching session state."""
    return report_view(service.evaluate(payload.name, payload.profile))
