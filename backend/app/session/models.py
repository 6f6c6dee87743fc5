"""Pydantic models for evaluation and session requests."""

from __future__ import annotations

from pydantic import BaseModel
from pydantic import Field

from namecheck import StrictnessProfile

from app.session.service import SessionAction


class EvaluateRequest(BaseModel):
    """POST /api/evaluate request body."""

    name: str = ""
    profile: StrictnessProfile | None = None


class SessionUpdateRequest(BaseModel):
    """PUT /api/session request body."""

    value: str
    profile: StrictnessProfile | None = None


class SessionActionRequest(BaseModel):
    """POST /api/session/actions request body."""

    action: SessionAction
    profile: StrictnessProfile | None = None
    index: int | None = Field(default=None, ge=0)
