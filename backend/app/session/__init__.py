"""Session domain package: current value, history and UI actions."""

from app.session.models import EvaluateRequest
from app.session.models import SessionActionRequest
from app.session.models import SessionUpdateRequest
from app.session.service import HISTORY_KEY
from app.session.service import LAST_NAME_KEY
from app.session.service import HistoryEntryNotFoundError
from app.session.service import Notice
from app.session.service import NoticeType
from app.session.service import SessionAction
from app.session.service import SessionError
from app.session.service import SessionService
from app.session.service import SessionView

__all__ = [
    "EvaluateRequest",
    "HISTORY_KEY",
    "HistoryEntryNotFoundError",
    "LAST_NAME_KEY",
    "Notice",
    "NoticeType",
    "SessionAction",
    "SessionActionRequest",
    "SessionError",
    "SessionService",
    "SessionUpdateRequest",
    "SessionView",
]
