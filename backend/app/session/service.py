"""Session state transitions driven by evaluator output.

The session is the current candidate name plus a bounded history of names
that were rated ok. Both live in an injected key-value store; the strictness
profile is chosen per request and never persisted.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import json
import logging

from namecheck import EvaluationReport
from namecheck import Policy
from namecheck import StrictnessProfile
from namecheck import evaluate

from app.storage.store import KeyValueStore

logger = logging.getLogger(__name__)

LAST_NAME_KEY = "last_name"
HISTORY_KEY = "history"
DEFAULT_HISTORY_LIMIT = 10


class SessionError(Exception):
    """Base class for session-domain errors."""


class HistoryEntryNotFoundError(SessionError):
    """Raised when a history index is missing or out of range."""


class SessionAction(str, Enum):
    APPLY_NFC = "apply-nfc"
    APPLY_NFKC = "apply-nfkc"
    APPLY_SUGGESTION = "apply-suggestion"
    RESET = "reset"
    USE_HISTORY = "use-history"


class NoticeType(str, Enum):
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class Notice:
    """Short user-facing message describing the outcome of an action."""

    message: str
    type: NoticeType


@dataclass(frozen=True, slots=True)
class SessionView:
    """Current value, its report under the requested profile, and history."""

    value: str
    report: EvaluationReport
    history: tuple[str, ...]
    notice: Notice | None = None


FIELD_EMPTY = Notice("The field is empty.", NoticeType.ERROR)
SUGGESTION_EMPTY = Notice("No suggestion available for this name.", NoticeType.ERROR)

_ACTION_NOTICES = {
    SessionAction.APPLY_NFC: Notice("NFC applied.", NoticeType.SUCCESS),
    SessionAction.APPLY_NFKC: Notice("NFKC applied.", NoticeType.SUCCESS),
    SessionAction.APPLY_SUGGESTION: Notice("Name replaced with the conservative suggestion.", NoticeType.SUCCESS),
    SessionAction.RESET: Notice("Field reset.", NoticeType.WARNING),
    SessionAction.USE_HISTORY: Notice("Name restored from history.", NoticeType.SUCCESS),
}
HISTORY_CLEARED = Notice("History cleared.", NoticeType.WARNING)


class SessionService:
    """Apply session transitions on top of a key-value store."""

    def __init__(
        self,
        store: KeyValueStore,
        *,
        policy: Policy | None = None,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
        default_profile: StrictnessProfile = StrictnessProfile.BALANCED,
    ) -> None:
        if history_limit < 1:
            raise ValueError("history_limit must be >= 1")
        self._store = store
        self._policy = policy
        self._history_limit = history_limit
        self._default_profile = default_profile

    @property
    def default_profile(self) -> StrictnessProfile:
        return self._default_profile

    def evaluate(self, value: str, profile: StrictnessProfile | str | None = None) -> EvaluationReport:
        """Evaluate ``value`` with the configured policy; no state is touched."""
        return evaluate(value, self._resolve_profile(profile), self._policy)

    def load_value(self) -> str:
        return self._store.get(LAST_NAME_KEY) or ""

    def load_history(self) -> list[str]:
        """Read history; malformed stored data reads as an empty history."""
        raw = self._store.get(HISTORY_KEY)
        if not raw:
            return []
        try:
            entries = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("stored history is not valid JSON; ignoring it")
            return []
        if not isinstance(entries, list):
            logger.warning("stored history is not a list; ignoring it")
            return []
        return [entry for entry in entries if isinstance(entry, str)][: self._history_limit]

    def snapshot(self, profile: StrictnessProfile | str | None = None) -> SessionView:
        value = self.load_value()
        return SessionView(
            value=value,
            report=self.evaluate(value, profile),
            history=tuple(self.load_history()),
        )

    def set_value(self, value: str, profile: StrictnessProfile | str | None = None) -> SessionView:
        """Store ``value`` as the current name and record it in history when ok."""
        return self._commit(value, profile)

    def apply_action(
        self,
        action: SessionAction | str,
        profile: StrictnessProfile | str | None = None,
        *,
        index: int | None = None,
    ) -> SessionView:
        """Run one UI action against the current value."""
        action = SessionAction(action)

        if action is SessionAction.USE_HISTORY:
            history = self.load_history()
            if index is None or not 0 <= index < len(history):
                raise HistoryEntryNotFoundError(f"history index={index} not found")
            return self._commit(history[index], profile, _ACTION_NOTICES[action])

        current = self.load_value()
        if not current:
            return self._view(current, profile, FIELD_EMPTY)

        if action is SessionAction.RESET:
            return self._commit("", profile, _ACTION_NOTICES[action])

        report = self.evaluate(current, profile)
        if action is SessionAction.APPLY_NFC:
            target = report.nfc
        elif action is SessionAction.APPLY_NFKC:
            target = report.nfkc
        else:
            target = report.sanitized
            if not target:
                return self._view(current, profile, SUGGESTION_EMPTY)
        return self._commit(target, profile, _ACTION_NOTICES[action])

    def clear_history(self, profile: StrictnessProfile | str | None = None) -> SessionView:
        self._store.set(HISTORY_KEY, json.dumps([]))
        logger.info("session history cleared")
        return self._view(self.load_value(), profile, HISTORY_CLEARED)

    def _resolve_profile(self, profile: StrictnessProfile | str | None) -> StrictnessProfile:
        if profile is None:
            return self._default_profile
        return StrictnessProfile.parse(profile)

    def _view(
        self,
        value: str,
        profile: StrictnessProfile | str | None,
        notice: Notice | None = None,
    ) -> SessionView:
        return SessionView(
            value=value,
            report=self.evaluate(value, profile),
            history=tuple(self.load_history()),
            notice=notice,
        )

    def _commit(
        self,
        value: str,
        profile: StrictnessProfile | str | None,
        notice: Notice | None = None,
    ) -> SessionView:
        self._store.set(LAST_NAME_KEY, value)
        report = self.evaluate(value, profile)
        history = self.load_history()

        if report.is_ok and value and value not in history:
            history = [value, *history][: self._history_limit]
            self._store.set(HISTORY_KEY, json.dumps(history, ensure_ascii=False))
            logger.debug("recorded ok-rated name in history size=%d", len(history))

        return SessionView(value=value, report=report, history=tuple(history), notice=notice)
