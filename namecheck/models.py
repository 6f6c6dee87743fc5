"""Report data types produced by the username evaluator."""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from enum import Enum


class UnknownProfileError(ValueError):
    """Raised when a strictness profile name is not recognised."""


class Severity(str, Enum):
    """Ordinal finding severity: ok < warn < error."""

    OK = "ok"
    WARN = "warn"
    ERROR = "error"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank >= other.rank


_SEVERITY_RANK = {Severity.OK: 0, Severity.WARN: 1, Severity.ERROR: 2}


class StrictnessProfile(str, Enum):
    """Which characters count as safe, and how suggestions are sanitized."""

    ULTRA_SAFE = "ultra-safe"
    BALANCED = "balanced"
    PERMISSIVE = "permissive"

    @classmethod
    def parse(cls, value: StrictnessProfile | str) -> StrictnessProfile:
        """Accept a profile member or its string value."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            choices = ", ".join(member.value for member in cls)
            raise UnknownProfileError(f"unknown profile {value!r}; expected one of: {choices}") from exc


@dataclass(frozen=True, slots=True)
class Issue:
    """One finding, either for the whole name or for a single character."""

    id: str
    label: str
    severity: Severity
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class CharacterFinding:
    """Per-code-point classification result."""

    index: int
    char: str
    code_point: int
    issues: tuple[Issue, ...] = ()

    @property
    def hex(self) -> str:
        return format_code_point(self.code_point)

    @property
    def worst(self) -> Severity:
        return max((issue.severity for issue in self.issues), default=Severity.OK)


@dataclass(frozen=True, slots=True)
class Normalized:
    """Canonical forms and visible length of one input string."""

    nfc: str
    nfkc: str
    visible_length: int


@dataclass(frozen=True, slots=True)
class EvaluationReport:
    """Full diagnostic report for one evaluated name."""

    original: str
    nfc: str
    nfkc: str
    visible_length: int
    profile: StrictnessProfile
    issues: tuple[Issue, ...] = ()
    characters: tuple[CharacterFinding, ...] = field(default_factory=tuple)
    worst: Severity = Severity.OK
    sanitized: str = ""

    @property
    def is_ok(self) -> bool:
        return self.worst is Severity.OK

    def all_issues(self) -> list[Issue]:
        """Whole-string issues followed by per-character issues in input order."""
        issues = list(self.issues)
        for finding in self.characters:
            issues.extend(finding.issues)
        return issues


def format_code_point(code_point: int) -> str:
    """Render a code point as U+XXXX (uppercase, at least four hex digits)."""
    return f"U+{code_point:04X}"
