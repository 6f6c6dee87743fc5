"""Username evaluation engine.

The pipeline is a pure function of ``(raw, profile, policy)``:

    normalize -> classify every code point + whole-string rules
              -> aggregate worst severity -> sanitize the NFKC form

Findings are returned as ``Issue`` entries inside the report; nothing here
raises for string input.
"""

from __future__ import annotations

from collections.abc import Callable
from collections.abc import Iterable
import logging
import unicodedata

import regex

from namecheck.models import CharacterFinding
from namecheck.models import EvaluationReport
from namecheck.models import Issue
from namecheck.models import Normalized
from namecheck.models import Severity
from namecheck.models import StrictnessProfile
from namecheck.policy import DEFAULT_POLICY
from namecheck.policy import Policy

logger = logging.getLogger(__name__)

Segmenter = Callable[[str], Iterable[str]]

_GRAPHEME_PATTERN = regex.compile(r"\X")
_WHITESPACE_RUN = regex.compile(r"\s+")
_LEADING_WHITESPACE = regex.compile(r"\A\s")
_TRAILING_WHITESPACE = regex.compile(r"\s\Z")
_MULTI_WHITESPACE = regex.compile(r"\s{2,}")
_ONLY_SPECIAL = regex.compile(r"[_.\-]+")
_ULTRA_SAFE_CHAR = regex.compile(r"[A-Za-z0-9_]")

_ASCII_EXTENDED_SAFE = frozenset(
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
    " _.!@#$%^&*()+={}|:;\"'<>,?/~`-"
)
_MATH_SAFE = frozenset("×÷±≈≠≤≥∞√∑∫∏")
_SHAPE_SAFE = frozenset("←→↑↓↔↕⇐⇒⇑⇓⇔⇕◀▶▲▼■□●○★☆♦♠♥♣")

_CONTROL_OR_FORMAT = frozenset({"Cc", "Cf"})
_LETTER_NUMBER_MARK = frozenset("LNM")


_unicode_normalize = unicodedata.normalize


def _segment_graphemes(value: str) -> list[str]:
    return _GRAPHEME_PATTERN.findall(value)


# ---------------------------------------------------------------------------
# Normalizer
# ---------------------------------------------------------------------------


def _normalize_form(form: str, value: str) -> str:
    try:
        return _unicode_normalize(form, value)
    except (TypeError, ValueError):
        logger.debug("unicode %s normalization failed; keeping input unchanged", form)
        return value


def to_nfc(value: str) -> str:
    """Canonical composition, or the input itself when normalization fails."""
    return _normalize_form("NFC", value)


def to_nfkc(value: str) -> str:
    """Compatibility composition, or the input itself when normalization fails."""
    return _normalize_form("NFKC", value)


def count_visible(value: str, segmenter: Segmenter | None = _segment_graphemes) -> int:
    """Count user-perceived characters.

    Extended grapheme clusters are counted with ``segmenter``. When no
    segmenter is available, or it fails, code points are counted instead;
    that overcounts emoji sequences and flags.
    """
    if segmenter is not None:
        try:
            return sum(1 for _ in segmenter(value))
        except (TypeError, ValueError, regex.error):
            logger.debug("grapheme segmentation failed; counting code points")
    return len(value)


def normalize(
    value: str,
    policy: Policy | None = None,
    *,
    segmenter: Segmenter | None = _segment_graphemes,
) -> Normalized:
    """Return NFC/NFKC forms and the visible length of ``value``."""
    policy = policy or DEFAULT_POLICY
    if not policy.grapheme_segmentation:
        segmenter = None
    return Normalized(
        nfc=to_nfc(value),
        nfkc=to_nfkc(value),
        visible_length=count_visible(value, segmenter),
    )


# ---------------------------------------------------------------------------
# Classifier and profile membership
# ---------------------------------------------------------------------------


def is_noncharacter(code_point: int) -> bool:
    """U+FDD0..U+FDEF plus the last two code points of every plane."""
    if 0xFDD0 <= code_point <= 0xFDEF:
        return True
    return (code_point & 0xFFFF) in (0xFFFE, 0xFFFF)


def is_hazardous(char: str) -> bool:
    """True for control/format, surrogate, private-use, unassigned or noncharacter."""
    category = unicodedata.category(char)
    if category in _CONTROL_OR_FORMAT or category in ("Cs", "Co", "Cn"):
        return True
    return is_noncharacter(ord(char))


def is_ultra_safe(char: str) -> bool:
    return _ULTRA_SAFE_CHAR.fullmatch(char) is not None


def is_extended_safe(char: str, policy: Policy | None = None) -> bool:
    """Curated ASCII punctuation, math symbols, arrows/shapes and emoji."""
    policy = policy or DEFAULT_POLICY
    return (
        char in _ASCII_EXTENDED_SAFE
        or char in _MATH_SAFE
        or char in _SHAPE_SAFE
        or char in policy.safe_emoji_code_points
    )


def is_safe(
    char: str,
    profile: StrictnessProfile | str,
    policy: Policy | None = None,
) -> bool:
    """Whether one code point belongs to the profile's safe set."""
    profile = StrictnessProfile.parse(profile)
    if profile is StrictnessProfile.ULTRA_SAFE:
        return is_ultra_safe(char)
    if profile is StrictnessProfile.BALANCED:
        return unicodedata.category(char)[0] in _LETTER_NUMBER_MARK or is_extended_safe(char, policy)
    return not is_hazardous(char)


def classify(
    char: str,
    index: int,
    profile: StrictnessProfile | str,
    policy: Policy | None = None,
) -> tuple[Issue, ...]:
    """Return every issue raised by one code point at position ``index``."""
    code_point = ord(char)
    category = unicodedata.category(char)
    issues: list[Issue] = []

    if category in _CONTROL_OR_FORMAT:
        issues.append(
            Issue(
                id=f"ctrl-{index}",
                label="control/format character",
                severity=Severity.ERROR,
                hint="Avoid zero-width joiners, line breaks and similar invisible characters.",
            )
        )
    if category == "Cs":
        issues.append(
            Issue(
                id=f"sur-{index}",
                label="isolated UTF-16 surrogate",
                severity=Severity.ERROR,
                hint="Invalid lone surrogate.",
            )
        )
    if category == "Co":
        issues.append(
            Issue(
                id=f"pua-{index}",
                label="private-use character",
                severity=Severity.WARN,
                hint="May render as '?' depending on the platform.",
            )
        )
    if category == "Cn":
        issues.append(
            Issue(
                id=f"unassigned-{index}",
                label="unassigned code point",
                severity=Severity.ERROR,
                hint="High risk of rendering as '?'.",
            )
        )
    if is_noncharacter(code_point):
        issues.append(
            Issue(
                id=f"nonchar-{index}",
                label="reserved noncharacter",
                severity=Severity.ERROR,
                hint="Reserved by Unicode, do not use.",
            )
        )
    if not is_safe(char, profile, policy):
        issues.append(
            Issue(
                id=f"odd-{index}",
                label="symbol may not be supported (conservative mode)",
                severity=Severity.WARN,
                hint="For maximum compatibility stick to letters, digits, _ . - and space.",
            )
        )
    return tuple(issues)


def classify_characters(
    value: str,
    profile: StrictnessProfile | str,
    policy: Policy | None = None,
) -> tuple[CharacterFinding, ...]:
    """One finding per code point, in input order."""
    return tuple(
        CharacterFinding(
            index=index,
            char=char,
            code_point=ord(char),
            issues=classify(char, index, profile, policy),
        )
        for index, char in enumerate(value)
    )


# ---------------------------------------------------------------------------
# Rule engine
# ---------------------------------------------------------------------------


def check_rules(
    original: str,
    normalized: Normalized,
    policy: Policy | None = None,
) -> tuple[Issue, ...]:
    """Whole-string checks; every rule runs regardless of earlier findings."""
    policy = policy or DEFAULT_POLICY
    issues: list[Issue] = []

    if normalized.visible_length < policy.min_visible_length:
        issues.append(
            Issue(
                id="len-min",
                label=f"fewer than {policy.min_visible_length} visible characters",
                severity=Severity.ERROR,
                hint=f"Lengthen the name to at least {policy.min_visible_length} characters.",
            )
        )
    if normalized.visible_length > policy.max_visible_length:
        issues.append(
            Issue(
                id="len-max",
                label=f"more than {policy.max_visible_length} visible characters",
                severity=Severity.ERROR,
                hint=f"Shorten the name to at most {policy.max_visible_length} characters.",
            )
        )

    if _LEADING_WHITESPACE.search(original):
        issues.append(
            Issue(
                id="leading-space",
                label="leading whitespace",
                severity=Severity.WARN,
                hint="Avoid spaces at the start.",
            )
        )
    if _TRAILING_WHITESPACE.search(original):
        issues.append(
            Issue(
                id="trailing-space",
                label="trailing whitespace",
                severity=Severity.WARN,
                hint="Avoid spaces at the end.",
            )
        )
    if _MULTI_WHITESPACE.search(original):
        issues.append(
            Issue(
                id="multi-space",
                label="consecutive whitespace",
                severity=Severity.WARN,
                hint="Replace with a single space.",
            )
        )

    if original != normalized.nfc:
        issues.append(
            Issue(
                id="nfc",
                label="normalization would change the name",
                severity=Severity.WARN,
                hint="Use the NFC form to avoid equality surprises.",
            )
        )
    if original != normalized.nfkc:
        issues.append(
            Issue(
                id="nfkc",
                label="compatibility normalization would simplify characters",
                severity=Severity.WARN,
                hint="Styled letters (bold, double-struck, full-width) will be flattened.",
            )
        )

    if _ONLY_SPECIAL.fullmatch(original):
        issues.append(
            Issue(
                id="only-special",
                label="name made only of special characters",
                severity=Severity.WARN,
                hint="Add letters or digits.",
            )
        )

    reserved = policy.reserved_prefix_pattern
    if reserved is not None and reserved.match(original):
        issues.append(
            Issue(
                id="impersonation",
                label="impersonation risk",
                severity=Severity.ERROR,
                hint="Avoid official or staff terms at the start of the name.",
            )
        )
    return tuple(issues)


# ---------------------------------------------------------------------------
# Sanitizer
# ---------------------------------------------------------------------------


def sanitize(
    value: str,
    profile: StrictnessProfile | str,
    policy: Policy | None = None,
) -> str:
    """Replace unsafe code points with spaces, collapse whitespace and trim."""
    profile = StrictnessProfile.parse(profile)
    if profile is StrictnessProfile.ULTRA_SAFE:
        kept = "".join(char if is_ultra_safe(char) else " " for char in value)
    else:
        kept = "".join(char if is_safe(char, profile, policy) else " " for char in value)
    return _WHITESPACE_RUN.sub(" ", kept).strip(" ")


# ---------------------------------------------------------------------------
# Aggregator
# ---------------------------------------------------------------------------


def aggregate(
    characters: Iterable[CharacterFinding],
    issues: Iterable[Issue],
) -> Severity:
    """Worst severity over per-character and whole-string issues."""
    worst = Severity.OK
    for finding in characters:
        for issue in finding.issues:
            worst = max(worst, issue.severity)
    for issue in issues:
        worst = max(worst, issue.severity)
    return worst


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def evaluate(
    raw: str | None,
    profile: StrictnessProfile | str = StrictnessProfile.BALANCED,
    policy: Policy | None = None,
) -> EvaluationReport:
    """Evaluate one candidate name under ``profile``.

    Raises ``UnknownProfileError`` only for an unrecognised profile name;
    every problem with the name itself is reported as an ``Issue``.
    """
    profile = StrictnessProfile.parse(profile)
    policy = policy or DEFAULT_POLICY
    original = raw if raw is not None else ""

    normalized = normalize(original, policy)
    characters = classify_characters(original, profile, policy)
    issues = check_rules(original, normalized, policy)
    worst = aggregate(characters, issues)
    sanitized = sanitize(normalized.nfkc, profile, policy)

    logger.debug(
        "evaluated name profile=%s length=%d worst=%s",
        profile.value,
        normalized.visible_length,
        worst.value,
    )
    return EvaluationReport(
        original=original,
        nfc=normalized.nfc,
        nfkc=normalized.nfkc,
        visible_length=normalized.visible_length,
        profile=profile,
        issues=issues,
        characters=characters,
        worst=worst,
        sanitized=sanitized,
    )
