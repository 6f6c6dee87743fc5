"""Client-side username checker: Unicode hazards, length and policy rules."""

from namecheck.evaluator import aggregate
from namecheck.evaluator import check_rules
from namecheck.evaluator import classify
from namecheck.evaluator import classify_characters
from namecheck.evaluator import count_visible
from namecheck.evaluator import evaluate
from namecheck.evaluator import is_noncharacter
from namecheck.evaluator import is_safe
from namecheck.evaluator import normalize
from namecheck.evaluator import sanitize
from namecheck.evaluator import to_nfc
from namecheck.evaluator import to_nfkc
from namecheck.models import CharacterFinding
from namecheck.models import EvaluationReport
from namecheck.models import Issue
from namecheck.models import Normalized
from namecheck.models import Severity
from namecheck.models import StrictnessProfile
from namecheck.models import UnknownProfileError
from namecheck.models import format_code_point
from namecheck.policy import DEFAULT_POLICY
from namecheck.policy import Policy

__all__ = [
    "DEFAULT_POLICY",
    "CharacterFinding",
    "EvaluationReport",
    "Issue",
    "Normalized",
    "Policy",
    "Severity",
    "StrictnessProfile",
    "UnknownProfileError",
    "aggregate",
    "check_rules",
    "classify",
    "classify_characters",
    "count_visible",
    "evaluate",
    "format_code_point",
    "is_noncharacter",
    "is_safe",
    "normalize",
    "sanitize",
    "to_nfc",
    "to_nfkc",
]
