"""End-to-end evaluate() contract tests, including the reference scenarios."""

from __future__ import annotations

from pathlib import Path
import sys

import pytest
from pydantic import ValidationError

PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from namecheck import DEFAULT_POLICY  # noqa: E402
from namecheck import CharacterFinding  # noqa: E402
from namecheck import Issue  # noqa: E402
from namecheck import Policy  # noqa: E402
from namecheck import Severity  # noqa: E402
from namecheck import StrictnessProfile  # noqa: E402
from namecheck import UnknownProfileError  # noqa: E402
from namecheck import aggregate  # noqa: E402
from namecheck import evaluate  # noqa: E402

PROFILES = list(StrictnessProfile)
INPUTS = [
    "",
    "ab",
    "FaZeNova",
    "Nova ",
    "\u00e9pic_god",
    "admin123",
    "Nove\u0301",
    "Ｎｏｖａ",
    "a\u200db\u0378c\uffff",
    "\ud800lone",
    "___",
    "  x  y  ",
    "\U0001F468\u200d\U0001F469\u200d\U0001F467 crew",
]


def _ids(issues) -> list[str]:
    return [issue.id for issue in issues]


@pytest.mark.parametrize("profile", PROFILES)
@pytest.mark.parametrize("value", INPUTS)
def test_original_is_preserved(value: str, profile: StrictnessProfile) -> None:
    """Input: any string -> Output: report.original is the exact input."""
    report = evaluate(value, profile)
    assert report.original == value
    assert len(report.characters) == len(value)
    assert report.profile is profile


@pytest.mark.parametrize("profile", PROFILES)
@pytest.mark.parametrize("value", INPUTS)
def test_worst_is_maximum_of_all_issues(value: str, profile: StrictnessProfile) -> None:
    report = evaluate(value, profile)
    expected = max((issue.severity for issue in report.all_issues()), default=Severity.OK)
    assert report.worst is expected


def test_none_is_treated_as_empty_string() -> None:
    report = evaluate(None)
    assert report.original == ""
    assert report.visible_length == 0
    assert _ids(report.issues) == ["len-min"]
    assert report.characters == ()
    assert report.sanitized == ""
    assert report.worst is Severity.ERROR


def test_scenario_two_letters_is_too_short() -> None:
    """Input: "ab" -> Output: len-min present, worst error."""
    report = evaluate("ab", StrictnessProfile.BALANCED)
    assert "len-min" in _ids(report.issues)
    assert report.worst is Severity.ERROR


@pytest.mark.parametrize("profile", PROFILES)
def test_scenario_plain_ascii_name_is_ok(profile: StrictnessProfile) -> None:
    """Input: "FaZeNova" -> Output: no issues, worst ok, for every profile."""
    report = evaluate("FaZeNova", profile)
    assert report.issues == ()
    assert all(finding.issues == () for finding in report.characters)
    assert report.worst is Severity.OK
    assert report.is_ok
    assert report.sanitized == "FaZeNova"
    assert report.visible_length == 8


def test_scenario_trailing_space() -> None:
    """Input: "Nova " -> Output: trailing-space warn, balanced suggestion "Nova"."""
    report = evaluate("Nova ", StrictnessProfile.BALANCED)
    issues = {issue.id: issue for issue in report.issues}
    assert issues["trailing-space"].severity is Severity.WARN
    assert report.sanitized == "Nova"
    assert report.worst is Severity.WARN


def test_scenario_accented_name_per_profile() -> None:
    """Input: "\u00e9pic_god" -> Output: clean under permissive, odd-0 under ultra-safe."""
    permissive = evaluate("\u00e9pic_god", StrictnessProfile.PERMISSIVE)
    assert all(
        issue.severity is not Severity.ERROR
        for finding in permissive.characters
        for issue in finding.issues
    )
    assert permissive.worst is Severity.OK

    ultra = evaluate("\u00e9pic_god", StrictnessProfile.ULTRA_SAFE)
    assert _ids(ultra.characters[0].issues) == ["odd-0"]
    assert ultra.characters[0].issues[0].severity is Severity.WARN
    assert ultra.sanitized == "pic_god"
    assert ultra.worst is Severity.WARN


@pytest.mark.parametrize("profile", PROFILES)
def test_scenario_impersonation(profile: StrictnessProfile) -> None:
    """Input: "admin123" -> Output: impersonation error regardless of profile."""
    report = evaluate("admin123", profile)
    assert "impersonation" in _ids(report.issues)
    assert report.worst is Severity.ERROR


def test_scenario_unassigned_and_noncharacter() -> None:
    """Input: unassigned U+0378 and noncharacter U+FFFF -> Output: per-character errors."""
    report = evaluate("ab\u0378cd\uffff", StrictnessProfile.PERMISSIVE)
    per_char = {issue.id: issue.severity for issue in report.all_issues()}
    assert per_char["unassigned-2"] is Severity.ERROR
    assert per_char["nonchar-5"] is Severity.ERROR
    assert report.worst is Severity.ERROR
    assert report.sanitized == "ab cd"


def test_report_carries_normal_forms_and_hex() -> None:
    report = evaluate("Nove\u0301", StrictnessProfile.BALANCED)
    assert report.nfc == "Nov\u00e9"
    assert report.nfkc == "Nov\u00e9"
    assert report.visible_length == 4
    assert [finding.hex for finding in report.characters] == [
        "U+004E",
        "U+006F",
        "U+0076",
        "U+0065",
        "U+0301",
    ]
    assert _ids(report.issues) == ["nfc", "nfkc"]


def test_sanitized_suggestion_is_built_from_nfkc() -> None:
    """Input: full-width letters -> Output: ASCII suggestion even under ultra-safe."""
    report = evaluate("Ｎｏｖａ", StrictnessProfile.ULTRA_SAFE)
    assert report.sanitized == "Nova"
    assert len(_ids(report.all_issues())) == 5


def test_profile_string_is_accepted() -> None:
    assert evaluate("Nova", "ultra-safe").profile is StrictnessProfile.ULTRA_SAFE
    assert evaluate("Nova", " Permissive ").profile is StrictnessProfile.PERMISSIVE


def test_unknown_profile_raises_value_error() -> None:
    with pytest.raises(UnknownProfileError):
        evaluate("Nova", "paranoid")
    with pytest.raises(ValueError):
        evaluate("Nova", "")


def test_custom_policy_changes_outcome() -> None:
    policy = Policy(reserved_terms=("nova",), max_visible_length=6)
    report = evaluate("NovaKing", StrictnessProfile.BALANCED, policy)
    assert _ids(report.issues) == ["len-max", "impersonation"]


def test_aggregate_folds_both_collections() -> None:
    warn = Issue(id="x", label="x", severity=Severity.WARN)
    error = Issue(id="y-0", label="y", severity=Severity.ERROR)
    clean = CharacterFinding(index=0, char="a", code_point=0x61)
    flagged = CharacterFinding(index=1, char="b", code_point=0x62, issues=(error,))

    assert aggregate([], []) is Severity.OK
    assert aggregate([clean], [warn]) is Severity.WARN
    assert aggregate([clean, flagged], []) is Severity.ERROR
    assert aggregate([clean], [warn, error]) is Severity.ERROR


def test_severity_is_ordinal() -> None:
    assert Severity.OK < Severity.WARN < Severity.ERROR
    assert max(Severity.WARN, Severity.OK) is Severity.WARN
    assert sorted([Severity.ERROR, Severity.OK, Severity.WARN]) == [
        Severity.OK,
        Severity.WARN,
        Severity.ERROR,
    ]


def test_policy_validation() -> None:
    """Input: inverted bounds / blank term -> Output: pydantic ValidationError."""
    with pytest.raises(ValidationError):
        Policy(min_visible_length=10, max_visible_length=5)
    with pytest.raises(ValidationError):
        Policy(reserved_terms=("admin", "  "))
    with pytest.raises(ValidationError):
        DEFAULT_POLICY.min_visible_length = 1  # type: ignore[misc]


def test_policy_emoji_allow_list_ignores_variation_selectors() -> None:
    code_points = DEFAULT_POLICY.safe_emoji_code_points
    assert "\u2b50" in code_points
    assert "\u26a1" in code_points
    assert "\U0001F525" in code_points
    assert len(code_points) == 18
