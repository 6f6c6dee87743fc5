"""Report and session view builders used by REST responses."""

from __future__ import annotations

from namecheck import CharacterFinding
from namecheck import EvaluationReport
from namecheck import Issue

from app.session.service import Notice
from app.session.service import SessionView


def issue_view(issue: Issue) -> dict[str, object]:
    return {
        "id": issue.id,
        "label": issue.label,
        "severity": issue.severity.value,
        "hint": issue.hint,
    }


def character_view(finding: CharacterFinding) -> dict[str, object]:
    return {
        "index": finding.index,
        "char": finding.char,
        "code_point": finding.code_point,
        "hex": finding.hex,
        "issues": [issue_view(issue) for issue in finding.issues],
    }


def report_view(report: EvaluationReport) -> dict[str, object]:
    return {
        "original": report.original,
        "nfc": report.nfc,
        "nfkc": report.nfkc,
        "visible_length": report.visible_length,
        "profile": report.profile.value,
        "issues": [issue_view(issue) for issue in report.issues],
        "characters": [character_view(finding) for finding in report.characters],
        "worst": report.worst.value,
        "sanitized": report.sanitized,
    }


def notice_view(notice: Notice | None) -> dict[str, object] | None:
    if notice is None:
        return None
    return {"message": notice.message, "type": notice.type.value}


def session_view(view: SessionView) -> dict[str, object]:
    return {
        "value": view.value,
        "profile": view.report.profile.value,
        "report": report_view(view.report),
        "history": list(view.history),
        "notice": notice_view(view.notice),
    }
