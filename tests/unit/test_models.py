"""Tests for :mod:`seohealth.models`."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from seohealth.issues import make_issue
from seohealth.models import (
    AnalysisResult,
    AnalysisStats,
    AuditRequest,
    IssueKind,
    LinkCheckOutcome,
    Severity,
)


@pytest.fixture
def result() -> AnalysisResult:
    issues = (make_issue(IssueKind.MISSING_TITLE), make_issue(IssueKind.MISSING_STRUCTURED_DATA))
    return AnalysisResult(
        url="https://oakline.example/",
        score=82,
        issues=issues,
        stats=AnalysisStats(load_time="1.2 s", page_size_kb=48, issues_found=len(issues)),
    )


def test_result_to_dict_is_json_ready(result: AnalysisResult) -> None:
    """Given an analysis result When to_dict is called Then nested values become plain types."""

    payload = result.to_dict()

    assert payload["score"] == 82
    assert payload["issues"][0]["kind"] == "MissingTitle"
    assert payload["issues"][1]["severity"] == "info"
    assert payload["stats"] == {"load_time": "1.2 s", "page_size_kb": 48, "issues_found": 2}
    assert isinstance(payload["analysed_at"], str)
    json.dumps(payload)


def test_result_to_json_writes_file(result: AnalysisResult, tmp_path: Path) -> None:
    """Given a target path When to_json is called Then parent folders are created and JSON is written."""

    target = tmp_path / "reports" / "result.json"

    result.to_json(target)

    data = json.loads(target.read_text(encoding="utf-8"))
    assert data["url"] == "https://oakline.example/"
    assert data["content_fallback"] is False


def test_issues_by_severity_filters(result: AnalysisResult) -> None:
    """Given mixed severities When filtering Then only matching issues are returned."""

    critical = result.issues_by_severity(Severity.CRITICAL)

    assert [issue.kind for issue in critical] == [IssueKind.MISSING_TITLE]
    assert result.issues_by_severity(Severity.WARNING) == ()


def test_link_outcome_flags() -> None:
    """Given link outcomes When inspected Then broken and failed are derived from status and error."""

    broken = LinkCheckOutcome(url="u", ok=False, status=404, status_text="Not Found")
    redirected = LinkCheckOutcome(url="u", ok=False, status=301, status_text="Moved")
    failed = LinkCheckOutcome(url="u", ok=False, status=0, status_text="Network error", error="refused")

    assert broken.broken and not broken.failed
    assert not redirected.broken
    assert failed.failed and not failed.broken


def test_audit_request_assumes_https() -> None:
    """Given a bare host When building an AuditRequest Then https is assumed."""

    request = AuditRequest(url="  oakline.example/shop ")

    assert request.url == "https://oakline.example/shop"
    assert request.scoring_mode is None


def test_audit_request_normalises_scoring_mode() -> None:
    """Given a mixed-case scoring mode When validated Then it is lower-cased."""

    request = AuditRequest(url="https://oakline.example", scoring_mode=" Pipeline ")

    assert request.scoring_mode == "pipeline"


@pytest.mark.parametrize(
    "payload",
    [
        {"url": ""},
        {"url": "https://"},
        {"url": "ftp://oakline.example"},
        {"url": "https://oakline.example", "scoring_mode": "lenient"},
        {"url": "https://oakline.example", "link_sample_size": -1},
    ],
)
def test_audit_request_rejects_invalid_input(payload) -> None:
    """Given invalid request data When validated Then a ValidationError is raised."""

    with pytest.raises(ValidationError):
        AuditRequest(**payload)
