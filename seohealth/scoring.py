"""Reduce a list of issues to a 0-100 health score."""

from __future__ import annotations

from typing import Callable, Dict, Iterable, Mapping

from .models import Issue, IssueKind, Severity

MAX_SCORE = 100

SEVERITY_PENALTIES: Mapping[Severity, int] = {
    Severity.CRITICAL: 15,
    Severity.WARNING: 8,
    Severity.INFO: 3,
}

# Flat penalties the whole-page pipeline charges for collaborator findings,
# regardless of severity. HTML findings fall back to SEVERITY_PENALTIES.
PIPELINE_PENALTIES: Mapping[IssueKind, int] = {
    IssueKind.PERFORMANCE_SLOW: 10,
    IssueKind.PERFORMANCE_LCP_SLOW: 10,
    IssueKind.PERFORMANCE_UNAVAILABLE: 10,
    IssueKind.BROKEN_INTERNAL_LINKS: 12,
    IssueKind.LINK_CHECK_UNAVAILABLE: 10,
}


def _clamp(value: int) -> int:
    return max(0, value)


def score(issues: Iterable[Issue]) -> int:
    """Severity-weighted score: critical -15, warning -8, info -3, floored at 0."""

    total = MAX_SCORE
    for issue in issues:
        total -= SEVERITY_PENALTIES[issue.severity]
    return _clamp(total)


def pipeline_score(issues: Iterable[Issue]) -> int:
    """Score with the pipeline's flat penalties for link and performance findings.

    On-page findings keep their severity weights, so MissingStructuredData
    still costs the info weight of 3 points in this mode.
    """

    total = MAX_SCORE
    for issue in issues:
        penalty = PIPELINE_PENALTIES.get(issue.kind)
        total -= penalty if penalty is not None else SEVERITY_PENALTIES[issue.severity]
    return _clamp(total)


SCORERS: Dict[str, Callable[[Iterable[Issue]], int]] = {
    "severity": score,
    "pipeline": pipeline_score,
}


def scorer_for(mode: str) -> Callable[[Iterable[Issue]], int]:
    try:
        return SCORERS[mode]
    except KeyError:
        raise ValueError(f"Unknown scoring mode '{mode}'") from None


__all__ = [
    "MAX_SCORE",
    "PIPELINE_PENALTIES",
    "SCORERS",
    "SEVERITY_PENALTIES",
    "pipeline_score",
    "score",
    "scorer_for",
]
