"""Data models shared by the evaluator, the scorer and the collaborators."""

from __future__ import annotations

import dataclasses
import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

from .config import SCORING_MODES
from .utils.urls import InvalidURLError, normalise_url, validate_url


class Severity(str, Enum):
    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"


class IssueKind(str, Enum):
    """Closed taxonomy of findings. Values are stable identifiers for reports."""

    MISSING_TITLE = "MissingTitle"
    TITLE_LENGTH_OUT_OF_RANGE = "TitleLengthOutOfRange"
    MISSING_META_DESCRIPTION = "MissingMetaDescription"
    META_DESCRIPTION_LENGTH_OUT_OF_RANGE = "MetaDescriptionLengthOutOfRange"
    MISSING_H1 = "MissingH1"
    MULTIPLE_H1 = "MultipleH1"
    IMAGES_MISSING_ALT = "ImagesMissingAlt"
    MISSING_CANONICAL = "MissingCanonical"
    MISSING_VIEWPORT = "MissingViewport"
    MISSING_STRUCTURED_DATA = "MissingStructuredData"
    BROKEN_INTERNAL_LINKS = "BrokenInternalLinks"
    PERFORMANCE_SLOW = "PerformanceSlow"
    PERFORMANCE_LCP_SLOW = "PerformanceLCPSlow"
    PERFORMANCE_UNAVAILABLE = "PerformanceUnavailable"
    LINK_CHECK_UNAVAILABLE = "LinkCheckUnavailable"

    @property
    def severity(self) -> Severity:
        return _SEVERITY_BY_KIND[self]


_SEVERITY_BY_KIND: Dict[IssueKind, Severity] = {
    IssueKind.MISSING_TITLE: Severity.CRITICAL,
    IssueKind.TITLE_LENGTH_OUT_OF_RANGE: Severity.WARNING,
    IssueKind.MISSING_META_DESCRIPTION: Severity.CRITICAL,
    IssueKind.META_DESCRIPTION_LENGTH_OUT_OF_RANGE: Severity.WARNING,
    IssueKind.MISSING_H1: Severity.CRITICAL,
    IssueKind.MULTIPLE_H1: Severity.WARNING,
    IssueKind.IMAGES_MISSING_ALT: Severity.WARNING,
    IssueKind.MISSING_CANONICAL: Severity.WARNING,
    IssueKind.MISSING_VIEWPORT: Severity.WARNING,
    IssueKind.MISSING_STRUCTURED_DATA: Severity.INFO,
    IssueKind.BROKEN_INTERNAL_LINKS: Severity.CRITICAL,
    IssueKind.PERFORMANCE_SLOW: Severity.CRITICAL,
    IssueKind.PERFORMANCE_LCP_SLOW: Severity.WARNING,
    IssueKind.PERFORMANCE_UNAVAILABLE: Severity.WARNING,
    IssueKind.LINK_CHECK_UNAVAILABLE: Severity.WARNING,
}


class Serializable:
    """Mixin providing JSON serialisation for dataclasses."""

    __slots__ = ()

    def to_dict(self) -> Dict[str, Any]:
        """Convert the dataclass to a serialisable dictionary."""

        def _convert(value: Any) -> Any:
            if isinstance(value, Serializable):
                return value.to_dict()
            if dataclasses.is_dataclass(value):
                return {f.name: _convert(getattr(value, f.name)) for f in dataclasses.fields(value)}
            if isinstance(value, Enum):
                return value.value
            if isinstance(value, datetime):
                return value.isoformat()
            if isinstance(value, (list, tuple)):
                return [_convert(item) for item in value]
            if isinstance(value, dict):
                return {key: _convert(val) for key, val in value.items()}
            return value

        return {f.name: _convert(getattr(self, f.name)) for f in dataclasses.fields(self)}

    def to_json(self, path: Path) -> None:
        """Write the dataclass as JSON to the provided ``path``."""

        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(self.to_dict(), indent=2, ensure_ascii=False), encoding="utf-8")


@dataclass(frozen=True, slots=True)
class Issue(Serializable):
    kind: IssueKind
    title: str
    description: str
    guidance: str
    details: Optional[str] = None

    @property
    def severity(self) -> Severity:
        return self.kind.severity

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "severity": self.severity.value,
            "title": self.title,
            "description": self.description,
            "guidance": self.guidance,
            "details": self.details,
        }


@dataclass(frozen=True, slots=True)
class AnalysisStats(Serializable):
    load_time: str
    page_size_kb: int | str
    issues_found: int


@dataclass(frozen=True, slots=True)
class AnalysisResult(Serializable):
    url: str
    score: int
    issues: Tuple[Issue, ...]
    stats: AnalysisStats
    content_fallback: bool = False
    analysed_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def issues_by_severity(self, severity: Severity) -> Tuple[Issue, ...]:
        return tuple(issue for issue in self.issues if issue.severity is severity)


@dataclass(frozen=True, slots=True)
class FetchedPage(Serializable):
    url: str
    status_code: int
    html: str
    fallback: bool = False
    note: Optional[str] = None


@dataclass(frozen=True, slots=True)
class LinkCheckOutcome(Serializable):
    url: str
    ok: bool
    status: int
    status_text: str
    error: Optional[str] = None

    @property
    def broken(self) -> bool:
        return not self.ok and self.status >= 400

    @property
    def failed(self) -> bool:
        """True when the check itself could not be carried out."""

        return self.error is not None


@dataclass(frozen=True, slots=True)
class PerformanceReport(Serializable):
    available: bool
    load_time: str
    page_size_kb: int | str
    issues: Tuple[Issue, ...] = ()
    error: Optional[str] = None


class AuditRequest(BaseModel):
    """A validated request to analyse one page, shared by the CLI and the API."""

    url: str = Field(..., description="Page URL; https:// is assumed when no scheme is given")
    scoring_mode: str | None = Field(default=None, description="'severity' or 'pipeline'")
    link_sample_size: int | None = Field(default=None, ge=0, le=50)
    performance: bool | None = Field(default=None, description="Query PageSpeed Insights")

    @field_validator("url", mode="before")
    @classmethod
    def _normalise_url(cls, value: str | None) -> str:
        try:
            return validate_url(normalise_url(value))
        except InvalidURLError as exc:
            raise ValueError(str(exc)) from exc

    @field_validator("scoring_mode", mode="before")
    @classmethod
    def _normalise_scoring(cls, value: str | None) -> str | None:
        if value is None:
            return None
        candidate = str(value).strip().lower()
        if candidate not in SCORING_MODES:
            raise ValueError(
                f"Unsupported scoring_mode '{value}'. Expected one of: {', '.join(SCORING_MODES)}."
            )
        return candidate


__all__ = [
    "AnalysisResult",
    "AnalysisStats",
    "AuditRequest",
    "FetchedPage",
    "Issue",
    "IssueKind",
    "LinkCheckOutcome",
    "PerformanceReport",
    "Serializable",
    "Severity",
]
