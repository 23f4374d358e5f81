"""SEO health check: on-page rule evaluation and scoring for a single URL."""

from .config import AuditSettings, load_settings
from .document import DocumentQuery, ElementHandle, SoupDocument, parse_document
from .logging_config import configure_logging
from .models import AnalysisResult, AnalysisStats, AuditRequest, Issue, IssueKind, Severity
from .pipeline import AnalysisPipeline, assemble_result, run_analysis
from .rules import evaluate
from .scoring import pipeline_score, score
from .utils.urls import InvalidURLError

__version__ = "1.0.0"

__all__ = [
    "AnalysisPipeline",
    "AnalysisResult",
    "AnalysisStats",
    "AuditRequest",
    "AuditSettings",
    "DocumentQuery",
    "ElementHandle",
    "InvalidURLError",
    "Issue",
    "IssueKind",
    "Severity",
    "SoupDocument",
    "assemble_result",
    "configure_logging",
    "evaluate",
    "load_settings",
    "parse_document",
    "pipeline_score",
    "run_analysis",
    "score",
]
