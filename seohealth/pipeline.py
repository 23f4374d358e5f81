"""End-to-end page analysis: fetch, evaluate, check links, measure, score."""

from __future__ import annotations

import asyncio
import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from .agents import (
    Agent,
    ContentFetchAgent,
    DemoContentAgent,
    LinkCheckAgent,
    PageSpeedAgent,
    extract_internal_links,
    run_async,
    summarise_link_checks,
)
from .config import AuditSettings, load_settings
from .document import DocumentQuery, parse_document
from .models import AnalysisResult, AnalysisStats, AuditRequest, FetchedPage, Issue, PerformanceReport
from .rules import evaluate
from .scoring import scorer_for
from .tracing import log_event, trace
from .utils.urls import normalise_url, validate_url

NOT_MEASURED = "Not measured"


def assemble_result(
    url: str,
    html_issues: Sequence[Issue],
    link_issues: Sequence[Issue] = (),
    performance: Optional[PerformanceReport] = None,
    *,
    scoring_mode: str = "severity",
    content_fallback: bool = False,
) -> AnalysisResult:
    """Merge issues in reporting order and reduce them to a score."""

    issues: List[Issue] = [*html_issues, *link_issues]
    if performance is not None:
        issues.extend(performance.issues)
        load_time, page_size_kb = performance.load_time, performance.page_size_kb
    else:
        load_time, page_size_kb = NOT_MEASURED, NOT_MEASURED

    return AnalysisResult(
        url=url,
        score=scorer_for(scoring_mode)(issues),
        issues=tuple(issues),
        stats=AnalysisStats(load_time=load_time, page_size_kb=page_size_kb, issues_found=len(issues)),
        content_fallback=content_fallback,
    )


class AnalysisPipeline:
    """Coordinate the collaborators around the rule evaluator and score reducer."""

    def __init__(
        self,
        settings: AuditSettings | None = None,
        *,
        fetcher: Agent[str, FetchedPage] | None = None,
        link_checker: LinkCheckAgent | None = None,
        performance: PageSpeedAgent | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.settings = settings or load_settings()
        self.logger = logger or logging.getLogger("pipeline")
        if fetcher is None and self.settings.demo_mode:
            fetcher = DemoContentAgent()
        self.fetcher = fetcher or ContentFetchAgent(timeout=self.settings.http_timeout)
        self.link_checker = link_checker or LinkCheckAgent(timeout=self.settings.http_timeout)
        self.performance = performance or PageSpeedAgent(
            self.settings.pagespeed_api_key,
            strategy=self.settings.pagespeed_strategy,
        )

    # ------------------------------------------------------------------
    def analyze(self, url: str) -> AnalysisResult:
        """Analyse the page at ``url``. Raises ``InvalidURLError`` for unusable URLs."""

        target = validate_url(normalise_url(url))
        with trace("analysis", logger=self.logger, url=target) as analysis:
            with trace("analysis.fetch", logger=self.logger, agent=self.fetcher.name) as fetch:
                page = self.fetcher.run(target)
                fetch.record(status_code=page.status_code, fallback=page.fallback, html_bytes=len(page.html))

            with trace("analysis.evaluate", logger=self.logger) as evaluation:
                document = parse_document(page.html)
                html_issues = evaluate(document, target)
                evaluation.record(issues=len(html_issues))

            link_issues, report = run_async(self._collect_external(document, target))

            result = assemble_result(
                target,
                html_issues,
                link_issues,
                report,
                scoring_mode=self.settings.scoring_mode,
                content_fallback=page.fallback,
            )
            analysis.record(score=result.score)
        self._log_result(result)
        return result

    def analyze_request(self, request: AuditRequest) -> AnalysisResult:
        """Analyse with the per-request overrides carried by ``request``."""

        overridden = self.settings.with_overrides(
            scoring_mode=request.scoring_mode,
            link_sample_size=request.link_sample_size,
            performance_enabled=request.performance,
        )
        pipeline = AnalysisPipeline(
            overridden,
            fetcher=self.fetcher,
            link_checker=self.link_checker,
            performance=self.performance,
            logger=self.logger,
        )
        return pipeline.analyze(request.url)

    def analyze_html(self, html: str, url: str) -> AnalysisResult:
        """Evaluate ``html`` offline: no link checks, no PageSpeed lookup."""

        document = parse_document(html)
        result = assemble_result(
            url,
            evaluate(document, url),
            scoring_mode=self.settings.scoring_mode,
        )
        self._log_result(result)
        return result

    # ------------------------------------------------------------------
    async def _collect_external(
        self, document: DocumentQuery, url: str
    ) -> Tuple[Tuple[Issue, ...], Optional[PerformanceReport]]:
        links = extract_internal_links(document, url, limit=self.settings.link_sample_size)
        log_event(self.logger, logging.DEBUG, "analysis.links.sampled", url=url, links=links)

        if self.settings.performance_enabled:
            outcomes, report = await asyncio.gather(
                self.link_checker.arun(links),
                self.performance.arun(url),
            )
        else:
            outcomes, report = await self.link_checker.arun(links), None
        return tuple(summarise_link_checks(outcomes)), report

    def _log_result(self, result: AnalysisResult) -> None:
        log_event(
            self.logger,
            logging.INFO,
            "analysis.result",
            url=result.url,
            score=result.score,
            issues=[issue.kind for issue in result.issues],
            content_fallback=result.content_fallback,
        )


def run_analysis(url: str, *, settings: AuditSettings | None = None) -> AnalysisResult:
    """Analyse ``url`` with default collaborators."""

    return AnalysisPipeline(settings).analyze(url)


def count_by_severity(issues: Iterable[Issue]) -> dict:
    counts = {"critical": 0, "warning": 0, "info": 0}
    for issue in issues:
        counts[issue.severity.value] += 1
    return counts


__all__ = ["AnalysisPipeline", "NOT_MEASURED", "assemble_result", "count_by_severity", "run_analysis"]
