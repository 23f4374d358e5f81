"""Google PageSpeed Insights client and result normalisation."""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, List, Mapping, Optional

import httpx

from .common import AsyncAgent
from ..issues import make_issue
from ..models import Issue, IssueKind, PerformanceReport
from ..tracing import log_event

PAGESPEED_ENDPOINT = "https://www.googleapis.com/pagespeedonline/v5/runPagespeed"
SERVICE_UNAVAILABLE = "Service Unavailable"
SLOW_SCORE_THRESHOLD = 0.5


def unavailable_payload(error: str) -> Dict[str, Any]:
    """Sentinel returned in place of a PageSpeed response when the call fails."""

    return {
        "lighthouseResult": {
            "audits": {
                "speed-index": {"displayValue": SERVICE_UNAVAILABLE, "score": None},
                "total-byte-weight": {"numericValue": 0},
                "largest-contentful-paint": {"score": None},
            }
        },
        "_serviceStatus": "unavailable",
        "_error": error,
    }


def is_unavailable(payload: Mapping[str, Any]) -> bool:
    return payload.get("_serviceStatus") == "unavailable"


def _section(container: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    value = container.get(name)
    return value if isinstance(value, Mapping) else {}


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and math.isfinite(value)


def _is_slow(audit: Mapping[str, Any]) -> bool:
    score = audit.get("score")
    return isinstance(score, (int, float)) and score < SLOW_SCORE_THRESHOLD


def normalise_pagespeed(payload: Mapping[str, Any]) -> PerformanceReport:
    """Reduce a PageSpeed response (or the unavailable sentinel) to a report."""

    if is_unavailable(payload):
        error = payload.get("_error")
        return PerformanceReport(
            available=False,
            load_time=SERVICE_UNAVAILABLE,
            page_size_kb=SERVICE_UNAVAILABLE,
            issues=(make_issue(IssueKind.PERFORMANCE_UNAVAILABLE, details=error or None),),
            error=error or None,
        )

    audits = _section(_section(payload, "lighthouseResult"), "audits")
    speed_index = _section(audits, "speed-index")
    lcp = _section(audits, "largest-contentful-paint")
    byte_weight = _section(audits, "total-byte-weight").get("numericValue")

    load_time = speed_index.get("displayValue") or "Unknown"
    page_size_kb = math.floor(byte_weight / 1024 + 0.5) if _is_number(byte_weight) else 0

    issues: List[Issue] = []
    if _is_slow(speed_index):
        issues.append(make_issue(IssueKind.PERFORMANCE_SLOW, load_time=load_time))
    if _is_slow(lcp):
        issues.append(make_issue(IssueKind.PERFORMANCE_LCP_SLOW))

    return PerformanceReport(
        available=True,
        load_time=str(load_time),
        page_size_kb=page_size_kb,
        issues=tuple(issues),
    )


class PageSpeedAgent(AsyncAgent[str, PerformanceReport]):
    """Query PageSpeed Insights for a URL."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        strategy: str = "desktop",
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        super().__init__(name="Performance.PageSpeed")
        self._api_key = api_key
        self._strategy = strategy
        self._timeout = timeout
        self._transport = transport

    async def fetch_payload(self, url: str) -> Dict[str, Any]:
        """Return the raw PageSpeed response, or the unavailable sentinel."""

        params = {"url": url, "strategy": self._strategy}
        if self._api_key:
            params["key"] = self._api_key
        log_event(
            self.logger, logging.INFO, "pagespeed.request", agent=self.name, url=url, strategy=self._strategy
        )
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as http:
                response = await http.get(PAGESPEED_ENDPOINT, params=params)
                response.raise_for_status()
                data = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            log_event(
                self.logger,
                logging.ERROR,
                "pagespeed.unavailable",
                agent=self.name,
                url=url,
                error=str(exc),
                exception=exc.__class__.__name__,
                exc_info=True,
            )
            return unavailable_payload(f"PageSpeed API request failed: {exc}")

        if not isinstance(data, dict):
            return unavailable_payload("PageSpeed API returned an unexpected payload")
        return data

    async def arun(self, url: str) -> PerformanceReport:
        report = normalise_pagespeed(await self.fetch_payload(url))
        log_event(
            self.logger,
            logging.INFO,
            "pagespeed.report",
            agent=self.name,
            url=url,
            available=report.available,
            load_time=report.load_time,
            page_size_kb=report.page_size_kb,
            issues=[issue.kind for issue in report.issues],
        )
        return report


__all__ = [
    "PAGESPEED_ENDPOINT",
    "PageSpeedAgent",
    "SERVICE_UNAVAILABLE",
    "is_unavailable",
    "normalise_pagespeed",
    "unavailable_payload",
]
