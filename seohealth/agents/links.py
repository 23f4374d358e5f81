"""Internal link sampling and liveness checks."""

from __future__ import annotations

import asyncio
import logging
from typing import List, Optional, Sequence, Tuple

import httpx

from .common import AsyncAgent
from ..document import DocumentQuery
from ..http import USER_AGENT
from ..issues import make_issue
from ..models import Issue, IssueKind, LinkCheckOutcome
from ..tracing import log_event
from ..utils.urls import resolve_internal

DEFAULT_SAMPLE_SIZE = 5
DETAILS_LIMIT = 3
UNAVAILABLE_ERROR = "Link checking service is unavailable - unable to verify link validity"


def extract_internal_links(
    document: DocumentQuery, page_url: str, limit: int = DEFAULT_SAMPLE_SIZE
) -> List[str]:
    """Return up to ``limit`` distinct same-host links in document order."""

    links: List[str] = []
    for anchor in document.find_all("a[href]"):
        if len(links) >= limit:
            break
        absolute = resolve_internal(anchor.attribute("href") or "", page_url)
        if absolute and absolute not in links:
            links.append(absolute)
    return links


def summarise_link_checks(outcomes: Sequence[LinkCheckOutcome]) -> List[Issue]:
    """Turn check outcomes into at most one issue."""

    if not outcomes:
        return []
    if all(outcome.failed for outcome in outcomes):
        return [make_issue(IssueKind.LINK_CHECK_UNAVAILABLE, error=UNAVAILABLE_ERROR)]
    broken = [outcome.url for outcome in outcomes if outcome.broken]
    if broken:
        return [
            make_issue(
                IssueKind.BROKEN_INTERNAL_LINKS,
                count=len(broken),
                details=", ".join(broken[:DETAILS_LIMIT]),
            )
        ]
    return []


class LinkCheckAgent(AsyncAgent[Sequence[str], Tuple[LinkCheckOutcome, ...]]):
    """HEAD-check a sample of links concurrently."""

    def __init__(
        self,
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        super().__init__(name="Links.Check")
        self._timeout = timeout
        self._transport = transport

    async def _check(self, http: httpx.AsyncClient, url: str) -> LinkCheckOutcome:
        try:
            response = await http.head(url)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            # httpx.InvalidURL does not derive from HTTPError.
            log_event(
                self.logger,
                logging.WARNING,
                "links.check.error",
                agent=self.name,
                url=url,
                error=str(exc),
                exception=exc.__class__.__name__,
            )
            return LinkCheckOutcome(
                url=url,
                ok=False,
                status=0,
                status_text="Invalid URL" if isinstance(exc, httpx.InvalidURL) else "Network error",
                error=str(exc) or exc.__class__.__name__,
            )
        return LinkCheckOutcome(
            url=url,
            ok=response.is_success,
            status=response.status_code,
            status_text=response.reason_phrase,
        )

    async def arun(self, urls: Sequence[str]) -> Tuple[LinkCheckOutcome, ...]:
        if not urls:
            return ()
        async with httpx.AsyncClient(
            timeout=self._timeout,
            follow_redirects=True,
            headers={"User-Agent": f"{USER_AGENT} (Link Checker)"},
            transport=self._transport,
        ) as http:
            outcomes = await asyncio.gather(*(self._check(http, url) for url in urls))
        log_event(
            self.logger,
            logging.INFO,
            "links.checked",
            agent=self.name,
            checked=len(outcomes),
            broken=sum(1 for outcome in outcomes if outcome.broken),
            failed=sum(1 for outcome in outcomes if outcome.failed),
        )
        return tuple(outcomes)


__all__ = [
    "DEFAULT_SAMPLE_SIZE",
    "LinkCheckAgent",
    "extract_internal_links",
    "summarise_link_checks",
]
