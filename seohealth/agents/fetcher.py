"""Page retrieval strategies."""

from __future__ import annotations

import html
import logging
from typing import Callable

import requests

from .common import Agent
from ..http import HttpResponse, get
from ..models import FetchedPage
from ..tracing import log_event
from ..utils.urls import hostname_of

FALLBACK_NOTE = "Fallback content - original site content unavailable"

_FALLBACK_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Content Unavailable - {host}</title>
    <meta name="description" content="Content could not be retrieved from this URL for SEO analysis.">
</head>
<body>
    <h1>Content Unavailable</h1>
    <p>The content from {url} could not be retrieved for analysis.</p>
    <p>This may be due to network restrictions, CORS policies, or the site being unavailable.</p>
    <img src="placeholder.jpg" alt="Placeholder image">
    <img src="example.jpg">
</body>
</html>
"""

_DEMO_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Demo Store - {host}</title>
    <link rel="canonical" href="{url}">
</head>
<body>
    <h1>Welcome to the demo store</h1>
    <h1>Featured products</h1>
    <img src="/img/hero.jpg" alt="Storefront">
    <img src="/img/product-1.jpg">
    <img src="/img/product-2.jpg" alt="">
</body>
</html>
"""


def fallback_html(url: str) -> str:
    """Stand-in document analysed when the real page cannot be retrieved."""

    return _FALLBACK_TEMPLATE.format(host=html.escape(hostname_of(url)), url=html.escape(url))


class ContentFetchAgent(Agent[str, FetchedPage]):
    """Fetch a page over HTTP, substituting fallback content on failure."""

    def __init__(self, timeout: float = 20.0, http_get: Callable[..., HttpResponse] | None = None) -> None:
        super().__init__(name="Fetch.Content")
        self._timeout = timeout
        self._get = http_get or get

    def _fallback(self, url: str, reason: str) -> FetchedPage:
        log_event(self.logger, logging.WARNING, "fetch.fallback", agent=self.name, url=url, reason=reason)
        return FetchedPage(url=url, status_code=200, html=fallback_html(url), fallback=True, note=FALLBACK_NOTE)

    def run(self, url: str) -> FetchedPage:
        try:
            response = self._get(url, timeout=self._timeout)
        except requests.RequestException as exc:
            log_event(
                self.logger,
                logging.ERROR,
                "fetch.error",
                agent=self.name,
                url=url,
                error=str(exc),
                exception=exc.__class__.__name__,
                exc_info=True,
            )
            return self._fallback(url, reason=str(exc))

        if not response.ok:
            reason = f"Failed to fetch content: {response.status_code} {response.reason}"
            return self._fallback(url, reason=reason.strip())

        log_event(
            self.logger,
            logging.INFO,
            "fetch.ok",
            agent=self.name,
            url=response.url,
            status_code=response.status_code,
        )
        return FetchedPage(url=response.url, status_code=response.status_code, html=response.text)


class DemoContentAgent(Agent[str, FetchedPage]):
    """Serve a canned page without touching the network."""

    def __init__(self) -> None:
        super().__init__(name="Fetch.Demo")

    def run(self, url: str) -> FetchedPage:
        log_event(self.logger, logging.INFO, "fetch.demo", agent=self.name, url=url)
        page = _DEMO_TEMPLATE.format(host=html.escape(hostname_of(url)), url=html.escape(url, quote=True))
        return FetchedPage(url=url, status_code=200, html=page, note="Demo content")


__all__ = ["ContentFetchAgent", "DemoContentAgent", "FALLBACK_NOTE", "fallback_html"]
