"""Shared pytest fixtures for the SEO health check test-suite."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Callable, Dict, List

import sys

import httpx
import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from seohealth.agents.common import Agent
from seohealth.config import AuditSettings
from seohealth.models import FetchedPage


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the root directory containing reusable fixture files."""

    return Path(__file__).parent / "fixtures"


@pytest.fixture
def html_loader(fixtures_dir: Path) -> Callable[[str], str]:
    """Return a callable that loads HTML fixture files by name."""

    def _load(name: str) -> str:
        path = fixtures_dir / "html" / name
        return path.read_text(encoding="utf-8")

    return _load


@pytest.fixture
def optimized_html(html_loader: Callable[[str], str]) -> str:
    """A page that passes every on-page rule."""

    return html_loader("optimized.html")


@pytest.fixture
def settings() -> AuditSettings:
    """Settings with defaults only, independent of the environment."""

    return AuditSettings()


class StaticFetchAgent(Agent[str, FetchedPage]):
    """Fetcher returning fixed HTML and remembering the requested URLs."""

    def __init__(self, html: str, *, fallback: bool = False) -> None:
        super().__init__(name="Fetch.Static")
        self.html = html
        self.fallback = fallback
        self.requested: List[str] = []

    def run(self, url: str) -> FetchedPage:
        self.requested.append(url)
        return FetchedPage(url=url, status_code=200, html=self.html, fallback=self.fallback)


@pytest.fixture
def static_fetcher() -> Callable[..., StaticFetchAgent]:
    return StaticFetchAgent


def pagespeed_payload(speed_score: float | None, lcp_score: float | None, total_bytes: float = 512_000) -> Dict:
    """Build a minimal PageSpeed Insights response body."""

    return {
        "lighthouseResult": {
            "audits": {
                "speed-index": {"displayValue": "2.1 s", "score": speed_score},
                "largest-contentful-paint": {"displayValue": "2.5 s", "score": lcp_score},
                "total-byte-weight": {"numericValue": total_bytes},
            }
        }
    }


@pytest.fixture
def pagespeed_body() -> Callable[..., Dict]:
    return pagespeed_payload


@pytest.fixture
def link_transport() -> Callable[[Dict[str, int]], httpx.MockTransport]:
    """Return a factory for transports answering HEAD requests from a status map.

    URLs missing from the map raise a connection error.
    """

    def _factory(statuses: Dict[str, int]) -> httpx.MockTransport:
        def handler(request: httpx.Request) -> httpx.Response:
            status = statuses.get(str(request.url))
            if status is None:
                raise httpx.ConnectError("connection refused", request=request)
            return httpx.Response(status)

        return httpx.MockTransport(handler)

    return _factory


@pytest.fixture
def pagespeed_transport() -> Callable[..., httpx.MockTransport]:
    """Return a factory for transports serving a PageSpeed response."""

    def _factory(body: Dict | None = None, status: int = 200) -> httpx.MockTransport:
        def handler(request: httpx.Request) -> httpx.Response:
            if body is None:
                return httpx.Response(status, content=b"not json")
            return httpx.Response(status, content=json.dumps(body).encode("utf-8"))

        return httpx.MockTransport(handler)

    return _factory
