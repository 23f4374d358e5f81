"""Blocking HTTP helpers built on :mod:`requests`."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict

import requests

from .tracing import log_event

USER_AGENT = "SEO-Health-Check-Tool/1.0"


@dataclass(slots=True)
class HttpResponse:
    url: str
    status_code: int
    headers: Dict[str, str]
    text: str
    reason: str = ""

    @property
    def ok(self) -> bool:
        return self.status_code < 400


def get(url: str, timeout: float = 20, headers: Dict[str, str] | None = None) -> HttpResponse:
    """Perform a HTTP GET request identifying as the health-check tool."""

    logger = logging.getLogger("http")
    request_headers = {"User-Agent": USER_AGENT}
    request_headers.update(headers or {})
    log_event(logger, logging.DEBUG, "http.request", method="GET", url=url, timeout=timeout)
    response = requests.get(url, timeout=timeout, headers=request_headers)
    elapsed_ms = (
        round(response.elapsed.total_seconds() * 1000, 2)
        if getattr(response, "elapsed", None)
        else None
    )
    log_event(
        logger,
        logging.INFO,
        "http.response",
        method="GET",
        url=str(response.url),
        status_code=response.status_code,
        elapsed_ms=elapsed_ms,
        bytes=len(response.text),
    )
    return HttpResponse(
        url=str(response.url),
        status_code=response.status_code,
        headers=dict(response.headers),
        text=response.text,
        reason=getattr(response, "reason", None) or "",
    )


__all__ = ["HttpResponse", "USER_AGENT", "get"]
