"""Utilities for working with page URLs and host names."""

from __future__ import annotations

from urllib.parse import urljoin, urlparse


class InvalidURLError(ValueError):
    """Raised when a URL cannot be analysed."""


def normalise_url(url: str | None) -> str:
    """Trim ``url`` and assume ``https://`` when no scheme is given."""

    if not url:
        return ""
    candidate = str(url).strip()
    if candidate and "://" not in candidate:
        return "https://" + candidate
    return candidate


def is_valid_url(url: str | None) -> bool:
    """Return whether ``url`` is an absolute http(s) URL with a host."""

    if not url or not url.strip():
        return False
    try:
        parsed = urlparse(url.strip())
    except ValueError:
        return False
    return parsed.scheme in {"http", "https"} and bool(parsed.hostname)


def validate_url(url: str | None) -> str:
    """Return ``url`` unchanged or raise :class:`InvalidURLError`."""

    if not is_valid_url(url):
        raise InvalidURLError(f"Invalid URL format: {url!r}")
    return str(url).strip()


def hostname_of(url: str) -> str:
    """Lowercase host name of ``url``, or an empty string."""

    try:
        return (urlparse(url).hostname or "").lower()
    except ValueError:
        return ""


def resolve_internal(href: str, page_url: str) -> str | None:
    """Return the absolute form of ``href`` when it points at the page's own host.

    Root-relative links (``/about``) and absolute links carrying the same host
    name qualify. Document-relative links (``about.html``), fragments and other
    schemes do not.
    """

    href = href.strip()
    if not href:
        return None
    page_host = hostname_of(page_url)
    if not page_host:
        return None
    if href.startswith("/"):
        absolute = urljoin(page_url, href)
    elif urlparse(href).scheme in {"http", "https"}:
        absolute = href
    else:
        return None
    return absolute if hostname_of(absolute) == page_host else None


__all__ = [
    "InvalidURLError",
    "hostname_of",
    "is_valid_url",
    "normalise_url",
    "resolve_internal",
    "validate_url",
]
