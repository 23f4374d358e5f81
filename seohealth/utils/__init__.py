"""Utility helpers for the SEO health check."""


from .urls import (
    InvalidURLError,
    hostname_of,
    is_valid_url,
    normalise_url,
    resolve_internal,
    validate_url,
)

__all__ = [
    "InvalidURLError",
    "hostname_of",
    "is_valid_url",
    "normalise_url",
    "resolve_internal",
    "validate_url",
]
