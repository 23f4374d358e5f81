"""Logging setup shared by the CLI and the HTTP service."""

from __future__ import annotations

import logging
import sys
from typing import Optional


_LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# Third-party loggers that drown out analysis events at DEBUG.
_NOISY_LOGGERS = ("urllib3", "httpx", "httpcore")


def resolve_level(name: str | int | None) -> int:
    """Translate a level name such as ``"debug"`` into a :mod:`logging` constant."""

    if isinstance(name, int):
        return name
    level = getattr(logging, str(name or "INFO").strip().upper(), None)
    return level if isinstance(level, int) else logging.INFO


def configure_logging(level: int = logging.INFO, stream: Optional[logging.Handler] = None) -> None:
    """Configure the root logger.

    Parameters
    ----------
    level:
        The logging level to apply across the root logger.
    stream:
        Optional handler. When omitted a handler writing to ``sys.stdout`` is used.
    """

    root_logger = logging.getLogger()
    handler: logging.Handler = stream if stream is not None else logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))

    # Repeated calls (tests, API reloads) must not stack handlers.
    for existing in list(root_logger.handlers):
        root_logger.removeHandler(existing)

    root_logger.setLevel(level)
    root_logger.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


__all__ = ["configure_logging", "resolve_level"]
