"""Structured logging and stage timing for SEO analyses."""

from __future__ import annotations

import json
import logging
import math
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, Optional

__all__ = ["TraceSpan", "trace", "log_event", "safe_json"]


def safe_json(value: Any) -> Any:
    """Return ``value`` converted into a JSON-serialisable structure."""

    if isinstance(value, Enum):
        return safe_json(value.value)

    if value is None or isinstance(value, (str, int, float, bool)):
        if isinstance(value, float) and (math.isnan(value) or math.isinf(value)):
            return repr(value)
        return value

    if isinstance(value, (list, tuple, set, frozenset)):
        return [safe_json(item) for item in value]

    if isinstance(value, dict):
        return {str(key): safe_json(val) for key, val in value.items()}

    if callable(getattr(value, "to_dict", None)):
        return value.to_dict()

    return repr(value)


def log_event(
    logger: logging.Logger,
    level: int,
    event: str,
    *,
    exc_info: bool | BaseException | tuple[Any, Any, Any] | None = None,
    **fields: Any,
) -> None:
    """Emit ``event`` and its non-empty ``fields`` as one JSON log line."""

    payload: Dict[str, Any] = {"event": event}
    payload.update({key: safe_json(value) for key, value in fields.items() if value is not None})

    message = json.dumps(payload, ensure_ascii=False, sort_keys=True)
    logger.log(level, message, exc_info=exc_info)
@dataclass
class TraceSpan:
    """An open analysis stage.

    Fields passed to :meth:`record` are reported with the stage's closing
    ``trace.end`` or ``trace.error`` event.
    """

    name: str
    logger: logging.Logger
    fields: Dict[str, Any]
    start_time: float
    outcome: Dict[str, Any] = field(default_factory=dict)

    def elapsed_ms(self) -> float:
        return round((time.perf_counter() - self.start_time) * 1000, 2)

    def record(self, **outcome: Any) -> None:
        self.outcome.update(outcome)

    def closing_fields(self, **extra: Any) -> Dict[str, Any]:
        return {**self.fields, **self.outcome, **extra, "trace": self.name, "duration_ms": self.elapsed_ms()}


@contextmanager
def trace(name: str, *, logger: Optional[logging.Logger] = None, **fields: Any) -> Iterator[TraceSpan]:
    """Log ``trace.start`` and ``trace.end`` (or ``trace.error``) around a stage."""

    logger = logger or logging.getLogger("trace")
    span = TraceSpan(name=name, logger=logger, fields=dict(fields), start_time=time.perf_counter())
    log_event(logger, logging.INFO, "trace.start", trace=name, **fields)
    try:
        yield span
    except Exception as exc:
        log_event(logger, logging.ERROR, "trace.error", exc_info=True, **span.closing_fields(error=repr(exc)))
        raise
    log_event(logger, logging.INFO, "trace.end", **span.closing_fields())
