"""Configuration for SEO analyses: JSON file first, environment second."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Callable, Dict

_LOGGER = logging.getLogger(__name__)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_DEFAULT_CONFIG_PATH = _PROJECT_ROOT / "configs" / "seohealth.json"

SCORING_MODES = ("severity", "pipeline")
PAGESPEED_STRATEGIES = ("desktop", "mobile")


def _as_bool(raw: str) -> bool:
    return raw.strip().lower() in {"1", "true", "yes", "on"}


# environment variable -> (field name, parser)
_ENV_OVERRIDES: Dict[str, tuple[str, Callable[[str], Any]]] = {
    "PAGESPEED_API_KEY": ("pagespeed_api_key", str),
    "SEOHEALTH_PAGESPEED_STRATEGY": ("pagespeed_strategy", str),
    "SEOHEALTH_HTTP_TIMEOUT": ("http_timeout", float),
    "SEOHEALTH_LINK_SAMPLE": ("link_sample_size", int),
    "SEOHEALTH_SCORING": ("scoring_mode", str),
    "SEOHEALTH_DEMO_MODE": ("demo_mode", _as_bool),
    "SEOHEALTH_PERFORMANCE": ("performance_enabled", _as_bool),
}


@dataclass(slots=True)
class AuditSettings:
    """Tunables for the fetch, link-check, PageSpeed and scoring stages."""

    pagespeed_api_key: str | None = None
    pagespeed_strategy: str = "desktop"
    http_timeout: float = 20.0
    link_sample_size: int = 5
    scoring_mode: str = "severity"
    demo_mode: bool = False
    performance_enabled: bool = True

    def __post_init__(self) -> None:
        self.scoring_mode = str(self.scoring_mode).strip().lower()
        if self.scoring_mode not in SCORING_MODES:
            raise ValueError(
                f"Unsupported scoring mode '{self.scoring_mode}'. Expected one of: {', '.join(SCORING_MODES)}."
            )
        self.pagespeed_strategy = str(self.pagespeed_strategy).strip().lower()
        if self.pagespeed_strategy not in PAGESPEED_STRATEGIES:
            raise ValueError(f"Unsupported PageSpeed strategy '{self.pagespeed_strategy}'.")
        if self.link_sample_size < 0:
            raise ValueError("link_sample_size must not be negative")
        if self.http_timeout <= 0:
            raise ValueError("http_timeout must be positive")
        if self.pagespeed_api_key is not None and not str(self.pagespeed_api_key).strip():
            self.pagespeed_api_key = None

    @classmethod
    def load(cls, path: Path | None = None) -> "AuditSettings":
        """Load settings from ``path`` (if it exists) and apply environment overrides."""

        config_path = path or _DEFAULT_CONFIG_PATH
        data: Any = {}

        if config_path.exists():
            try:
                data = json.loads(config_path.read_text(encoding="utf-8"))
            except json.JSONDecodeError as exc:
                _LOGGER.warning("Unable to decode settings at %s: %s", config_path, exc)
                data = {}
            if not isinstance(data, dict):
                _LOGGER.warning("Ignoring settings at %s: expected a JSON object", config_path)
                data = {}

        known = {item.name for item in fields(cls)}
        settings = cls()
        for key, value in data.items():
            if key in known:
                settings = settings._apply(key, value, source=str(config_path))

        for env_name, (field_name, parser) in _ENV_OVERRIDES.items():
            raw = os.environ.get(env_name)
            if raw is None:
                continue
            try:
                parsed = parser(raw)
            except ValueError:
                _LOGGER.warning("Ignoring invalid value for %s: %r", env_name, raw)
                continue
            settings = settings._apply(field_name, parsed, source=env_name)
        return settings

    def _apply(self, field_name: str, value: Any, *, source: str) -> "AuditSettings":
        """Return a copy with ``field_name`` set, or ``self`` when the value fails validation."""

        try:
            return replace(self, **{field_name: value})
        except (TypeError, ValueError) as exc:
            _LOGGER.warning("Ignoring invalid value for %s from %s: %r (%s)", field_name, source, value, exc)
            return self

    def with_overrides(self, **overrides: Any) -> "AuditSettings":
        """Return a copy with every non-``None`` override applied."""

        return replace(self, **{key: value for key, value in overrides.items() if value is not None})


def load_settings(path: Path | None = None) -> AuditSettings:
    """Helper to load the analysis settings."""

    return AuditSettings.load(path)


__all__ = ["AuditSettings", "PAGESPEED_STRATEGIES", "SCORING_MODES", "load_settings"]
