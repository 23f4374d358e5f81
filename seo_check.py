"""Command line entrypoint for running an SEO health check."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from seohealth import AnalysisPipeline, InvalidURLError, configure_logging, load_settings
from seohealth.config import PAGESPEED_STRATEGIES, SCORING_MODES
from seohealth.logging_config import resolve_level
from seohealth.pipeline import count_by_severity
from seohealth.tracing import log_event

EXIT_INVALID_URL = 2


def _non_negative(value: str) -> int:
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Expected an integer, got '{value}'.") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("Link sample size must not be negative.")
    return parsed


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run an SEO health check against a single page")
    parser.add_argument("url", help="Page URL; https:// is assumed when omitted.")
    parser.add_argument("--log-level", default="WARNING", help="Python logging level (default: WARNING)")
    parser.add_argument("--config", type=Path, help="Path to a JSON settings file.")
    parser.add_argument("--scoring", choices=SCORING_MODES, help="Score reducer to apply.")
    parser.add_argument(
        "--link-sample",
        type=_non_negative,
        help="Number of internal links to check (default: 5).",
    )
    parser.add_argument("--strategy", choices=PAGESPEED_STRATEGIES, help="PageSpeed strategy.")
    parser.add_argument(
        "--no-performance",
        action="store_true",
        help="Skip the PageSpeed Insights lookup.",
    )
    parser.add_argument(
        "--demo",
        action="store_true",
        help="Analyse canned demo content instead of fetching the page.",
    )
    parser.add_argument("--output", type=Path, help="Also write the JSON result to this file.")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    args = parse_args(argv)
    configure_logging(level=resolve_level(args.log_level), stream=logging.StreamHandler(sys.stderr))
    logger = logging.getLogger("cli")

    settings = load_settings(args.config).with_overrides(
        scoring_mode=args.scoring,
        link_sample_size=args.link_sample,
        pagespeed_strategy=args.strategy,
        performance_enabled=False if args.no_performance else None,
        demo_mode=True if args.demo else None,
    )

    try:
        result = AnalysisPipeline(settings).analyze(args.url)
    except InvalidURLError as exc:
        log_event(logger, logging.ERROR, "cli.invalid_url", url=args.url, error=str(exc))
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_INVALID_URL

    if args.output:
        result.to_json(args.output)
    log_event(logger, logging.INFO, "cli.summary", score=result.score, **count_by_severity(result.issues))
    print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
