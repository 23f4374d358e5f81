"""On-page SEO rules.

Every rule inspects the document independently and returns zero or more
issues; :func:`evaluate` runs them in catalogue order (title, meta
description, headings, images, canonical, viewport, structured data). A
missing element is an ordinary input, never an error.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Tuple

from .document import DocumentQuery
from .issues import make_issue
from .models import Issue, IssueKind
from .tracing import log_event

_LOGGER = logging.getLogger("rules")

TITLE_LENGTH_RANGE = (30, 60)
META_DESCRIPTION_LENGTH_RANGE = (120, 160)

Rule = Callable[[DocumentQuery], List[Issue]]


def _outside(length: int, bounds: Tuple[int, int]) -> bool:
    low, high = bounds
    return length < low or length > high


def check_title(document: DocumentQuery) -> List[Issue]:
    title = document.find_first("title")
    text = title.text() if title is not None else ""
    if not text:
        return [make_issue(IssueKind.MISSING_TITLE)]
    if _outside(len(text), TITLE_LENGTH_RANGE):
        return [make_issue(IssueKind.TITLE_LENGTH_OUT_OF_RANGE, length=len(text))]
    return []


def check_meta_description(document: DocumentQuery) -> List[Issue]:
    meta = document.find_first('meta[name="description"]')
    content = meta.attribute("content") if meta is not None else None
    if not content:
        return [make_issue(IssueKind.MISSING_META_DESCRIPTION)]
    # Raw attribute length: whitespace is not normalised.
    if _outside(len(content), META_DESCRIPTION_LENGTH_RANGE):
        return [make_issue(IssueKind.META_DESCRIPTION_LENGTH_OUT_OF_RANGE, length=len(content))]
    return []


def check_headings(document: DocumentQuery) -> List[Issue]:
    count = len(document.find_all("h1"))
    if count == 0:
        return [make_issue(IssueKind.MISSING_H1)]
    if count > 1:
        return [make_issue(IssueKind.MULTIPLE_H1, count=count)]
    return []


def check_image_alts(document: DocumentQuery) -> List[Issue]:
    missing = sum(1 for image in document.find_all("img") if not image.attribute("alt"))
    if missing:
        return [make_issue(IssueKind.IMAGES_MISSING_ALT, count=missing)]
    return []


def check_canonical(document: DocumentQuery) -> List[Issue]:
    if document.find_first('link[rel="canonical"]') is None:
        return [make_issue(IssueKind.MISSING_CANONICAL)]
    return []


def check_viewport(document: DocumentQuery) -> List[Issue]:
    if document.find_first('meta[name="viewport"]') is None:
        return [make_issue(IssueKind.MISSING_VIEWPORT)]
    return []


def check_structured_data(document: DocumentQuery) -> List[Issue]:
    json_ld = document.find_first('script[type="application/ld+json"]')
    microdata = document.find_first("[itemscope]")
    if json_ld is None and microdata is None:
        return [make_issue(IssueKind.MISSING_STRUCTURED_DATA)]
    return []


RULES: Tuple[Rule, ...] = (
    check_title,
    check_meta_description,
    check_headings,
    check_image_alts,
    check_canonical,
    check_viewport,
    check_structured_data,
)


def evaluate(document: DocumentQuery, page_url: str) -> Tuple[Issue, ...]:
    """Run every rule against ``document`` and return the issues in rule order."""

    issues: List[Issue] = []
    for rule in RULES:
        issues.extend(rule(document))
    log_event(
        _LOGGER,
        logging.DEBUG,
        "rules.evaluated",
        url=page_url,
        rules=len(RULES),
        issues=[issue.kind for issue in issues],
    )
    return tuple(issues)


__all__ = [
    "META_DESCRIPTION_LENGTH_RANGE",
    "RULES",
    "TITLE_LENGTH_RANGE",
    "check_canonical",
    "check_headings",
    "check_image_alts",
    "check_meta_description",
    "check_structured_data",
    "check_title",
    "check_viewport",
    "evaluate",
]
