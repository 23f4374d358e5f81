"""Tests for :mod:`seohealth.rules`."""

from __future__ import annotations

from collections import Counter
from typing import Dict, List, Optional, Sequence

import pytest

from seohealth.document import DocumentQuery, ElementHandle, parse_document
from seohealth.models import IssueKind, Severity
from seohealth.rules import evaluate
from seohealth.scoring import score

URL = "https://oakline.example/"


def _page(head: str = "", body: str = "") -> str:
    return f"<html><head>{head}</head><body>{body}</body></html>"


def _kinds(html: str) -> List[IssueKind]:
    return [issue.kind for issue in evaluate(parse_document(html), URL)]


def test_short_title_page_reports_expected_issues(html_loader) -> None:
    """Given a bare page with a 5 character title When evaluated Then the documented issue set is produced."""

    issues = evaluate(parse_document(html_loader("short_title.html")), URL)
    by_kind = {issue.kind: issue for issue in issues}

    assert IssueKind.MISSING_TITLE not in by_kind
    assert by_kind[IssueKind.TITLE_LENGTH_OUT_OF_RANGE].severity is Severity.WARNING
    assert "5 characters" in by_kind[IssueKind.TITLE_LENGTH_OUT_OF_RANGE].description
    assert by_kind[IssueKind.MISSING_META_DESCRIPTION].severity is Severity.CRITICAL
    assert by_kind[IssueKind.MISSING_H1].severity is Severity.CRITICAL
    assert by_kind[IssueKind.MISSING_CANONICAL].severity is Severity.WARNING
    assert by_kind[IssueKind.MISSING_VIEWPORT].severity is Severity.WARNING
    assert IssueKind.MISSING_STRUCTURED_DATA in by_kind
    assert IssueKind.IMAGES_MISSING_ALT not in by_kind


def test_optimized_page_has_no_issues(optimized_html: str) -> None:
    """Given a page satisfying every rule When evaluated Then no issues are raised and the score is perfect."""

    issues = evaluate(parse_document(optimized_html), URL)

    assert issues == ()
    assert score(issues) == 100


def test_missing_alt_count_matches_affected_images(html_loader) -> None:
    """Given three images with two lacking alt text When evaluated Then one issue reports exactly two."""

    issues = evaluate(parse_document(html_loader("missing_alts.html")), URL)
    alt_issues = [issue for issue in issues if issue.kind is IssueKind.IMAGES_MISSING_ALT]

    assert len(alt_issues) == 1
    assert alt_issues[0].description == "2 images are missing alt text attributes."


def test_issues_follow_rule_order() -> None:
    """Given a page failing every rule When evaluated Then issues appear in catalogue order."""

    html = _page(body="<h1>a</h1><h1>b</h1><img src='x.jpg'>")

    assert _kinds(html) == [
        IssueKind.MISSING_TITLE,
        IssueKind.MISSING_META_DESCRIPTION,
        IssueKind.MULTIPLE_H1,
        IssueKind.IMAGES_MISSING_ALT,
        IssueKind.MISSING_CANONICAL,
        IssueKind.MISSING_VIEWPORT,
        IssueKind.MISSING_STRUCTURED_DATA,
    ]


@pytest.mark.parametrize(
    ("length", "flagged"),
    [(29, True), (30, False), (45, False), (60, False), (61, True)],
)
def test_title_length_band_is_inclusive(length: int, flagged: bool) -> None:
    """Given titles around the 30-60 band When evaluated Then only lengths outside it are flagged."""

    kinds = _kinds(_page(head=f"<title>{'t' * length}</title>"))

    assert (IssueKind.TITLE_LENGTH_OUT_OF_RANGE in kinds) is flagged
    assert IssueKind.MISSING_TITLE not in kinds


def test_title_length_is_measured_after_trimming() -> None:
    """Given a padded 30 character title When evaluated Then surrounding whitespace does not count."""

    kinds = _kinds(_page(head=f"<title>   {'t' * 30}\n  </title>"))

    assert IssueKind.TITLE_LENGTH_OUT_OF_RANGE not in kinds


@pytest.mark.parametrize("title", ["<title></title>", "<title>   \n </title>", ""])
def test_blank_or_absent_title_is_missing(title: str) -> None:
    """Given an absent or whitespace-only title When evaluated Then only MissingTitle fires for it."""

    kinds = _kinds(_page(head=title))

    assert IssueKind.MISSING_TITLE in kinds
    assert IssueKind.TITLE_LENGTH_OUT_OF_RANGE not in kinds


@pytest.mark.parametrize(
    ("length", "flagged"),
    [(119, True), (120, False), (160, False), (161, True)],
)
def test_meta_description_length_band(length: int, flagged: bool) -> None:
    """Given descriptions around the 120-160 band When evaluated Then the exact length is reported outside it."""

    issues = evaluate(parse_document(_page(head=f"<meta name='description' content='{'d' * length}'>")), URL)
    length_issues = [i for i in issues if i.kind is IssueKind.META_DESCRIPTION_LENGTH_OUT_OF_RANGE]

    assert bool(length_issues) is flagged
    if flagged:
        assert f"{length} characters" in length_issues[0].description


@pytest.mark.parametrize("meta", ["<meta name='description'>", "<meta name='description' content=''>"])
def test_meta_description_without_content_is_missing(meta: str) -> None:
    """Given a description tag with no usable content When evaluated Then it counts as missing."""

    kinds = _kinds(_page(head=meta))

    assert IssueKind.MISSING_META_DESCRIPTION in kinds
    assert IssueKind.META_DESCRIPTION_LENGTH_OUT_OF_RANGE not in kinds


def test_meta_description_whitespace_counts_towards_length() -> None:
    """Given a description padded with spaces When evaluated Then the raw attribute length is used."""

    content = " " * 5 + "d" * 118
    issues = evaluate(parse_document(_page(head=f"<meta name='description' content='{content}'>")), URL)

    assert all(issue.kind is not IssueKind.META_DESCRIPTION_LENGTH_OUT_OF_RANGE for issue in issues)


def test_multiple_h1_reports_exact_count() -> None:
    """Given three H1 headings When evaluated Then MultipleH1 cites the count and MissingH1 is absent."""

    issues = evaluate(parse_document(_page(body="<h1>a</h1><h1>b</h1><h1>c</h1>")), URL)
    kinds = [issue.kind for issue in issues]

    assert IssueKind.MISSING_H1 not in kinds
    multiple = next(issue for issue in issues if issue.kind is IssueKind.MULTIPLE_H1)
    assert multiple.description.startswith("Found 3 H1 tags.")


def test_missing_h1_excludes_multiple_h1() -> None:
    """Given no H1 heading When evaluated Then MissingH1 fires alone."""

    kinds = _kinds(_page(body="<h2>Sub</h2>"))

    assert IssueKind.MISSING_H1 in kinds
    assert IssueKind.MULTIPLE_H1 not in kinds


def test_microdata_counts_as_structured_data() -> None:
    """Given an itemscope element and no JSON-LD When evaluated Then structured data is considered present."""

    kinds = _kinds(_page(body="<div itemscope itemtype='https://schema.org/Product'></div>"))

    assert IssueKind.MISSING_STRUCTURED_DATA not in kinds


def test_missing_structured_data_is_informational() -> None:
    """Given no structured data When evaluated Then the issue is reported with info severity."""

    issue = next(i for i in evaluate(parse_document(_page()), URL) if i.kind is IssueKind.MISSING_STRUCTURED_DATA)

    assert issue.severity is Severity.INFO


def test_evaluate_is_deterministic(html_loader) -> None:
    """Given the same document twice When evaluated Then identical issue multisets are returned."""

    document = parse_document(html_loader("short_title.html"))

    first = evaluate(document, URL)
    second = evaluate(document, URL)

    assert Counter(first) == Counter(second)


class _Element(ElementHandle):
    def __init__(self, text: str = "", **attributes: str) -> None:
        self._text = text
        self._attributes = attributes

    def text(self) -> str:
        return self._text.strip()

    def attribute(self, name: str) -> Optional[str]:
        return self._attributes.get(name)


class _DictDocument(DocumentQuery):
    """Document backed by a selector -> elements mapping, no HTML parser involved."""

    def __init__(self, elements: Dict[str, Sequence[ElementHandle]]) -> None:
        self._elements = elements

    def find_first(self, selector: str) -> Optional[ElementHandle]:
        found = self._elements.get(selector, ())
        return found[0] if found else None

    def find_all(self, selector: str) -> Sequence[ElementHandle]:
        return list(self._elements.get(selector, ()))


def test_evaluate_accepts_any_document_query_implementation() -> None:
    """Given a non-HTML document implementation When evaluated Then rules rely only on the query interface."""

    document = _DictDocument(
        {
            "title": [_Element("  A title long enough for the thirty char band  ")],
            'meta[name="description"]': [_Element(content="x" * 130)],
            "h1": [_Element("Heading")],
            "img": [_Element(alt="ok"), _Element(), _Element(alt="")],
            'link[rel="canonical"]': [_Element(href=URL)],
            'meta[name="viewport"]': [_Element(content="width=device-width")],
            "[itemscope]": [_Element()],
        }
    )

    issues = evaluate(document, URL)

    assert [issue.kind for issue in issues] == [IssueKind.IMAGES_MISSING_ALT]
    assert issues[0].description == "2 images are missing alt text attributes."
