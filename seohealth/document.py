"""Parser-agnostic document queries used by the rule evaluator.

The evaluator only ever talks to :class:`DocumentQuery` and
:class:`ElementHandle`; :class:`SoupDocument` is the BeautifulSoup-backed
implementation used in production.
"""

from __future__ import annotations

import abc
from typing import List, Optional, Sequence

from bs4 import BeautifulSoup
from bs4.element import Tag


class ElementHandle(abc.ABC):
    """A single element returned by a document query."""

    @abc.abstractmethod
    def text(self) -> str:
        """Return the element's text content, trimmed."""

    @abc.abstractmethod
    def attribute(self, name: str) -> Optional[str]:
        """Return the attribute value, or ``None`` when it is absent."""


class DocumentQuery(abc.ABC):
    """Selector-based access to a parsed page."""

    @abc.abstractmethod
    def find_first(self, selector: str) -> Optional[ElementHandle]:
        raise NotImplementedError

    @abc.abstractmethod
    def find_all(self, selector: str) -> Sequence[ElementHandle]:
        raise NotImplementedError


class SoupElement(ElementHandle):
    def __init__(self, tag: Tag) -> None:
        self._tag = tag

    def text(self) -> str:
        return self._tag.get_text().strip()

    def attribute(self, name: str) -> Optional[str]:
        value = self._tag.get(name)
        if value is None:
            return None
        # bs4 splits multi-valued attributes such as rel and class.
        if isinstance(value, list):
            return " ".join(value)
        return str(value)

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return f"SoupElement(<{self._tag.name}>)"


class SoupDocument(DocumentQuery):
    """:class:`DocumentQuery` over a BeautifulSoup tree, using CSS selectors."""

    def __init__(self, soup: BeautifulSoup) -> None:
        self._soup = soup

    @classmethod
    def from_html(cls, html: str, parser: str = "lxml") -> "SoupDocument":
        return cls(BeautifulSoup(html or "", parser))

    def find_first(self, selector: str) -> Optional[ElementHandle]:
        tag = self._soup.select_one(selector)
        return SoupElement(tag) if tag is not None else None

    def find_all(self, selector: str) -> List[ElementHandle]:
        return [SoupElement(tag) for tag in self._soup.select(selector)]


def parse_document(html: str) -> DocumentQuery:
    """Parse ``html`` into a queryable document."""

    return SoupDocument.from_html(html)


__all__ = ["DocumentQuery", "ElementHandle", "SoupDocument", "SoupElement", "parse_document"]
