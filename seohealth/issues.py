"""Catalogue of issue texts.

Titles, descriptions and guidance are rendered into reports verbatim, so the
strings here are part of the output format. Descriptions may carry
``str.format`` placeholders filled with measured values.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .models import Issue, IssueKind


@dataclass(frozen=True, slots=True)
class IssueTemplate:
    title: str
    description: str
    guidance: str

    def render(self, kind: IssueKind, *, details: Optional[str] = None, **params: Any) -> Issue:
        return Issue(
            kind=kind,
            title=self.title,
            description=self.description.format(**params),
            guidance=self.guidance.format(**params),
            details=details,
        )


ISSUE_CATALOGUE: Dict[IssueKind, IssueTemplate] = {
    IssueKind.MISSING_TITLE: IssueTemplate(
        title="❌ Missing Title Tag",
        description="No title tag found on this page.",
        guidance="Add a unique, descriptive title tag (50-60 characters) to improve SEO.",
    ),
    IssueKind.TITLE_LENGTH_OUT_OF_RANGE: IssueTemplate(
        title="⚠️ Title Tag Length Issue",
        description="Title tag is {length} characters. Optimal length is 50-60 characters.",
        guidance="Adjust title tag length to 50-60 characters for better search result display.",
    ),
    IssueKind.MISSING_META_DESCRIPTION: IssueTemplate(
        title="❌ Missing Meta Description",
        description="No meta description found on this page.",
        guidance="Add a unique meta description (150-160 characters) describing the page content.",
    ),
    IssueKind.META_DESCRIPTION_LENGTH_OUT_OF_RANGE: IssueTemplate(
        title="📝 Meta Description Length Issue",
        description="Meta description is {length} characters. Optimal length is 150-160 characters.",
        guidance="Adjust meta description length to 150-160 characters for better search snippets.",
    ),
    IssueKind.MISSING_H1: IssueTemplate(
        title="❌ Missing H1 Tag",
        description="No H1 tag found on this page.",
        guidance="Add exactly one H1 tag to define the main heading of the page.",
    ),
    IssueKind.MULTIPLE_H1: IssueTemplate(
        title="⚠️ Multiple H1 Tags",
        description="Found {count} H1 tags. Best practice is to use only one H1 per page.",
        guidance="Use only one H1 tag per page and use H2-H6 for subheadings.",
    ),
    IssueKind.IMAGES_MISSING_ALT: IssueTemplate(
        title="🖼️ Images Missing Alt Text",
        description="{count} images are missing alt text attributes.",
        guidance="Add descriptive alt text to all images for accessibility and SEO benefits.",
    ),
    IssueKind.MISSING_CANONICAL: IssueTemplate(
        title="🔗 Missing Canonical URL",
        description="No canonical URL specified for this page.",
        guidance="Add a canonical link tag to prevent duplicate content issues.",
    ),
    IssueKind.MISSING_VIEWPORT: IssueTemplate(
        title="📱 Missing Viewport Meta Tag",
        description="No viewport meta tag found, affecting mobile responsiveness.",
        guidance=(
            'Add <meta name="viewport" content="width=device-width, initial-scale=1"> '
            "for mobile optimization."
        ),
    ),
    IssueKind.MISSING_STRUCTURED_DATA: IssueTemplate(
        title="📊 No Structured Data Found",
        description="No Schema.org structured data detected.",
        guidance=(
            "Consider adding structured data markup to help search engines "
            "understand your content better."
        ),
    ),
    IssueKind.BROKEN_INTERNAL_LINKS: IssueTemplate(
        title="🔗 Broken Internal Links",
        description="Found {count} broken internal links that return errors.",
        guidance="Fix broken links by updating URLs or setting up proper redirects (301).",
    ),
    IssueKind.PERFORMANCE_SLOW: IssueTemplate(
        title="⚠️ Slow Page Load Speed",
        description="Page loads in {load_time}. This affects user experience and SEO rankings.",
        guidance="Optimize images, minify CSS/JS, enable compression, and use a CDN.",
    ),
    IssueKind.PERFORMANCE_LCP_SLOW: IssueTemplate(
        title="🖼️ Large Contentful Paint Issues",
        description="Largest contentful paint is slower than recommended.",
        guidance="Optimize above-the-fold content loading and reduce render-blocking resources.",
    ),
    IssueKind.PERFORMANCE_UNAVAILABLE: IssueTemplate(
        title="⚠️ PageSpeed Analysis Unavailable",
        description=(
            "Google PageSpeed Insights API is currently unavailable. "
            "Performance metrics cannot be retrieved."
        ),
        guidance=(
            "Try again later when the service is available. "
            "SEO analysis will continue with other checks."
        ),
    ),
    IssueKind.LINK_CHECK_UNAVAILABLE: IssueTemplate(
        title="🔗 Link Checking Service Unavailable",
        description="Unable to verify link validity due to service unavailability.",
        guidance="Error: {error}. Manual link verification recommended.",
    ),
}


def make_issue(kind: IssueKind, *, details: Optional[str] = None, **params: Any) -> Issue:
    """Render the catalogue entry for ``kind`` with measured ``params``."""

    return ISSUE_CATALOGUE[kind].render(kind, details=details, **params)


__all__ = ["ISSUE_CATALOGUE", "IssueTemplate", "make_issue"]
