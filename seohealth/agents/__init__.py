"""Collaborators that feed the rule evaluator and the score reducer.

Retrieval, link checking and PageSpeed lookups each live in their own module
so they can be swapped (demo content, stub transports) without touching the
evaluation core.
"""

from .common import Agent, AsyncAgent, run_async
from .fetcher import ContentFetchAgent, DemoContentAgent
from .links import LinkCheckAgent, extract_internal_links, summarise_link_checks
from .performance import PageSpeedAgent, normalise_pagespeed

__all__ = [
    "Agent",
    "AsyncAgent",
    "ContentFetchAgent",
    "DemoContentAgent",
    "LinkCheckAgent",
    "PageSpeedAgent",
    "extract_internal_links",
    "normalise_pagespeed",
    "run_async",
    "summarise_link_checks",
]
