"""Crawl result data model."""
from typing import List, NamedTuple

from .crawl_error import CrawlError


class CrawlResult(NamedTuple):
    """Everything a finished crawl produced.

    Provides the drained result and error streams so callers can report
    them once the crawl is complete.
    """
    results: List[str]
    """URLs fetched and parsed successfully, in completion order"""

    errors: List[CrawlError]
    """One record per failed task or unparseable link"""

    dropped_results: int = 0
    """Results discarded because the result buffer was full"""
