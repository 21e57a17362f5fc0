"""Domain objects for SiteCrawl - explicit re-exports to satisfy linters."""
from .crawl_task import CrawlTask as CrawlTask
from .crawl_error import CrawlError as CrawlError
from .crawl_result import CrawlResult as CrawlResult
from .crawl_context import CrawlContext as CrawlContext

__all__ = ["CrawlTask", "CrawlError", "CrawlResult", "CrawlContext"]
