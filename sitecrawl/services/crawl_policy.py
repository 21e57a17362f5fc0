import logging
from typing import Optional

from sitecrawl.domain.crawl_context import CrawlContext
from sitecrawl.domain.crawl_task import CrawlTask
from sitecrawl.services.url_normalizer import normalize_url

logger = logging.getLogger(__name__)


class CrawlPolicy:
    """Encapsulates crawl decision rules: depth limit, host scope and URL canonical form.

    Separates policy decisions from crawl orchestration logic.
    """

    def should_skip_due_to_depth(self, task: CrawlTask, context: CrawlContext) -> bool:
        """Check if the task is deeper than the configured max depth (seed is depth 1)."""
        if task.depth > context.max_depth:
            logger.debug("Skipping (max depth reached) %s at depth %s", task.url, task.depth)
            return True
        return False

    def should_skip_due_to_scope(self, url: str, context: CrawlContext) -> bool:
        """Check if the URL is on a different host than the seed.

        Raises ValueError when the URL's host/port cannot be parsed.
        """
        if not context.in_scope(url):
            logger.debug("Skipping (external) %s -> not same host as %s", url, context.seed_host)
            return True
        return False

    def canonicalize(self, url: str, context: CrawlContext) -> Optional[str]:
        """Return the crawl target for `url`, or None if it should be skipped.

        Child task URLs are already absolute, so resolving against the seed
        only matters for the seed itself. Raises UrlParseError for malformed input.
        """
        target = normalize_url(url, context.seed_url)
        if target is None:
            logger.debug("Skipping (scheme) %s", url)
        return target
