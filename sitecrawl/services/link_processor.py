import logging
from dataclasses import dataclass, field
from typing import BinaryIO, Iterable, List

from sitecrawl.domain.crawl_context import CrawlContext
from sitecrawl.domain.crawl_error import CrawlError
from sitecrawl.exceptions import UrlParseError
from sitecrawl.services.url_normalizer import normalize_url

logger = logging.getLogger(__name__)


@dataclass
class ProcessedLinks:
    """Outcome of scanning one page: targets to crawl next, and bad links."""
    targets: List[str] = field(default_factory=list)
    errors: List[CrawlError] = field(default_factory=list)


class LinkProcessor:
    """Turns a fetched page into the list of child targets.

    Extraction is delegated to the link extractor; this class resolves each
    href against the page URL and drops non-http(s) and cross-host links.
    Malformed hrefs are returned as parse errors without failing the page.
    """

    def __init__(self, link_extractor):
        self.link_extractor = link_extractor

    def process(self, base_url: str, body: BinaryIO, context: CrawlContext) -> ProcessedLinks:
        # Materialize first: a markup error must discard every link from this page.
        hrefs = list(self.link_extractor.extract(body, base_url))
        return self.filter_links(base_url, hrefs, context)

    def filter_links(self, base_url: str, hrefs: Iterable[str], context: CrawlContext) -> ProcessedLinks:
        processed = ProcessedLinks()
        for href in hrefs:
            try:
                target = normalize_url(href, base_url)
                if target is None:
                    logger.debug("Skipping (scheme) %s on %s", href, base_url)
                    continue
                if not context.in_scope(target):
                    logger.debug("Skipping (external) %s -> not same host as %s", target, context.seed_host)
                    continue
            except UrlParseError as e:
                logger.warning("Bad link %r on %s: %s", href, base_url, e.cause)
                processed.errors.append(CrawlError.from_exception(e))
                continue
            except ValueError as e:
                logger.warning("Bad link %r on %s: %s", href, base_url, e)
                processed.errors.append(CrawlError.from_exception(UrlParseError(href, e)))
                continue
            processed.targets.append(target)
        return processed
