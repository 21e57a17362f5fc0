import logging
from typing import BinaryIO, Callable, Iterator, Optional

from bs4 import BeautifulSoup, SoupStrainer

from sitecrawl.exceptions import MarkupParseError

logger = logging.getLogger(__name__)

# Only build tree nodes for anchors; everything else is skipped by the parser.
ANCHOR_STRAINER = SoupStrainer("a")


class LinkExtractor:
    """Pulls anchor `href` values out of a markup stream."""

    def __init__(self, soup_factory: Optional[Callable[[BinaryIO], BeautifulSoup]] = None):
        self._soup_factory = soup_factory or (
            lambda stream: BeautifulSoup(stream, "html.parser", parse_only=ANCHOR_STRAINER)
        )

    def extract(self, stream: BinaryIO, url: str = "") -> Iterator[str]:
        """Yield the raw `href` of every `<a>` start or self-closing tag.

        Nothing is read until the first item is requested. A failure reading
        or tokenizing the stream raises MarkupParseError; callers should drop
        whatever they already collected for that page.
        """
        try:
            soup = self._soup_factory(stream)
        except Exception as e:
            raise MarkupParseError(url, e) from e

        for anchor in soup.find_all("a"):
            href = anchor.get("href")
            if href is None:
                continue
            yield href
