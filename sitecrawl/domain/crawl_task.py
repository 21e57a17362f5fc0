from typing import NamedTuple


class CrawlTask(NamedTuple):
    """A unit of traversal work: one URL at one depth (the seed is depth 1)."""
    url: str
    depth: int

    def child(self, url: str) -> "CrawlTask":
        return CrawlTask(url, self.depth + 1)
