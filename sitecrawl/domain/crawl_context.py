from typing import Optional
from urllib.parse import urlsplit

from sitecrawl.domain.visited_tracker import VisitedTracker
from sitecrawl.exceptions import InvalidSeedError


def host_of(url: str) -> str:
    """Host component (hostname plus explicit port) used for scope checks."""
    parts = urlsplit(url)
    host = (parts.hostname or "").lower()
    if parts.port is not None:
        return f"{host}:{parts.port}"
    return host


class CrawlContext:
    """Per-crawl state: the seed, its limits and the visited set.

    A context lives for exactly one crawl. Building one validates the seed,
    so an unusable seed fails before any task is scheduled.
    """

    def __init__(self, seed_url: str, max_depth: int = 2, max_visited: Optional[int] = 100, visited_tracker: Optional[VisitedTracker] = None):
        if not seed_url or not seed_url.strip():
            raise InvalidSeedError(seed_url, "empty URL")
        seed_url = seed_url.strip()
        try:
            parts = urlsplit(seed_url)
            seed_host = host_of(seed_url)
        except ValueError as e:
            raise InvalidSeedError(seed_url, str(e)) from e
        if parts.scheme not in ("http", "https"):
            raise InvalidSeedError(seed_url, "scheme must be http or https")
        if not seed_host:
            raise InvalidSeedError(seed_url, "missing host")

        self.seed_url = seed_url
        self.seed_host = seed_host
        self.max_depth = int(max_depth)
        self.visited = visited_tracker or VisitedTracker(max_size=max_visited)

    @property
    def max_visited(self) -> Optional[int]:
        return self.visited.max_size

    def claim(self, url: str) -> bool:
        return self.visited.claim(url)

    def is_visited(self, url: str) -> bool:
        return self.visited.is_visited(url)

    def in_scope(self, url: str) -> bool:
        return host_of(url) == self.seed_host
