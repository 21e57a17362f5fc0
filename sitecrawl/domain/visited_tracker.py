import threading
from typing import Optional, Set


class VisitedTracker:
    """
    Tracks which URLs have been claimed during a crawl.

    Kept separate from CrawlContext so the claim protocol can be tested on
    its own. Every worker thread shares one instance, so membership test,
    insert and the size check all happen under a single lock.
    """

    def __init__(self, max_size: Optional[int] = 100):
        """Create a visited tracker.

        `max_size` caps how many URLs can ever be claimed. Once reached every
        further claim fails. If `max_size` is None the tracker is unbounded;
        a value <= 0 means nothing can be claimed.
        """
        self._max_size = int(max_size) if max_size is not None else None
        if self._max_size is not None and self._max_size < 0:
            self._max_size = 0
        self._lock = threading.Lock()
        self._visited: Set[str] = set()

    @property
    def max_size(self) -> Optional[int]:
        return self._max_size

    def claim(self, url: str) -> bool:
        """Mark `url` as visited if it is new and the cap allows it.

        Returns True only for the caller that performed the insert.
        """
        with self._lock:
            if url in self._visited:
                return False
            if self._max_size is not None and len(self._visited) >= self._max_size:
                return False
            self._visited.add(url)
            return True

    def is_visited(self, url: str) -> bool:
        """Check if a URL has been claimed."""
        with self._lock:
            return url in self._visited

    def is_full(self) -> bool:
        with self._lock:
            return self._max_size is not None and len(self._visited) >= self._max_size

    def __len__(self) -> int:
        with self._lock:
            return len(self._visited)
