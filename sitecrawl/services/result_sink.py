from __future__ import annotations

import logging
import threading
from collections import deque
from typing import Deque, Generic, Iterator, List, Optional, TypeVar

from sitecrawl.domain.crawl_error import CrawlError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class OutputStream(Generic[T]):
    """Thread-safe, closeable buffer read by one draining caller.

    With `maxsize` set, `emit()` never blocks: a full buffer drops the item
    and counts the drop. Iterating blocks for new items and ends once the
    stream is closed and empty.
    """

    def __init__(self, name: str, maxsize: Optional[int] = None):
        self.name = name
        self.maxsize = maxsize if maxsize is None or maxsize > 0 else None
        self._cond = threading.Condition()
        self._items: Deque[T] = deque()
        self._closed = False
        self._dropped = 0

    @property
    def closed(self) -> bool:
        with self._cond:
            return self._closed

    @property
    def dropped(self) -> int:
        with self._cond:
            return self._dropped

    def emit(self, item: T) -> bool:
        """Buffer `item`. Returns False if it was dropped."""
        with self._cond:
            if self._closed:
                raise RuntimeError(f"{self.name} stream is closed")
            if self.maxsize is not None and len(self._items) >= self.maxsize:
                self._dropped += 1
                return False
            self._items.append(item)
            self._cond.notify()
            return True

    def close(self) -> bool:
        """Close the stream. Returns True only the first time."""
        with self._cond:
            if self._closed:
                return False
            self._closed = True
            self._cond.notify_all()
            return True

    def drain(self) -> List[T]:
        """Return whatever is buffered right now without blocking."""
        with self._cond:
            items = list(self._items)
            self._items.clear()
            return items

    def __iter__(self) -> Iterator[T]:
        while True:
            with self._cond:
                self._cond.wait_for(lambda: self._items or self._closed)
                if not self._items:
                    return
                item = self._items.popleft()
            yield item


class ResultSink:
    """The two output channels of a crawl: result URLs and error records."""

    def __init__(self, result_buffer_size: Optional[int] = None):
        self.results: OutputStream[str] = OutputStream("results", maxsize=result_buffer_size)
        self.errors: OutputStream[CrawlError] = OutputStream("errors")

    def emit_result(self, url: str) -> None:
        if not self.results.emit(url):
            logger.warning("Result buffer full (%s); dropped %s", self.results.maxsize, url)

    def emit_error(self, error: CrawlError) -> None:
        self.errors.emit(error)

    @property
    def closed(self) -> bool:
        return self.results.closed and self.errors.closed

    def close(self) -> bool:
        """Close both streams exactly once. Returns False if already closed."""
        closed_results = self.results.close()
        closed_errors = self.errors.close()
        return closed_results or closed_errors
