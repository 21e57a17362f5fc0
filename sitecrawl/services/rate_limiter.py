import threading
import time
from typing import Callable, Optional

from sitecrawl.exceptions import RateLimitError


class RateLimiter:
    """Thread-safe token bucket.

    Tokens refill at `rate` per second up to `burst`. Each `acquire()` takes
    one token, reserving a future one when the bucket is empty, so waiting
    callers are served in the order they arrived.
    """

    def __init__(self, rate: float = 5.0, burst: int = 1, *, clock: Callable[[], float] = time.monotonic, sleep: Callable[[float], None] = time.sleep):
        if rate <= 0:
            raise ValueError("rate must be positive")
        if burst < 1:
            raise ValueError("burst must be at least 1")
        self.rate = float(rate)
        self.burst = int(burst)
        self._clock = clock
        self._sleep = sleep
        self._lock = threading.Lock()
        self._tokens = float(self.burst)
        self._last = clock()

    def _refill(self, now: float) -> None:
        elapsed = max(0.0, now - self._last)
        self._tokens = min(float(self.burst), self._tokens + elapsed * self.rate)
        self._last = now

    def _reserve(self) -> float:
        """Take a token (possibly going into debt) and return the wait in seconds."""
        with self._lock:
            self._refill(self._clock())
            self._tokens -= 1.0
            if self._tokens >= 0:
                return 0.0
            return -self._tokens / self.rate

    def _cancel_reservation(self) -> None:
        with self._lock:
            self._refill(self._clock())
            self._tokens = min(float(self.burst), self._tokens + 1.0)

    def acquire(self, stop_event: Optional[threading.Event] = None, url: str = "") -> None:
        """Block until a token is available.

        If `stop_event` is set before or while waiting, the reservation is
        given back and RateLimitError is raised.
        """
        if stop_event is not None and stop_event.is_set():
            raise RateLimitError(url)

        wait = self._reserve()
        if wait <= 0:
            return
        if stop_event is None:
            self._sleep(wait)
            return
        if stop_event.wait(wait):
            self._cancel_reservation()
            raise RateLimitError(url)
