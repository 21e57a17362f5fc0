import threading
from typing import Optional


class OutstandingTasks:
    """Counts tasks that have been scheduled but not finished.

    The count reaching zero is the only signal that a crawl is complete.
    `add()` must be called before a task is handed to a worker, `done()`
    after it finishes, whatever the outcome.
    """

    def __init__(self):
        self._cond = threading.Condition()
        self._count = 0
        self._completed = False

    @property
    def count(self) -> int:
        with self._cond:
            return self._count

    @property
    def completed(self) -> bool:
        with self._cond:
            return self._completed

    def add(self, n: int = 1) -> None:
        with self._cond:
            if self._completed:
                raise RuntimeError("cannot schedule tasks after the crawl completed")
            self._count += n

    def done(self) -> bool:
        """Mark one task finished. Returns True for the call that hit zero."""
        with self._cond:
            if self._count <= 0:
                raise RuntimeError("done() called more times than add()")
            self._count -= 1
            if self._count == 0:
                self._completed = True
                self._cond.notify_all()
                return True
            return False

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the count returns to zero. Returns False on timeout."""
        with self._cond:
            return self._cond.wait_for(lambda: self._completed, timeout=timeout)
