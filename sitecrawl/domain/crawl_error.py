"""Error record emitted on the error stream."""
from typing import NamedTuple, Optional

from sitecrawl.exceptions import CrawlStageError


class CrawlError(NamedTuple):
    """One failed task (or one unparseable link).

    `target` is the URL the task was processing, or the raw reference when
    the failure happened before it could be normalized.
    """
    stage: str
    target: str
    detail: str
    cause: Optional[BaseException] = None

    @classmethod
    def from_exception(cls, exc: CrawlStageError) -> "CrawlError":
        return cls(exc.stage, exc.target, exc.detail, exc.cause)

    def __str__(self) -> str:
        return f"{self.stage}: {self.detail}"
