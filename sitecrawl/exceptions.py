"""Custom exceptions for SiteCrawl services."""
from typing import Optional


class InvalidSeedError(ValueError):
    """Raised when the seed URL cannot be used to start a crawl."""

    def __init__(self, seed_url: str, reason: str):
        self.seed_url = seed_url
        self.reason = reason
        super().__init__(f"invalid seed URL {seed_url!r}: {reason}")


class CrawlStageError(Exception):
    """Base for failures that end a single crawl task.

    `stage` names the step that failed; `target` is the URL (or raw input)
    the task was working on; `cause` is the underlying exception, if any.
    """

    stage = "internal"

    def __init__(self, target: str, detail: str, cause: Optional[BaseException] = None):
        self.target = target
        self.detail = detail
        self.cause = cause
        super().__init__(detail)


class UrlParseError(CrawlStageError):
    """Raised for a reference that cannot be parsed as a URL."""

    stage = "parse"

    def __init__(self, reference: str, cause: Optional[BaseException] = None):
        super().__init__(reference, f"error parsing URL {reference}: {cause}", cause)


class HttpFetchError(CrawlStageError):
    """Raised when an HTTP fetch fails due to network/transport errors."""

    stage = "fetch"

    def __init__(self, url: str, original: Exception):
        self.url = url
        self.original = original
        super().__init__(url, f"HTTP fetch failed for {url}: {original}", original)


class HttpStatusError(CrawlStageError):
    """Raised by the engine when a response is not 200 OK."""

    stage = "status"

    def __init__(self, url: str, status_code: int, reason: Optional[str] = None):
        self.status_code = status_code
        status = f"{status_code} {reason}" if reason else str(status_code)
        super().__init__(url, f"non-OK status for {url}: {status}")


class MarkupParseError(CrawlStageError):
    """Raised when the markup stream cannot be read or tokenized to the end."""

    stage = "markup"

    def __init__(self, url: str, original: Exception):
        super().__init__(url, f"error parsing {url}: {original}", original)


class RateLimitError(CrawlStageError):
    """Raised when waiting for a rate-limit token is cancelled."""

    stage = "rate_limit"

    def __init__(self, url: str, reason: str = "wait cancelled"):
        super().__init__(url, f"rate limit error for {url}: {reason}")
