from __future__ import annotations

from typing import Optional, Protocol

from sitecrawl.domain.http_response import HttpResponse


class Fetcher(Protocol):
    """Fetch a URL and return a status plus a body stream.

    This is intentionally small so the engine can be driven by a fake in
    tests, or by a different HTTP stack later.
    """

    def fetch(self, url: str, referer: Optional[str] = None) -> HttpResponse: ...


class HttpServiceFetcher:
    def __init__(self, http_service):
        self._http_service = http_service

    def fetch(self, url: str, referer: Optional[str] = None) -> HttpResponse:
        return self._http_service.fetch(url, referer=referer)
