import requests
from typing import Callable, Optional

from sitecrawl.domain.http_response import HttpResponse
from sitecrawl.exceptions import HttpFetchError

DEFAULT_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8"
DEFAULT_ACCEPT_LANGUAGE = "en-US,en;q=0.5"


def make_session(max_redirects: int = 20) -> requests.Session:
    """Build the shared session; following more than `max_redirects` raises TooManyRedirects."""
    session = requests.Session()
    session.max_redirects = int(max_redirects)
    return session


class HttpService:
    """
    HTTP client wrapper for fetching web pages.

    Requires http_client callable for dependency injection (DIP compliance).
    This enables easy testing without patching and allows swapping HTTP libraries.
    """

    def __init__(self, user_agent: str, http_client: Callable, timeout: int = 10):
        self.user_agent = user_agent
        self.timeout = timeout
        self.http_client = http_client

    def headers(self, referer: Optional[str] = None) -> dict:
        headers = {
            "User-Agent": self.user_agent,
            "Accept": DEFAULT_ACCEPT,
            "Accept-Language": DEFAULT_ACCEPT_LANGUAGE,
        }
        if referer:
            headers["Referer"] = referer
        return headers

    def fetch(self, url: str, referer: Optional[str] = None) -> HttpResponse:
        """GET `url` and return the status plus an unread body stream.

        Transport failures, timeouts and redirect loops raise HttpFetchError.
        Any status code, including 4xx/5xx, is returned as a normal response.

        `timeout` bounds the connect and each socket read, not the whole
        exchange: a server trickling bytes can keep a fetch open longer.
        """
        try:
            resp = self.http_client(url, headers=self.headers(referer), timeout=self.timeout, stream=True)
        except requests.exceptions.RequestException as e:
            raise HttpFetchError(url, e) from e

        # Let urllib3 undo gzip/deflate while the body is streamed.
        raw = resp.raw
        if hasattr(raw, "decode_content"):
            raw.decode_content = True

        ct = None
        if hasattr(resp, 'headers'):
            ct = resp.headers.get('Content-Type')

        return HttpResponse(resp.status_code, raw, ct, getattr(resp, "reason", None))
