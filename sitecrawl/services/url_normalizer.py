from typing import Optional
from urllib.parse import urldefrag, urljoin, urlsplit

from sitecrawl.exceptions import UrlParseError

ALLOWED_SCHEMES = frozenset(("http", "https"))


def normalize_url(reference: str, base: str) -> Optional[str]:
    """Resolve `reference` against `base` into a crawl target.

    - Relative references are joined against `base` (RFC 3986 resolution)
    - Fragments (#...) are dropped so anchors within a page are one target
    - Scheme and host are lowercased so case variants are one target
    - Returns None when the resolved scheme is not http/https (skip, not an error)
    - Raises UrlParseError for input urllib cannot parse
    """
    try:
        joined, _ = urldefrag(urljoin(base, reference.strip()))
        parts = urlsplit(joined)
        # Touching .port validates it; urlsplit alone accepts "host:abc".
        parts.port
    except ValueError as e:
        raise UrlParseError(reference, e) from e

    scheme = parts.scheme.lower()
    if scheme not in ALLOWED_SCHEMES:
        return None
    if not parts.netloc:
        raise UrlParseError(reference, ValueError("missing host"))

    # Userinfo keeps its case; only host[:port] is case-insensitive.
    userinfo, at, hostport = parts.netloc.rpartition("@")
    netloc = userinfo + at + hostport.lower()
    if scheme == parts.scheme and netloc == parts.netloc:
        return joined
    return parts._replace(scheme=scheme, netloc=netloc).geturl()
