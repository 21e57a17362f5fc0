"""Dependency injection container for the application."""
from dependency_injector import containers, providers

from sitecrawl import config as env
from sitecrawl.services.crawl_executor import CrawlExecutor
from sitecrawl.services.crawl_policy import CrawlPolicy
from sitecrawl.services.fetcher import HttpServiceFetcher
from sitecrawl.services.http_service import HttpService, make_session
from sitecrawl.services.link_extractor import LinkExtractor
from sitecrawl.services.link_processor import LinkProcessor
from sitecrawl.services.rate_limiter import RateLimiter


# Environment variables used by the container (read via `sitecrawl.config` helpers).
#
# USER_AGENT (str, default: "SiteCrawl/0.1")
#   User-Agent header for outbound HTTP requests.
#
# HTTP_TIMEOUT (int seconds, default: 10)
#   Per-request timeout. There is no crawl-wide timeout.
#
# HTTP_MAX_REDIRECTS (int, default: 20)
#   Following more redirects than this is recorded as a fetch error.
#
# SITECRAWL_RATE_LIMIT (float requests/second, default: 5.0)
# SITECRAWL_RATE_BURST (int, default: 1)
#   Token bucket shared by every worker of a crawl.
#
# SITECRAWL_MAX_WORKERS (int, default: 8)
#   Worker threads draining the crawl frontier.
#
# SITECRAWL_RESULT_BUFFER_SIZE (int | optional)
#   Result stream capacity. Unset means "max visited", so nothing is dropped.
#   A smaller value drops (and logs) results when the reader falls behind.
ENV = {
    "USER_AGENT": env.USER_AGENT,
    "HTTP_TIMEOUT": env.get_int_env("HTTP_TIMEOUT", 10),
    "HTTP_MAX_REDIRECTS": env.get_int_env("HTTP_MAX_REDIRECTS", 20),
    "SITECRAWL_RATE_LIMIT": env.get_float_env("SITECRAWL_RATE_LIMIT", 5.0),
    "SITECRAWL_RATE_BURST": env.get_int_env("SITECRAWL_RATE_BURST", 1),
    "SITECRAWL_MAX_WORKERS": env.get_int_env("SITECRAWL_MAX_WORKERS", 8),
    "SITECRAWL_RESULT_BUFFER_SIZE": env.get_optional_int_env("SITECRAWL_RESULT_BUFFER_SIZE"),
}


class Container(containers.DeclarativeContainer):
    """Dependency injection container for SiteCrawl."""

    # Configuration
    config = providers.Configuration(default=ENV)

    # One pooled session for the whole process
    http_session = providers.Singleton(
        make_session,
        max_redirects=config.HTTP_MAX_REDIRECTS.as_(int),
    )

    http_service = providers.Singleton(
        HttpService,
        user_agent=config.USER_AGENT.as_(str),
        http_client=http_session.provided.get,
        timeout=config.HTTP_TIMEOUT.as_(int),
    )

    page_fetcher = providers.Singleton(
        HttpServiceFetcher,
        http_service=http_service,
    )

    # A fresh bucket per crawl; workers of one crawl share it.
    rate_limiter = providers.Factory(
        RateLimiter,
        rate=config.SITECRAWL_RATE_LIMIT.as_(float),
        burst=config.SITECRAWL_RATE_BURST.as_(int),
    )

    link_extractor = providers.Singleton(
        LinkExtractor
    )

    link_processor = providers.Singleton(
        LinkProcessor,
        link_extractor=link_extractor,
    )

    crawl_policy = providers.Singleton(
        CrawlPolicy
    )

    crawl_executor = providers.Factory(
        CrawlExecutor,
        fetcher=page_fetcher,
        rate_limiter=rate_limiter,
        link_processor=link_processor,
        crawl_policy=crawl_policy,
        max_workers=config.SITECRAWL_MAX_WORKERS.as_(int),
        result_buffer_size=config.SITECRAWL_RESULT_BUFFER_SIZE,
    )
