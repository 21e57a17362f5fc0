import pytest

from sitecrawl.domain.crawl_context import CrawlContext, host_of
from sitecrawl.domain.crawl_task import CrawlTask
from sitecrawl.exceptions import InvalidSeedError


def test_context_keeps_seed_and_limits():
    context = CrawlContext("http://Example.com/start", max_depth=3, max_visited=10)
    assert context.seed_url == "http://Example.com/start"
    assert context.seed_host == "example.com"
    assert context.max_depth == 3
    assert context.max_visited == 10


@pytest.mark.parametrize("seed", ["", "   ", "example.com", "ftp://example.com", "http://", "http://[::1"])
def test_invalid_seed_is_rejected(seed):
    with pytest.raises(InvalidSeedError):
        CrawlContext(seed)


def test_each_context_gets_its_own_visited_set():
    a = CrawlContext("http://example.com")
    b = CrawlContext("http://example.com")
    assert a.claim("http://example.com/x")
    assert b.claim("http://example.com/x")


def test_in_scope_compares_host_and_port():
    context = CrawlContext("http://example.com:8080/")
    assert context.in_scope("http://EXAMPLE.com:8080/page")
    assert not context.in_scope("http://example.com/page")
    assert not context.in_scope("http://sub.example.com:8080/page")


def test_host_of_without_port():
    assert host_of("https://Example.com/a?b=1") == "example.com"


def test_child_task_is_one_level_deeper():
    task = CrawlTask("http://example.com", 1)
    assert task.child("http://example.com/a") == CrawlTask("http://example.com/a", 2)
