import threading

import pytest

from sitecrawl.exceptions import RateLimitError
from sitecrawl.services.rate_limiter import RateLimiter


class FakeClock:
    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


def test_first_acquire_uses_burst_token(clock):
    limiter = RateLimiter(rate=5, burst=1, clock=clock, sleep=clock.sleep)
    limiter.acquire()
    assert clock.sleeps == []


def test_second_acquire_waits_one_interval(clock):
    limiter = RateLimiter(rate=5, burst=1, clock=clock, sleep=clock.sleep)
    limiter.acquire()
    limiter.acquire()
    assert clock.sleeps == [pytest.approx(0.2)]


def test_tokens_refill_over_time_up_to_burst(clock):
    limiter = RateLimiter(rate=5, burst=1, clock=clock, sleep=clock.sleep)
    limiter.acquire()
    clock.now += 10
    limiter.acquire()
    limiter.acquire()
    # Ten idle seconds still only bank a single token.
    assert clock.sleeps == [pytest.approx(0.2)]


def test_burst_allows_several_immediate_acquires(clock):
    limiter = RateLimiter(rate=5, burst=3, clock=clock, sleep=clock.sleep)
    for _ in range(3):
        limiter.acquire()
    assert clock.sleeps == []
    limiter.acquire()
    assert clock.sleeps == [pytest.approx(0.2)]


def test_waiters_queue_behind_each_other(clock):
    # Sleep is recorded but time does not move, as with concurrent callers.
    sleeps = []
    limiter = RateLimiter(rate=5, burst=1, clock=clock, sleep=sleeps.append)
    for _ in range(4):
        limiter.acquire()
    assert sleeps == [pytest.approx(0.2), pytest.approx(0.4), pytest.approx(0.6)]


def test_cancelled_before_wait_raises():
    stop = threading.Event()
    stop.set()
    limiter = RateLimiter()
    with pytest.raises(RateLimitError) as exc:
        limiter.acquire(stop, "http://example.com/a")
    assert exc.value.stage == "rate_limit"
    assert exc.value.target == "http://example.com/a"


class _FiringEvent:
    def is_set(self):
        return False

    def wait(self, timeout):
        return True


def test_cancelled_during_wait_returns_reservation(clock):
    limiter = RateLimiter(rate=5, burst=1, clock=clock, sleep=clock.sleep)
    limiter.acquire()
    with pytest.raises(RateLimitError):
        limiter.acquire(_FiringEvent(), "http://example.com/b")
    limiter.acquire()
    # Without giving the token back this would be 0.4.
    assert clock.sleeps == [pytest.approx(0.2)]


def test_stop_event_not_set_waits_on_event(clock):
    limiter = RateLimiter(rate=5, burst=1, clock=clock, sleep=clock.sleep)
    limiter.acquire()
    limiter.acquire(threading.Event())
    assert clock.sleeps == []


@pytest.mark.parametrize("kwargs", [{"rate": 0}, {"rate": -1}, {"burst": 0}])
def test_invalid_settings_rejected(kwargs):
    with pytest.raises(ValueError):
        RateLimiter(**kwargs)
