from animix.core.config import DEFAULT_DELAYS
from animix.core.rate_limit import RateLimiter


def test_waits_configured_delay():
    slept = []
    limiter = RateLimiter(DEFAULT_DELAYS, sleep=slept.append)
    limiter.wait("jikan.top")
    limiter.wait("jikan.recommendations")
    assert slept == [0.5, 1.0]


def test_unknown_call_site_does_not_sleep():
    slept = []
    limiter = RateLimiter({"jikan.top": 0.5}, sleep=slept.append)
    limiter.wait("anilist.search")
    assert slept == []
    assert limiter.delay_for("anilist.search") == 0.0


def test_negative_delay_is_ignored():
    slept = []
    RateLimiter({"x": -1}, sleep=slept.append).wait("x")
    assert slept == []
