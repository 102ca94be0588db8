import pytest

from poolgraph.rpc.endpoint_pool import EndpointPool
from poolgraph.rpc.errors import ResourceExhausted

URLS = ["https://a.test", "https://b.test", "https://c.test", "https://d.test"]


def take(pool, n):
    return [pool.next() for _ in range(n)]


def test_next_cycles_with_period_n():
    pool = EndpointPool(URLS)
    assert take(pool, 8) == URLS + URLS


def test_duplicate_urls_collapse():
    pool = EndpointPool(["https://a.test", "https://a.test", "https://b.test"])
    assert len(pool) == 2
    assert pool.active == ("https://a.test", "https://b.test")


def test_evicted_endpoints_never_reappear():
    pool = EndpointPool(URLS)
    pool.evict("https://b.test")
    pool.evict("https://d.test")

    seen = take(pool, 10)
    assert set(seen) == {"https://a.test", "https://c.test"}
    # period shrinks to N - k
    assert seen[:2] * 5 == seen
    assert pool.evicted == frozenset({"https://b.test", "https://d.test"})


def test_evict_before_cursor_keeps_rotation_order():
    pool = EndpointPool(["https://a.test", "https://b.test", "https://c.test"])
    assert take(pool, 2) == ["https://a.test", "https://b.test"]
    pool.evict("https://a.test")
    assert take(pool, 3) == ["https://c.test", "https://b.test", "https://c.test"]


def test_evict_last_position_wraps_cursor():
    pool = EndpointPool(["https://a.test", "https://b.test", "https://c.test"])
    take(pool, 2)  # cursor now on c
    pool.evict("https://c.test")
    assert pool.next() == "https://a.test"


def test_evict_unknown_or_twice_is_noop():
    pool = EndpointPool(URLS)
    pool.evict("https://zzz.test")
    pool.evict("https://a.test")
    pool.evict("https://a.test")
    assert len(pool) == 3


def test_empty_pool_raises():
    pool = EndpointPool(["https://a.test"])
    pool.evict("https://a.test")
    assert pool.is_empty
    with pytest.raises(ResourceExhausted):
        pool.next()
