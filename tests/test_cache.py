"""Tests for the TTL status cache."""

from craftstatus.cache import CACHE_TTL, StatusCache
from craftstatus.status import CheckError, NotRepo, Tracked


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


def test_set_then_get():
    cache = StatusCache(clock=FakeClock())
    status = Tracked(behind=2, branch="main", upstream="origin/main")
    cache.set("/ws/SRC/V1/repo", status)
    assert cache.get("/ws/SRC/V1/repo") == status


def test_get_missing():
    cache = StatusCache(clock=FakeClock())
    assert cache.get("/nope") is None


def test_default_ttl_is_five_minutes():
    assert CACHE_TTL == 300
    assert StatusCache().ttl == 300


def test_entry_within_ttl():
    clock = FakeClock()
    cache = StatusCache(clock=clock)
    cache.set("/repo", NotRepo())
    clock.now += CACHE_TTL - 1
    assert cache.get("/repo") == NotRepo()


def test_expired_entry_is_evicted():
    clock = FakeClock()
    cache = StatusCache(clock=clock)
    cache.set("/repo", NotRepo())
    clock.now += CACHE_TTL + 1
    assert cache.get("/repo") is None
    assert "/repo" not in cache
    # Going back in time doesn't resurrect it
    clock.now -= CACHE_TTL + 1
    assert cache.get("/repo") is None


def test_set_overwrites_and_refreshes_timestamp():
    clock = FakeClock()
    cache = StatusCache(clock=clock)
    cache.set("/repo", NotRepo())
    clock.now += CACHE_TTL - 10
    cache.set("/repo", CheckError("boom"))
    clock.now += 20
    assert cache.get("/repo") == CheckError("boom")


def test_discard_and_clear():
    cache = StatusCache(clock=FakeClock())
    cache.set("/a", NotRepo())
    cache.set("/b", NotRepo())
    cache.discard("/a")
    cache.discard("/missing")
    assert cache.get("/a") is None
    assert len(cache) == 1
    cache.clear()
    assert len(cache) == 0
    assert cache.get("/b") is None


def test_expired_entry_not_contained_without_get():
    clock = FakeClock()
    cache = StatusCache(clock=clock)
    cache.set("/repo", NotRepo())
    cache.set("/other", NotRepo())
    assert "/repo" in cache
    assert len(cache) == 2
    clock.now += CACHE_TTL + 1
    assert "/repo" not in cache
    assert len(cache) == 0
