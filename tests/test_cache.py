"""
Tests for CacheManager and the with_cache get-or-compute wrapper.
"""

import asyncio

import pytest

from adapters.cache_decorator import with_cache
from adapters.cache_manager import CacheManager


class FakeClock:
    def __init__(self, now: float = 1_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return CacheManager(default_ttl=1000, clock=clock)


# =============================================================================
# CacheManager
# =============================================================================


def test_generate_key_is_order_independent():
    a = CacheManager.generate_key("spoonacular:searchRecipes", {"query": "pasta", "number": 2})
    b = CacheManager.generate_key("spoonacular:searchRecipes", {"number": 2, "query": "pasta"})
    assert a == b == 'spoonacular:searchRecipes:{"number":2,"query":"pasta"}'
    assert CacheManager.generate_key("ns") == "ns:{}"


def test_entries_expire_after_ttl(cache, clock):
    cache.set("k", {"v": 1})
    clock.advance(1000)
    # expiry is exclusive: an entry is still live at its expiry instant
    assert cache.get("k") == {"v": 1}
    clock.advance(1)
    assert cache.get("k") is None
    assert len(cache) == 0


def test_per_entry_ttl(cache, clock):
    cache.set("short", 1, ttl=10)
    cache.set("long", 2, ttl=10_000)
    clock.advance(11)
    assert not cache.has("short")
    assert cache.has("long")


def test_zero_default_ttl_expires_on_next_tick(clock):
    cache = CacheManager(default_ttl=0, clock=clock)
    cache.set("k", "v")
    assert cache.get("k") == "v"
    clock.advance(1)
    assert cache.get("k") is None


def test_none_value_is_a_miss_for_get_but_present_for_has(cache):
    cache.set("k", None)
    assert cache.get("k") is None
    assert cache.has("k")


def test_invalidate_and_clear(cache):
    cache.set("a", 1)
    cache.set("b", 2)
    cache.invalidate("a")
    cache.invalidate("missing")
    assert not cache.has("a")
    assert len(cache) == 1
    cache.clear()
    assert len(cache) == 0


def test_invalidate_by_namespace_matches_prefix_exactly(cache):
    cache.set(CacheManager.generate_key("spoonacular:searchRecipes", {"q": 1}), 1)
    cache.set(CacheManager.generate_key("spoonacular:searchRecipes", {"q": 2}), 2)
    cache.set(CacheManager.generate_key("spoonacular:searchRecipesV2", {"q": 1}), 3)
    cache.set(CacheManager.generate_key("themealdb:searchRecipes", {"q": 1}), 4)

    assert cache.invalidate_by_namespace("spoonacular:searchRecipes") == 2
    assert len(cache) == 2
    assert cache.invalidate_by_namespace("unknown") == 0


# =============================================================================
# with_cache
# =============================================================================


class CountingFetch:
    def __init__(self, fail_times: int = 0, delay: float = 0):
        self.calls = 0
        self.fail_times = fail_times
        self.delay = delay

    async def __call__(self, params):
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.calls <= self.fail_times:
            raise RuntimeError("upstream down")
        return {"echo": dict(params), "call": self.calls}


@pytest.mark.anyio
async def test_second_call_is_served_from_cache(cache):
    fetch = CountingFetch()
    cached = with_cache(cache, "ns", fetch)

    first = await cached({"q": "pasta"})
    second = await cached({"q": "pasta"})
    other = await cached({"q": "soup"})

    assert first == second == {"echo": {"q": "pasta"}, "call": 1}
    assert other["call"] == 2
    assert fetch.calls == 2
    assert cached.namespace == "ns"


@pytest.mark.anyio
async def test_cached_value_expires(cache, clock):
    fetch = CountingFetch()
    cached = with_cache(cache, "ns", fetch, ttl=50)

    await cached({"q": 1})
    clock.advance(51)
    await cached({"q": 1})
    assert fetch.calls == 2


@pytest.mark.anyio
async def test_failures_are_not_cached(cache):
    fetch = CountingFetch(fail_times=1)
    cached = with_cache(cache, "ns", fetch)

    with pytest.raises(RuntimeError):
        await cached({"q": 1})
    assert len(cache) == 0

    assert (await cached({"q": 1}))["call"] == 2


@pytest.mark.anyio
async def test_concurrent_identical_calls_both_run_without_coalescing(cache):
    fetch = CountingFetch(delay=0.01)
    cached = with_cache(cache, "ns", fetch)

    await asyncio.gather(cached({"q": 1}), cached({"q": 1}))
    assert fetch.calls == 2


@pytest.mark.anyio
async def test_coalesce_shares_one_pending_call(cache):
    fetch = CountingFetch(delay=0.01)
    cached = with_cache(cache, "ns", fetch, coalesce=True)

    a, b = await asyncio.gather(cached({"q": 1}), cached({"q": 1}))
    assert fetch.calls == 1
    assert a == b
    # later calls hit the cache
    await cached({"q": 1})
    assert fetch.calls == 1


@pytest.mark.anyio
async def test_coalesced_failure_reaches_every_waiter_and_is_retried(cache):
    fetch = CountingFetch(fail_times=1, delay=0.01)
    cached = with_cache(cache, "ns", fetch, coalesce=True)

    results = await asyncio.gather(
        cached({"q": 1}), cached({"q": 1}), return_exceptions=True
    )
    assert all(isinstance(r, RuntimeError) for r in results)
    assert fetch.calls == 1

    assert (await cached({"q": 1}))["call"] == 2
