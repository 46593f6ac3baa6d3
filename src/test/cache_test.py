import pytest
from meshwire.plugins.cache import InMemoryLRUCache
from meshwire.types import KeyValueCache


class FakeTimer:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def test_satisfies_cache_protocol():
    assert isinstance(InMemoryLRUCache(), KeyValueCache)


@pytest.mark.asyncio
async def test_get_set_delete():
    cache = InMemoryLRUCache()
    assert await cache.get("missing") is None

    await cache.set("a", {"b": 1})
    assert await cache.get("a") == {"b": 1}

    await cache.delete("a")
    await cache.delete("a")
    assert await cache.get("a") is None


@pytest.mark.asyncio
async def test_least_recently_used_entry_is_evicted():
    cache = InMemoryLRUCache(max_size=2)
    await cache.set("a", 1)
    await cache.set("b", 2)
    await cache.get("a")
    await cache.set("c", 3)

    assert await cache.get("a") == 1
    assert await cache.get("b") is None
    assert await cache.get("c") == 3
    assert len(cache) == 2


@pytest.mark.asyncio
async def test_ttl_expiry():
    timer = FakeTimer()
    cache = InMemoryLRUCache(timer=timer)
    await cache.set("short", 1, ttl=10)
    await cache.set("forever", 2)

    timer.now = 5
    assert await cache.get("short") == 1

    timer.now = 11
    assert await cache.get("short") is None
    assert await cache.get("forever") == 2
