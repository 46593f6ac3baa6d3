import math
import time
import typing

from cachetools import TLRUCache

__all__ = ["InMemoryLRUCache"]


class _Entry(typing.NamedTuple):
    value: typing.Any
    ttl: typing.Optional[float]


def _time_to_use(_key, entry: _Entry, now: float) -> float:
    if entry.ttl is None or entry.ttl <= 0:
        return math.inf
    return now + entry.ttl


class InMemoryLRUCache:
    """Bounded, process local key value cache

    Least recently used entries are evicted once *max_size* is reached.
    Entries stored with a ttl (seconds) expire independently.
    """

    def __init__(self, max_size: int = 1024, timer: typing.Callable[[], float] = time.monotonic):
        self.max_size = max_size
        self._store: TLRUCache = TLRUCache(maxsize=max_size, ttu=_time_to_use, timer=timer)

    async def get(self, key: str) -> typing.Any:
        entry = self._store.get(key)
        return entry.value if entry is not None else None

    async def set(self, key: str, value: typing.Any, ttl: typing.Optional[float] = None) -> None:
        self._store[key] = _Entry(value, ttl)

    async def delete(self, key: str) -> None:
        self._store.pop(key, None)

    def __len__(self) -> int:
        return len(self._store)
