"""In-memory LRU cache, selected in the gateway config with ``cache: {inmemoryLRU: {max: 500}}``"""
import typing

from meshwire.config import Config
from meshwire.plugins.cache import InMemoryLRUCache

__all__ = ["default", "create_cache"]


def create_cache(config: typing.Optional[typing.Mapping[str, typing.Any]] = None) -> InMemoryLRUCache:
    max_size = (config or {}).get("max") or Config.CACHE_MAX_SIZE
    return InMemoryLRUCache(max_size=max_size)


default = create_cache
