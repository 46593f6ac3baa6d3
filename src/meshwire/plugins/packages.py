"""Convention based lookup of gateway extensions

Handlers, caches, pub/sub backends and mergers are referenced by short names in
the gateway config, e.g. ``handler: openapi`` or ``cache: {redis: {...}}``. The
name is expanded into an ordered list of module identifiers which are probed one
at a time until one imports.
"""
from __future__ import annotations

import json
import logging
import os
import typing

import aiofiles
import aiofiles.os
from flupy import flu
from meshwire.config import Config
from meshwire.exceptions import PackageLoadError, PackageNotFoundError
from meshwire.gql.merger import stitching_merger
from meshwire.plugins.cache import InMemoryLRUCache
from meshwire.plugins.pubsub import PubSub
from meshwire.types import ImportFn, KeyValueCache, MeshPubSub

__all__ = [
    "candidate_modules",
    "get_package",
    "resolve_handler",
    "resolve_cache",
    "resolve_pubsub",
    "resolve_merger",
    "resolve_introspection_cache",
]

logger = logging.getLogger(__name__)

_SEPARATORS = ("-", ".", "/")


def candidate_modules(name: str, category: str, scope: typing.Optional[str] = None) -> typing.List[str]:
    """Ordered module identifiers to probe for *name* in *category*

    Example: ("Redis", "cache") with scope "meshwire"
        meshwire.redis
        meshwire.redis_cache
        meshwire.cache_redis
        redis
        redis_cache
        cache_redis
        cache
        <cwd>/Redis
    """
    scope = Config.PACKAGE_SCOPE if scope is None else scope
    cased_name = Config.package_name_mapper(name)
    cased_category = Config.package_name_mapper(category)

    possible_names = [
        f"{scope}.{cased_name}",
        f"{scope}.{cased_name}_{cased_category}",
        f"{scope}.{cased_category}_{cased_name}",
        cased_name,
        f"{cased_name}_{cased_category}",
        f"{cased_category}_{cased_name}",
        cased_category,
    ]
    if any(sep in name for sep in _SEPARATORS):
        possible_names.append(name)
    possible_names.append(os.path.abspath(name))

    return flu(possible_names).unique().collect()


def _is_missing(exc: Exception, module_name: str) -> bool:
    """Was *exc* raised because *module_name* itself does not exist?

    A missing dependency imported by an existing candidate does not count.
    """
    if isinstance(exc, ModuleNotFoundError) and exc.name:
        return module_name == exc.name or module_name.startswith(exc.name + ".")
    message = str(exc)
    return f"No module named '{module_name}'" in message or "Could not locate module" in message


def _default_export(exported: typing.Any, named_fallbacks: typing.Sequence[str] = ()) -> typing.Any:
    for attr in ("default", *named_fallbacks):
        value = getattr(exported, attr, None)
        if value is not None:
            return value
    return exported


async def get_package(
    name: str,
    category: str,
    import_fn: ImportFn,
    named_fallbacks: typing.Sequence[str] = (),
    scope: typing.Optional[str] = None,
) -> typing.Any:
    """Import the first candidate module for *name* and return its export

    The export is the module's ``default`` attribute, then any of
    *named_fallbacks*, then the module itself.

    **Raises**

    * **PackageLoadError**: a candidate exists but failed to import
    * **PackageNotFoundError**: no candidate exists
    """
    for module_name in candidate_modules(name, category, scope=scope):
        try:
            exported = await import_fn(module_name)
        except Exception as exc:  # pylint: disable=broad-except
            if not _is_missing(exc, module_name):
                raise PackageLoadError(f"Unable to load {category} matching {name}: {exc}") from exc
            logger.debug("No %s at %s", category, module_name)
            continue

        logger.debug("Resolved %s %s to %s", category, name, module_name)
        return _default_export(exported, named_fallbacks)

    raise PackageNotFoundError(f"Unable to find {category} matching {name}")


async def resolve_handler(name: str, import_fn: ImportFn) -> typing.Any:
    return await get_package(str(name), "handler", import_fn, named_fallbacks=("parser",))


async def resolve_cache(
    cache_config: typing.Optional[typing.Mapping[str, typing.Any]], import_fn: ImportFn
) -> KeyValueCache:
    """Instantiate the configured cache, or an in-memory LRU cache when none is configured

    The config holds a single key naming the backend, its value is the backend config:

        {"redis": {"host": "localhost"}}
    """
    if cache_config:
        cache_name = next(iter(cache_config))
        config = cache_config[cache_name]
        cache_cls = await get_package(str(cache_name), "cache", import_fn)
        return cache_cls(config)

    return InMemoryLRUCache(max_size=Config.CACHE_MAX_SIZE)


async def resolve_pubsub(
    pubsub_config: typing.Union[None, str, typing.Mapping[str, typing.Any]], import_fn: ImportFn
) -> MeshPubSub:
    """Instantiate the configured pub/sub, or an in-process PubSub when none is configured

    Accepts a backend name or {"name": ..., "config": ...}
    """
    if pubsub_config:
        if isinstance(pubsub_config, str):
            pubsub_name, config = pubsub_config, None
        else:
            pubsub_name, config = pubsub_config["name"], pubsub_config.get("config")

        pubsub_cls = await get_package(str(pubsub_name), "pubsub", import_fn)
        return pubsub_cls(config)

    return PubSub(max_subscribers=Config.PUBSUB_MAX_SUBSCRIBERS)


async def resolve_merger(merger_config: typing.Optional[str], import_fn: ImportFn) -> typing.Callable[..., typing.Any]:
    if merger_config:
        return await get_package(str(merger_config), "merger", import_fn)
    return stitching_merger


async def resolve_introspection_cache(
    introspection_cache_config: typing.Optional[str], base_dir: str
) -> typing.Dict[str, typing.Any]:
    """Read a saved introspection result, relative paths are resolved against *base_dir*"""
    if introspection_cache_config:
        path = (
            introspection_cache_config
            if os.path.isabs(introspection_cache_config)
            else os.path.join(base_dir, introspection_cache_config)
        )
        if await aiofiles.os.path.exists(path):
            async with aiofiles.open(path, "r") as cache_file:
                return json.loads(await cache_file.read())
    return {}
