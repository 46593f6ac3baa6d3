import inspect
import re
import typing
from collections.abc import Mapping, MutableMapping, MutableSequence, Sequence

__all__ = ["get_path", "set_path", "to_path", "maybe_await"]

_re_path_token = re.compile(r"[^.\[\]]+")


def to_path(path: typing.Union[str, typing.Sequence[str]]) -> typing.List[str]:
    """Split a dotted path into its keys

    "a.b[0].c" -> ["a", "b", "0", "c"]
    """
    if isinstance(path, str):
        return _re_path_token.findall(path)
    return [str(x) for x in path]


def _get_key(obj: typing.Any, key: str) -> typing.Any:
    if isinstance(obj, Mapping):
        return obj.get(key)
    if isinstance(obj, Sequence) and not isinstance(obj, (str, bytes)):
        try:
            return obj[int(key)]
        except (ValueError, IndexError):
            return None
    return getattr(obj, key, None)


def get_path(obj: typing.Any, path: typing.Union[str, typing.Sequence[str]], default: typing.Any = None) -> typing.Any:
    """Retrieve the value at *path* from nested mappings, sequences and objects.
    Missing intermediate keys return *default* instead of raising"""
    current = obj
    for key in to_path(path):
        if current is None:
            return default
        current = _get_key(current, key)
    return default if current is None else current


def _child(container: typing.Any, key: str) -> typing.Any:
    if isinstance(container, MutableSequence):
        index = _index(key)
        return container[index] if index < len(container) else None
    return container.get(key)


def _assign(container: typing.Any, key: str, value: typing.Any) -> None:
    if isinstance(container, MutableSequence):
        index = _index(key)
        if index >= len(container):
            container.extend([None] * (index + 1 - len(container)))
        container[index] = value
    else:
        container[key] = value


def _index(key: str) -> int:
    if not key.isdigit():
        raise ValueError(f"List index expected, got {key!r}")
    return int(key)


def set_path(obj: typing.MutableMapping, path: typing.Union[str, typing.Sequence[str]], value: typing.Any):
    """Set *value* at *path*, creating intermediate containers as required

    Numeric keys create lists:

        set_path({}, "where.id", 4)       -> {"where": {"id": 4}}
        set_path({}, "items[1].id", 4)    -> {"items": [None, {"id": 4}]}
    """
    keys = to_path(path)
    if not keys:
        raise ValueError("Path must contain an element")

    current = obj
    for key, next_key in zip(keys, keys[1:]):
        nxt = _child(current, key)
        if not isinstance(nxt, (MutableMapping, MutableSequence)):
            nxt = [] if next_key.isdigit() else {}
            _assign(current, key, nxt)
        current = nxt
    _assign(current, keys[-1], value)
    return obj


async def maybe_await(value: typing.Any) -> typing.Any:
    if inspect.isawaitable(value):
        return await value
    return value
