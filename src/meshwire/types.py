from __future__ import annotations

import typing
from types import ModuleType

from typing_extensions import Protocol, runtime_checkable

__all__ = [
    "ResolverData",
    "MethodCallResolver",
    "SubscriptionResolver",
    "AdditionalResolver",
    "ArgsConfig",
    "FilterConfig",
    "ResolverMap",
    "ImportFn",
    "KeyValueCache",
    "MeshPubSub",
    "parse_descriptor",
]

# type name -> field name -> {"resolve", "subscribe", "selection_set"}
ResolverMap = typing.Dict[str, typing.Dict[str, typing.Any]]

# Loads a module by identifier, raising ModuleNotFoundError when it does not exist
ImportFn = typing.Callable[[str], typing.Awaitable[ModuleType]]


class ResolverData(typing.NamedTuple):
    """Read-only snapshot of a single resolver invocation"""

    root: typing.Any
    args: typing.Dict[str, typing.Any]
    context: typing.Any
    info: typing.Any

    def to_dict(self) -> typing.Dict[str, typing.Any]:
        return {"root": self.root, "args": self.args, "context": self.context, "info": self.info}


ArgsConfig = typing.Union[
    typing.Mapping[str, typing.Any],
    typing.Callable[[ResolverData], typing.Any],
]

FilterConfig = typing.Union[str, typing.Callable[[ResolverData], bool]]


class MethodCallResolver(typing.NamedTuple):
    """Resolves a field by calling *target_method* on the *target_source* api"""

    type: str
    field: str
    target_source: str
    target_method: str
    args: ArgsConfig
    result_selected_fields: typing.Optional[typing.Any] = None
    result_selection_set: typing.Optional[str] = None
    result_depth: typing.Optional[int] = None
    return_data: typing.Optional[str] = None
    required_selection_set: typing.Optional[str] = None

    @classmethod
    def from_dict(cls, contents: typing.Mapping[str, typing.Any]) -> MethodCallResolver:
        return cls(
            type=contents["type"],
            field=contents["field"],
            target_source=contents["targetSource"],
            target_method=contents["targetMethod"],
            args=contents.get("args") or {},
            result_selected_fields=contents.get("resultSelectedFields"),
            result_selection_set=contents.get("resultSelectionSet"),
            result_depth=contents.get("resultDepth"),
            return_data=contents.get("returnData"),
            required_selection_set=contents.get("requiredSelectionSet"),
        )


class SubscriptionResolver(typing.NamedTuple):
    """Resolves a subscription field from events published on *pubsub_topic*"""

    type: str
    field: str
    pubsub_topic: str
    filter_by: typing.Optional[FilterConfig] = None
    return_data: typing.Optional[str] = None

    @classmethod
    def from_dict(cls, contents: typing.Mapping[str, typing.Any]) -> SubscriptionResolver:
        return cls(
            type=contents["type"],
            field=contents["field"],
            pubsub_topic=contents["pubsubTopic"],
            filter_by=contents.get("filterBy"),
            return_data=contents.get("returnData"),
        )


AdditionalResolver = typing.Union[str, MethodCallResolver, SubscriptionResolver]


def parse_descriptor(
    descriptor: typing.Union[AdditionalResolver, typing.Mapping[str, typing.Any]]
) -> AdditionalResolver:
    """Convert a raw config entry into a resolver descriptor

    Strings (file paths) and already built descriptors are returned unchanged.
    Mappings are discriminated on the presence of a "pubsubTopic" key.
    """
    if isinstance(descriptor, (str, MethodCallResolver, SubscriptionResolver)):
        return descriptor
    if "pubsubTopic" in descriptor:
        return SubscriptionResolver.from_dict(descriptor)
    return MethodCallResolver.from_dict(descriptor)


@runtime_checkable
class MeshPubSub(Protocol):
    def publish(self, topic: str, payload: typing.Any) -> typing.Any:
        ...

    def async_iterator(self, topic: str) -> typing.AsyncIterator[typing.Any]:
        ...


@runtime_checkable
class KeyValueCache(Protocol):
    async def get(self, key: str) -> typing.Any:
        ...

    async def set(self, key: str, value: typing.Any, ttl: typing.Optional[float] = None) -> None:
        ...

    async def delete(self, key: str) -> None:
        ...
