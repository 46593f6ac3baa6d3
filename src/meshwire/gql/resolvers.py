"""Compiles declarative "additional resolvers" from the gateway config into graphql-core field resolvers

Three descriptor shapes are supported:

    # A python file exposing a resolver map
    - ./resolvers.py

    # Resolve a field by calling an operation of another source
    - type: Query
      field: userPosts
      targetSource: Posts
      targetMethod: postsByUser
      args:
        where.userId: "{root.id}"
      returnData: items

    # Resolve a subscription field from pub/sub events
    - type: Subscription
      field: orderUpdated
      pubsubTopic: orders/{args.orderId}
      filterBy: root.status != "draft"
"""
from __future__ import annotations

import asyncio
import logging
import os
import typing
from collections.abc import Mapping

from meshwire.gql.alias import Error, OutputType, ResolveInfo, get_nullable_type, is_list_type
from meshwire.gql.delegate import DEFAULT_DELEGATION, DelegationEngine
from meshwire.gql.filters import compile_filter
from meshwire.gql.interpolation import interpolate
from meshwire.plugins.pubsub import with_filter
from meshwire.types import (
    AdditionalResolver,
    ArgsConfig,
    ImportFn,
    MeshPubSub,
    MethodCallResolver,
    ResolverData,
    ResolverMap,
    SubscriptionResolver,
    parse_descriptor,
)
from meshwire.utils import get_path, maybe_await, set_path

__all__ = [
    "resolve_additional_resolvers",
    "resolve_return_data",
    "normalize_method_args",
    "merge_resolvers",
]

logger = logging.getLogger(__name__)


def resolve_return_data(
    source: typing.Any,
    return_data: typing.Optional[str],
    context: typing.Any,
    info: ResolveInfo,
    return_type: typing.Optional[OutputType] = None,
    skip_type_merging: bool = False,
    delegation: DelegationEngine = DEFAULT_DELEGATION,
) -> typing.Any:
    """Extract the value at *return_data* from *source*

    Values extracted from inside a delegated source lose their tag during plain
    traversal, those are passed back through the delegation engine along with
    the source's unpathed errors and subschema so nested delegation keeps working.
    """
    result = source if isinstance(source, Exception) or not return_data else get_path(source, return_data)

    if isinstance(result, Error):
        return result.original_error if result.original_error is not None else result

    if delegation.is_external_object(result) or not delegation.is_external_object(source):
        return result

    errors = delegation.get_unpathed_errors(source)
    response_key = delegation.get_response_key_from_info(info)
    subschema = delegation.get_subschema(source, response_key)

    return delegation.resolve_external_value(result, errors, subschema, context, info, return_type, skip_type_merging)


def normalize_method_args(args: ArgsConfig, resolver_data: ResolverData) -> typing.Any:
    """Build target method arguments

    A mapping of dotted paths to templates expands into nested dicts:

        {"where.id": "{args.id}", "limit": 10} -> {"where": {"id": 4}, "limit": 10}

    A callable receives the ResolverData and may return a mapping or a list.
    """
    if callable(args):
        return args(resolver_data)

    method_args: typing.Dict[str, typing.Any] = {}
    for path, template in (args or {}).items():
        set_path(method_args, path, interpolate(template, resolver_data))
    return method_args


def _api_method(context: typing.Any, target_source: str, target_method: str) -> typing.Callable[..., typing.Any]:
    source_context = context[target_source] if isinstance(context, Mapping) else getattr(context, target_source)
    api = source_context["api"] if isinstance(source_context, Mapping) else source_context.api
    return api[target_method] if isinstance(api, Mapping) else getattr(api, target_method)


def _method_call_resolver(descriptor: MethodCallResolver, delegation: DelegationEngine) -> ResolverMap:
    async def resolve(root, info: ResolveInfo, **args):
        context = info.context
        resolver_data = ResolverData(root=root, args=args, context=context, info=info)
        method_args = normalize_method_args(descriptor.args, resolver_data)
        method = _api_method(context, descriptor.target_source, descriptor.target_method)

        async def call(single_args):
            return await maybe_await(
                method(
                    single_args,
                    selected_fields=descriptor.result_selected_fields,
                    selection_set=descriptor.result_selection_set,
                    depth=descriptor.result_depth,
                )
            )

        output_type = get_nullable_type(info.return_type)

        if not isinstance(method_args, list):
            result = await call(method_args)
            return resolve_return_data(
                result, descriptor.return_data, context, info, output_type, delegation=delegation
            )

        # One call per element, a failed element becomes null without failing its siblings
        item_type = output_type.of_type if is_list_type(output_type) else None

        async def call_element(single_args):
            try:
                result = await call(single_args)
            except Exception as exc:  # pylint: disable=broad-except
                logger.debug("%s.%s element failed: %s", descriptor.type, descriptor.field, exc)
                return None
            if isinstance(result, Exception):
                return None
            return resolve_return_data(result, descriptor.return_data, context, info, item_type, delegation=delegation)

        return list(await asyncio.gather(*[call_element(single_args) for single_args in method_args]))

    return {
        descriptor.type: {
            descriptor.field: {
                "selection_set": descriptor.required_selection_set,
                "resolve": resolve,
            }
        }
    }


def _subscription_resolver(
    descriptor: SubscriptionResolver, pubsub: MeshPubSub, delegation: DelegationEngine
) -> ResolverMap:
    predicate = compile_filter(descriptor.filter_by)

    def iterator_fn(root, info: ResolveInfo, **args):
        resolver_data = ResolverData(root=root, args=args, context=info.context, info=info)
        topic = interpolate(descriptor.pubsub_topic, resolver_data)
        return pubsub.async_iterator(str(topic))

    def filter_fn(payload, info: ResolveInfo, **args) -> bool:
        return predicate(ResolverData(root=payload, args=args, context=info.context, info=info))

    def resolve(payload, info: ResolveInfo, **_):
        return resolve_return_data(payload, descriptor.return_data, info.context, info, delegation=delegation)

    return {
        descriptor.type: {
            descriptor.field: {
                "subscribe": with_filter(iterator_fn, filter_fn),
                "resolve": resolve,
            }
        }
    }


def _exported_resolvers(exported: typing.Any) -> typing.Optional[ResolverMap]:
    """default.resolvers, then default when it is a mapping, then resolvers"""
    default = getattr(exported, "default", None)
    if default is not None:
        default_resolvers = get_path(default, "resolvers")
        if default_resolvers is not None:
            return default_resolvers
        if isinstance(default, Mapping):
            return default
        return None
    return getattr(exported, "resolvers", None)


async def _load_file_resolvers(base_dir: str, file_path: str, import_fn: ImportFn) -> ResolverMap:
    exported = await import_fn(os.path.join(base_dir, file_path))
    resolvers = _exported_resolvers(exported)

    if resolvers is None:
        logger.warning("Unable to load resolvers from file: %s", file_path)
        return {}

    return resolvers


def merge_resolvers(resolver_maps: typing.Iterable[ResolverMap]) -> ResolverMap:
    """Merge resolver maps by type, a later field entry replaces an earlier one entirely"""
    merged: ResolverMap = {}
    for resolver_map in resolver_maps:
        for type_name, fields in resolver_map.items():
            merged.setdefault(type_name, {}).update(fields)
    return merged


async def resolve_additional_resolvers(
    base_dir: str,
    additional_resolvers: typing.Optional[typing.Sequence[typing.Union[AdditionalResolver, typing.Mapping[str, typing.Any]]]],
    import_fn: ImportFn,
    pubsub: MeshPubSub,
    delegation: DelegationEngine = DEFAULT_DELEGATION,
) -> ResolverMap:
    """Compile additional resolver descriptors into a single resolver map

    **Parameters**

    * **base_dir**: _str_ = Directory resolver file paths are relative to
    * **additional_resolvers**: _List_ = File paths, raw config mappings or descriptors
    * **import_fn**: _ImportFn_ = Module loader for resolver files
    * **pubsub**: _MeshPubSub_ = Source of subscription events
    * **delegation**: _DelegationEngine_ = Primitives used to re-tag delegated values

    Descriptors are compiled concurrently. A resolver file that fails to import
    fails the whole compilation.
    """

    async def compile_one(raw) -> ResolverMap:
        descriptor = parse_descriptor(raw)
        if isinstance(descriptor, str):
            return await _load_file_resolvers(base_dir, descriptor, import_fn)
        if isinstance(descriptor, SubscriptionResolver):
            return _subscription_resolver(descriptor, pubsub, delegation)
        return _method_call_resolver(descriptor, delegation)

    loaded_resolvers = await asyncio.gather(*[compile_one(raw) for raw in additional_resolvers or []])
    return merge_resolvers(loaded_resolvers)
