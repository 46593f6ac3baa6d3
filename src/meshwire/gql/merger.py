from __future__ import annotations

import logging
import typing

from graphql.language import DocumentNode
from graphql.utilities import extend_schema
from meshwire.gql.alias import Field, ObjectType, Schema
from meshwire.types import ResolverMap

__all__ = ["MeshSource", "stitching_merger", "attach_resolvers"]

logger = logging.getLogger(__name__)

_ROOT_OPERATIONS = ("query", "mutation", "subscription")


class MeshSource(typing.NamedTuple):
    name: str
    schema: Schema


def _root_type_name(operation: str) -> str:
    return operation.capitalize()


def stitching_merger(
    sources: typing.Sequence[MeshSource],
    type_defs: typing.Optional[typing.Sequence[DocumentNode]] = None,
    resolvers: typing.Optional[ResolverMap] = None,
) -> Schema:
    """Combine source schemas into a single gateway schema

    Root fields of every source are placed side by side on shared
    Query/Mutation/Subscription types, later sources overriding earlier ones.
    Named types are taken from the first source that defines them. Field
    resolvers of the sources are kept, *type_defs* extend the result and
    *resolvers* are attached last.
    """
    root_fields: typing.Dict[str, typing.Dict[str, typing.Any]] = {op: {} for op in _ROOT_OPERATIONS}
    named_types: typing.Dict[str, typing.Any] = {}

    for source in sources:
        schema = source.schema
        root_types = {op: getattr(schema, f"{op}_type") for op in _ROOT_OPERATIONS}
        root_type_ids = {id(t) for t in root_types.values() if t is not None}

        for operation, root_type in root_types.items():
            if root_type is not None:
                # Copies, so attaching resolvers never mutates a source schema
                root_fields[operation].update(
                    {name: Field(**field.to_kwargs()) for name, field in root_type.fields.items()}
                )

        for type_name, type_ in schema.type_map.items():
            if type_name.startswith("__") or id(type_) in root_type_ids:
                continue
            named_types.setdefault(type_name, type_)

    schema_kwargs = {
        operation: ObjectType(name=_root_type_name(operation), fields=fields)
        for operation, fields in root_fields.items()
        if fields
    }
    merged = Schema(**schema_kwargs, types=list(named_types.values()))

    for document in type_defs or []:
        merged = extend_schema(merged, document)

    if resolvers:
        attach_resolvers(merged, resolvers)

    return merged


def attach_resolvers(schema: Schema, resolvers: ResolverMap) -> Schema:
    """Attach a resolver map to the fields of *schema* in place

    Entries are either a plain resolve function or a mapping with any of
    "resolve", "subscribe" and "selection_set". The selection set is stored
    on the field's extensions for the execution engine. Entries for unknown
    types or fields are skipped with a warning.
    """
    for type_name, field_map in resolvers.items():
        type_ = schema.get_type(type_name)
        fields = getattr(type_, "fields", None)
        if fields is None:
            logger.warning("Resolvers defined for %s, but it is not an object type in the schema", type_name)
            continue

        for field_name, resolver in field_map.items():
            field = fields.get(field_name)
            if field is None:
                logger.warning("Resolver defined for %s.%s, but the field is not in the schema", type_name, field_name)
                continue

            if callable(resolver):
                field.resolve = resolver
                continue

            if resolver.get("resolve") is not None:
                field.resolve = resolver["resolve"]
            if resolver.get("subscribe") is not None:
                field.subscribe = resolver["subscribe"]
            if resolver.get("selection_set") is not None:
                field.extensions = {**(field.extensions or {}), "selection_set": resolver["selection_set"]}

    return schema
