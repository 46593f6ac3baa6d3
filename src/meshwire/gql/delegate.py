"""Delegated values

A value returned from executing part of a query against another subschema is
wrapped in an ExternalObject. The wrapper keeps the errors that could not be
attributed to a path and the subschema the data came from, so resolvers further
down the tree can keep delegating.

Plain traversal (``get_path``) into an ExternalObject returns the raw nested
data without that provenance. ``DelegationEngine.resolve_external_value``
re-establishes it.
"""
from __future__ import annotations

import typing
from collections.abc import Mapping

from meshwire.gql.alias import Error, OutputType, ResolveInfo, get_nullable_type, is_list_type

__all__ = ["ExternalObject", "DelegationEngine", "DEFAULT_DELEGATION"]


class ExternalObject(Mapping):
    """Read-only mapping tagged as originating from a delegated subschema"""

    __slots__ = ("data", "unpathed_errors", "subschema", "field_subschemas")

    def __init__(
        self,
        data: typing.Mapping[str, typing.Any],
        unpathed_errors: typing.Optional[typing.List[Exception]] = None,
        subschema: typing.Any = None,
        field_subschemas: typing.Optional[typing.Dict[str, typing.Any]] = None,
    ):
        self.data = dict(data)
        self.unpathed_errors: typing.List[Exception] = list(unpathed_errors or [])
        self.subschema = subschema
        # Response key -> subschema, for objects merged from several sources
        self.field_subschemas: typing.Dict[str, typing.Any] = dict(field_subschemas or {})

    def __getitem__(self, key):
        return self.data[key]

    def __iter__(self):
        return iter(self.data)

    def __len__(self):
        return len(self.data)

    def __repr__(self):
        return f"ExternalObject({self.data!r}, errors={len(self.unpathed_errors)}, subschema={self.subschema!r})"


class DelegationEngine:
    """Primitive operations the return data extractor needs from a delegation engine

    The default implementation only re-annotates values; an execution engine that
    merges types across subschemas should subclass and override
    ``resolve_external_value``.
    """

    @staticmethod
    def is_external_object(value: typing.Any) -> bool:
        return isinstance(value, ExternalObject)

    @staticmethod
    def get_unpathed_errors(source: ExternalObject) -> typing.List[Exception]:
        return list(source.unpathed_errors)

    @staticmethod
    def get_response_key_from_info(info: ResolveInfo) -> str:
        field_node = info.field_nodes[0]
        return field_node.alias.value if field_node.alias else field_node.name.value

    @staticmethod
    def get_subschema(source: ExternalObject, response_key: str) -> typing.Any:
        return source.field_subschemas.get(response_key, source.subschema)

    def resolve_external_value(
        self,
        value: typing.Any,
        unpathed_errors: typing.List[Exception],
        subschema: typing.Any,
        context: typing.Any,
        info: ResolveInfo,
        return_type: typing.Optional[OutputType] = None,
        skip_type_merging: bool = False,
    ) -> typing.Any:
        """Tag *value* with the provenance of the object it was extracted from

        skip_type_merging is accepted for engines that merge types; this
        implementation never merges.
        """
        if value is None:
            return self.report_unpathed_errors(unpathed_errors)

        if isinstance(value, Exception) or self.is_external_object(value):
            return value

        if isinstance(value, list):
            nullable_type = get_nullable_type(return_type) if return_type is not None else None
            item_type = nullable_type.of_type if is_list_type(nullable_type) else None
            return [
                self.resolve_external_value(
                    item, unpathed_errors, subschema, context, info, item_type, skip_type_merging
                )
                for item in value
            ]

        if isinstance(value, Mapping):
            return ExternalObject(value, unpathed_errors, subschema)

        return value

    @staticmethod
    def report_unpathed_errors(unpathed_errors: typing.List[Exception]) -> typing.Optional[Exception]:
        """A missing value with outstanding errors becomes the field's error"""
        if not unpathed_errors:
            return None
        if len(unpathed_errors) == 1:
            return unpathed_errors[0]
        messages = [str(error) for error in unpathed_errors]
        return Error("\n".join(messages), extensions={"errors": messages})


DEFAULT_DELEGATION = DelegationEngine()
