# pylint: disable=invalid-name
from graphql.error import GraphQLError
from graphql.type import (
    GraphQLField,
    GraphQLObjectType,
    GraphQLOutputType,
    GraphQLResolveInfo,
    GraphQLSchema,
    get_nullable_type,
    is_list_type,
)

Error = GraphQLError
Field = GraphQLField
ObjectType = GraphQLObjectType
OutputType = GraphQLOutputType
ResolveInfo = GraphQLResolveInfo
Schema = GraphQLSchema

__all__ = [
    "Error",
    "Field",
    "ObjectType",
    "OutputType",
    "ResolveInfo",
    "Schema",
    "get_nullable_type",
    "is_list_type",
]
