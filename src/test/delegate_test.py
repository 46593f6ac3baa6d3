from graphql import GraphQLError, GraphQLList, GraphQLNonNull, GraphQLString
from meshwire.gql.delegate import DEFAULT_DELEGATION, ExternalObject


def test_external_object_is_a_read_only_mapping():
    obj = ExternalObject({"a": 1}, subschema="Users")
    assert obj["a"] == 1
    assert dict(obj) == {"a": 1}
    assert len(obj) == 1
    assert obj.unpathed_errors == []


def test_response_key_prefers_alias(info_builder):
    assert DEFAULT_DELEGATION.get_response_key_from_info(info_builder(field_name="user")) == "user"
    assert DEFAULT_DELEGATION.get_response_key_from_info(info_builder(field_name="user", alias="me")) == "me"


def test_get_subschema_per_response_key():
    obj = ExternalObject({}, subschema="Users", field_subschemas={"posts": "Posts"})
    assert DEFAULT_DELEGATION.get_subschema(obj, "posts") == "Posts"
    assert DEFAULT_DELEGATION.get_subschema(obj, "name") == "Users"


def test_resolve_external_value_tags_mappings(info_builder):
    error = GraphQLError("partial failure")
    value = DEFAULT_DELEGATION.resolve_external_value({"id": 1}, [error], "Users", {}, info_builder())

    assert isinstance(value, ExternalObject)
    assert value.unpathed_errors == [error]
    assert value.subschema == "Users"


def test_resolve_external_value_maps_lists(info_builder):
    return_type = GraphQLNonNull(GraphQLList(GraphQLString))
    value = DEFAULT_DELEGATION.resolve_external_value([{"id": 1}, "plain", None], [], "Users", {}, info_builder(), return_type)

    assert isinstance(value[0], ExternalObject)
    assert value[1] == "plain"
    assert value[2] is None


def test_resolve_external_value_passes_scalars_and_tagged_values(info_builder):
    tagged = ExternalObject({"id": 1})
    assert DEFAULT_DELEGATION.resolve_external_value(5, [], None, {}, info_builder()) == 5
    assert DEFAULT_DELEGATION.resolve_external_value(tagged, [], None, {}, info_builder()) is tagged


def test_missing_value_reports_unpathed_errors(info_builder):
    first, second = GraphQLError("first"), GraphQLError("second")
    info = info_builder()

    assert DEFAULT_DELEGATION.resolve_external_value(None, [], None, {}, info) is None
    assert DEFAULT_DELEGATION.resolve_external_value(None, [first], None, {}, info) is first

    combined = DEFAULT_DELEGATION.resolve_external_value(None, [first, second], None, {}, info)
    assert isinstance(combined, GraphQLError)
    assert combined.extensions == {"errors": ["first", "second"]}
