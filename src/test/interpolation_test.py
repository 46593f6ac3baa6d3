from meshwire.gql.interpolation import interpolate
from meshwire.types import ResolverData


def resolver_data(**kwargs):
    defaults = {"root": {}, "args": {}, "context": {}, "info": None}
    defaults.update(kwargs)
    return ResolverData(**defaults)


def test_lone_placeholder_keeps_value_type():
    data = resolver_data(args={"ids": [1, 2]}, root={"count": 3})
    assert interpolate("{args.ids}", data) == [1, 2]
    assert interpolate("{root.count}", data) == 3


def test_placeholders_inside_text_are_stringified():
    data = resolver_data(args={"id": 42}, root={"kind": "user"})
    assert interpolate("topic/{root.kind}/{args.id}", data) == "topic/user/42"


def test_missing_values():
    data = resolver_data()
    assert interpolate("{args.nope}", data) is None
    assert interpolate("x-{args.nope}", data) == "x-"


def test_context_and_env(monkeypatch):
    monkeypatch.setenv("MESHWIRE_TEST_TOKEN", "secret")
    data = resolver_data(context={"user": {"id": "u1"}})
    assert interpolate("Bearer {env.MESHWIRE_TEST_TOKEN}", data) == "Bearer secret"
    assert interpolate("{context.user.id}", data) == "u1"


def test_non_string_template_passes_through():
    assert interpolate(10, resolver_data()) == 10


def test_accepts_plain_mapping():
    assert interpolate("{args.id}", {"args": {"id": 1}}) == 1
