import pytest
from meshwire.text_utils import to_snake


@pytest.mark.parametrize(
    "name,expected",
    [
        ("redis", "redis"),
        ("JsonSchema", "json_schema"),
        ("jsonSchema", "json_schema"),
        ("json-schema", "json_schema"),
        ("HTTPServer", "http_server"),
        ("in memory lru", "in_memory_lru"),
        ("already_snake", "already_snake"),
    ],
)
def test_to_snake(name, expected):
    assert to_snake(name) == expected
