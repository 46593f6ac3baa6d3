import re
from functools import lru_cache

__all__ = ["to_snake"]

_re_lower_upper = re.compile(r"([a-z\d])([A-Z])")
_re_upper_word = re.compile(r"([A-Z]+)([A-Z][a-z])")
_re_separators = re.compile(r"[\s\-_.]+")


@lru_cache()
def to_snake(s: str) -> str:
    """Normalize any casing to snake_case

    JsonSchema -> json_schema
    redis-cache -> redis_cache
    GraphQL -> graph_ql
    """
    s = _re_upper_word.sub(r"\1_\2", s)
    s = _re_lower_upper.sub(r"\1_\2", s)
    s = _re_separators.sub("_", s)
    return s.strip("_").lower()
