import os
import re
import typing

from meshwire.types import ResolverData
from meshwire.utils import get_path

__all__ = ["interpolate"]

_re_placeholder = re.compile(r"{\s*([^{}\s]+)\s*}")


def _interpolation_scope(data: typing.Union[ResolverData, typing.Mapping[str, typing.Any]]) -> typing.Dict[str, typing.Any]:
    scope = data.to_dict() if isinstance(data, ResolverData) else dict(data)
    scope.setdefault("env", os.environ)
    return scope


def interpolate(template: typing.Any, data: typing.Union[ResolverData, typing.Mapping[str, typing.Any]]) -> typing.Any:
    """Fill {dotted.path} placeholders in *template* from *data*

    "{args.id}"          -> value of args["id"], type preserved
    "user/{args.id}"     -> "user/42"
    "{context.missing}"  -> None

    Paths are looked up in root, args, context, info and env.
    Non-string templates are returned unchanged.
    """
    if not isinstance(template, str):
        return template

    scope = _interpolation_scope(data)

    # A lone placeholder keeps the raw value so lists and numbers survive
    whole = _re_placeholder.fullmatch(template.strip())
    if whole is not None:
        return get_path(scope, whole.group(1))

    def replace(match: re.Match) -> str:
        value = get_path(scope, match.group(1))
        return "" if value is None else str(value)

    return _re_placeholder.sub(replace, template)
