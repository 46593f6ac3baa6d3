"""Restricted boolean expressions for subscription ``filterBy``

Expressions are parsed once with :mod:`ast` and evaluated against a whitelist
of node types. Nothing is ever compiled or executed as Python code.

Names in scope:
    root     the published event payload
    args     field arguments of the subscription request
    context  execution context
    info     resolve info

Example:
    root.userId == args.userId and root.status in ["open", "pending"]
"""
from __future__ import annotations

import ast
import operator
import typing

from meshwire.exceptions import FilterEvaluationError, FilterSyntaxError
from meshwire.types import ResolverData

__all__ = ["compile_filter"]

Predicate = typing.Callable[[ResolverData], bool]

_CMP_OPS: typing.Dict[typing.Type[ast.cmpop], typing.Callable[[typing.Any, typing.Any], bool]] = {
    ast.Eq: operator.eq,
    ast.NotEq: operator.ne,
    ast.Gt: operator.gt,
    ast.GtE: operator.ge,
    ast.Lt: operator.lt,
    ast.LtE: operator.le,
    ast.In: lambda left, right: left in right,
    ast.NotIn: lambda left, right: left not in right,
    ast.Is: operator.is_,
    ast.IsNot: operator.is_not,
}

_LITERAL_NAMES = {
    "true": True,
    "false": False,
    "null": None,
    "none": None,
}

_SCOPE_NAMES = {"root", "args", "context", "info"}


def compile_filter(filter_by: typing.Union[None, str, Predicate]) -> Predicate:
    """Build a predicate over ResolverData

    None always passes, callables are used as-is and strings are
    parsed in the filter language. Syntax outside the language raises
    FilterSyntaxError immediately rather than per event.
    """
    if filter_by is None:
        return lambda _: True

    if callable(filter_by):
        return filter_by

    try:
        tree = ast.parse(filter_by.strip(), mode="eval")
    except SyntaxError as exc:
        raise FilterSyntaxError(f"Invalid filter expression {filter_by!r}: {exc.msg}") from exc

    _validate(tree.body, filter_by)

    def predicate(data: ResolverData) -> bool:
        names = data.to_dict()
        try:
            return bool(_eval_node(tree.body, names))
        except FilterEvaluationError:
            raise
        except Exception as exc:
            raise FilterEvaluationError(f"Filter {filter_by!r} failed: {exc}") from exc

    return predicate


def _validate(node: ast.AST, source: str) -> None:
    allowed = (
        ast.Constant,
        ast.Name,
        ast.BoolOp,
        ast.UnaryOp,
        ast.Compare,
        ast.Attribute,
        ast.Subscript,
        ast.List,
        ast.Tuple,
        ast.Load,
        ast.And,
        ast.Or,
        ast.Not,
        ast.USub,
    ) + tuple(_CMP_OPS)
    for child in ast.walk(node):
        if not isinstance(child, allowed):
            raise FilterSyntaxError(f"Unsupported syntax {type(child).__name__} in filter {source!r}")
        if isinstance(child, ast.Attribute) and child.attr.startswith("_"):
            raise FilterSyntaxError(f"Private attribute {child.attr!r} in filter {source!r}")
        if isinstance(child, ast.Name) and child.id not in _SCOPE_NAMES and child.id.lower() not in _LITERAL_NAMES:
            raise FilterSyntaxError(f"Unknown name {child.id!r} in filter {source!r}")


def _eval_node(node: ast.AST, names: typing.Mapping[str, typing.Any]) -> typing.Any:
    if isinstance(node, ast.Constant):
        return node.value
    if isinstance(node, ast.Name):
        if node.id in names:
            return names[node.id]
        return _LITERAL_NAMES[node.id.lower()]
    if isinstance(node, ast.BoolOp):
        # Short circuit like the language operators do
        if isinstance(node.op, ast.And):
            return all(_eval_node(value, names) for value in node.values)
        return any(_eval_node(value, names) for value in node.values)
    if isinstance(node, ast.UnaryOp):
        operand = _eval_node(node.operand, names)
        if isinstance(node.op, ast.Not):
            return not operand
        return -operand
    if isinstance(node, ast.Compare):
        left = _eval_node(node.left, names)
        for op_node, comparator in zip(node.ops, node.comparators):
            right = _eval_node(comparator, names)
            if not _CMP_OPS[type(op_node)](left, right):
                return False
            left = right
        return True
    if isinstance(node, ast.Attribute):
        value = _eval_node(node.value, names)
        if isinstance(value, typing.Mapping):
            return value.get(node.attr)
        return getattr(value, node.attr, None)
    if isinstance(node, ast.Subscript):
        value = _eval_node(node.value, names)
        key = _eval_node(node.slice, names)
        if isinstance(value, typing.Mapping):
            return value.get(key)
        return value[key]
    if isinstance(node, (ast.List, ast.Tuple)):
        return [_eval_node(elt, names) for elt in node.elts]
    raise FilterEvaluationError(f"Unsupported expression: {type(node).__name__}")
