# pylint: disable=redefined-outer-name
from __future__ import annotations

from types import ModuleType, SimpleNamespace
from typing import Any, Callable, Dict, List, Optional

import pytest
from graphql.language import FieldNode, NameNode


def make_module(name: str, **attrs: Any) -> ModuleType:
    module = ModuleType(name)
    for key, value in attrs.items():
        setattr(module, key, value)
    return module


class FakeImporter:
    """import_fn stand-in serving modules from a dict and recording every attempt"""

    def __init__(self, modules: Optional[Dict[str, Any]] = None, failures: Optional[Dict[str, Exception]] = None):
        self.modules = modules or {}
        self.failures = failures or {}
        self.attempts: List[str] = []

    async def __call__(self, identifier: str):
        self.attempts.append(identifier)
        if identifier in self.failures:
            raise self.failures[identifier]
        if identifier in self.modules:
            return self.modules[identifier]
        raise ModuleNotFoundError(f"No module named '{identifier}'", name=identifier)


@pytest.fixture
def importer_builder() -> Callable[..., FakeImporter]:
    return FakeImporter


@pytest.fixture
def info_builder() -> Callable[..., SimpleNamespace]:
    """Return a function building a minimal stand-in for GraphQLResolveInfo"""

    def build(context=None, return_type=None, field_name: str = "a", alias: Optional[str] = None) -> SimpleNamespace:
        field_node = FieldNode(name=NameNode(value=field_name), alias=NameNode(value=alias) if alias else None)
        return SimpleNamespace(
            context=context if context is not None else {},
            return_type=return_type,
            field_name=field_name,
            field_nodes=[field_node],
        )

    return build


@pytest.fixture
def module_builder() -> Callable[..., ModuleType]:
    return make_module
