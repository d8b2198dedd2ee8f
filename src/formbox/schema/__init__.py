"""
Field metadata: type tags, descriptors and schema providers.

Providers are imported lazily: the SQLAlchemy provider so plain-class
forms do not pay for the ORM import, and both because they import the
SchemaProvider base from formbox.protocols.
"""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING

from .field_types import TypeTag, RelationKind
from .descriptors import ColumnInfo, RelationInfo, FieldDescriptor

if TYPE_CHECKING:
    from .static_provider import StaticSchemaProvider
    from .sqlalchemy_provider import SqlAlchemySchemaProvider

_EXPORTS = {
    "StaticSchemaProvider": ("formbox.schema.static_provider", "StaticSchemaProvider"),
    "SqlAlchemySchemaProvider": ("formbox.schema.sqlalchemy_provider", "SqlAlchemySchemaProvider"),
}

__all__ = [
    "TypeTag",
    "RelationKind",
    "ColumnInfo",
    "RelationInfo",
    "FieldDescriptor",
    "StaticSchemaProvider",
    "SqlAlchemySchemaProvider",
]


def __getattr__(name: str):
    if name in _EXPORTS:
        module_name, attr = _EXPORTS[name]
        module = importlib.import_module(module_name)
        value = getattr(module, attr)
        globals()[name] = value
        return value
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
