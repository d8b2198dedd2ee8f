"""
Schema provider contract.

A schema provider tells the form builder which columns and relationships
a record class declares. The field-type inference order lives here so
every provider resolves fields the same way:

1. ``meta_field(name)`` class method on the record class (authoritative)
2. a declared column
3. a declared relationship (belongs-to / has-many only)
4. string
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
import logging

from formbox.exceptions import UnsupportedFieldType, UnsupportedRelationKind
from formbox.schema.descriptors import ColumnInfo, FieldDescriptor, RelationInfo
from formbox.schema.field_types import (
    RELATION_TYPE_TAGS, SUPPORTED_RELATIONS, RelationKind, TypeTag
)

logger = logging.getLogger(__name__)

OVERRIDE_HOOK = "meta_field"


class SchemaProvider(ABC):
    """ABC for metadata sources describing record classes."""

    @abstractmethod
    def columns(self, record_cls: type) -> Dict[str, ColumnInfo]:
        """Return the scalar columns of ``record_cls`` keyed by name."""
        pass

    @abstractmethod
    def relations(self, record_cls: type) -> Dict[str, RelationInfo]:
        """Return the relationships of ``record_cls`` keyed by attribute name."""
        pass

    @abstractmethod
    def candidates(self, target: type) -> List[Any]:
        """
        Return every instance of ``target``.

        Used to fill association editors when no explicit choices are given.
        """
        pass

    def describe(self, record_cls: Optional[type], name: str) -> FieldDescriptor:
        """
        Build the FieldDescriptor for ``name`` on ``record_cls``.

        Args:
            record_cls: Record class (or None when the form has no record)
            name: Field name

        Returns:
            FieldDescriptor with the inferred declared type

        Raises:
            UnsupportedFieldType: If ``meta_field`` names an unknown type
            UnsupportedRelationKind: If ``name`` is a relationship other than
                belongs-to / has-many
        """
        if record_cls is None:
            return FieldDescriptor(name=name)

        override = getattr(record_cls, OVERRIDE_HOOK, None)
        if callable(override):
            type_tag = self._override_type(name, override(name))
            logger.debug(f"{record_cls.__name__}.{name}: type {type_tag.value} from {OVERRIDE_HOOK}")
            return self._describe_override(record_cls, name, type_tag)

        column = self.columns(record_cls).get(name)
        if column is not None:
            logger.debug(f"{record_cls.__name__}.{name}: column type {column.type_tag.value}")
            return FieldDescriptor.from_column(column)

        relation = self.relations(record_cls).get(name)
        if relation is not None:
            if relation.kind not in SUPPORTED_RELATIONS:
                raise UnsupportedRelationKind(name, relation.kind)
            logger.debug(f"{record_cls.__name__}.{name}: relationship {relation.kind.value}")
            return FieldDescriptor.from_relation(relation, RELATION_TYPE_TAGS[relation.kind])

        return FieldDescriptor(name=name)

    @staticmethod
    def _override_type(name: str, raw: Any) -> TypeTag:
        """
        TypeTag for an override result; None (no entry for the field) means String.

        Raises:
            UnsupportedFieldType: If the result names no known type
        """
        if raw is None:
            return TypeTag.STRING
        try:
            return TypeTag.coerce(raw)
        except ValueError:
            raise UnsupportedFieldType(name, raw) from None

    def _describe_override(self, record_cls: type, name: str, type_tag: TypeTag) -> FieldDescriptor:
        """Descriptor for an overridden field, enriched with relation metadata when present."""
        if type_tag in (TypeTag.BELONGS_TO, TypeTag.HAS_MANY):
            kind = RelationKind(type_tag.value)
            relation = self.relations(record_cls).get(name)
            if relation is None:
                relation = RelationInfo(name=name, kind=kind)
            return FieldDescriptor(
                name=name,
                declared_type=type_tag,
                is_relation=True,
                relation_kind=kind,
                target=relation.target,
                foreign_key=relation.key_column if kind is RelationKind.BELONGS_TO else None,
            )
        column = self.columns(record_cls).get(name)
        if column is None:
            return FieldDescriptor(name=name, declared_type=type_tag)
        return FieldDescriptor(
            name=name, declared_type=type_tag, choices=column.choices, nullable=column.nullable
        )


_schema_provider: Optional[SchemaProvider] = None


def register_schema_provider(provider: Optional[SchemaProvider]) -> None:
    """Register the global schema provider (None restores the default)."""
    global _schema_provider
    _schema_provider = provider


def get_schema_provider() -> SchemaProvider:
    """Get the registered schema provider, or an empty static provider."""
    if _schema_provider is None:
        from formbox.schema.static_provider import StaticSchemaProvider
        return StaticSchemaProvider()
    return _schema_provider
