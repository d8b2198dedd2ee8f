"""
Normalized field metadata.

Schema providers translate whatever their metadata source offers (ORM
mappers, plain mappings) into these immutable value objects.
"""

from dataclasses import dataclass
from typing import Any, Optional, Tuple

from .field_types import TypeTag, RelationKind

Choice = Tuple[Any, Any]


@dataclass(frozen=True)
class ColumnInfo:
    """A scalar column of a record class."""
    name: str
    type_tag: TypeTag
    nullable: bool = True
    choices: Optional[Tuple[Choice, ...]] = None


@dataclass(frozen=True)
class RelationInfo:
    """
    A declared relationship of a record class.

    Attributes:
        name: Attribute name of the relationship on the record
        kind: Relationship kind
        target: Related record class, if known
        foreign_key: Column holding the related key (belongs-to only)
    """
    name: str
    kind: RelationKind
    target: Optional[type] = None
    foreign_key: Optional[str] = None

    @property
    def key_column(self) -> str:
        """Column a belongs-to select writes to (``<name>_id`` by default)."""
        return self.foreign_key or f"{self.name}_id"


@dataclass(frozen=True)
class FieldDescriptor:
    """
    Normalized description of one renderable field.

    ``nullable`` is False only for columns declared NOT NULL; selects on
    such columns get no blank entry by default.
    """
    name: str
    declared_type: TypeTag = TypeTag.STRING
    is_relation: bool = False
    relation_kind: Optional[RelationKind] = None
    choices: Optional[Tuple[Choice, ...]] = None
    target: Optional[type] = None
    foreign_key: Optional[str] = None
    nullable: bool = True

    @property
    def key_column(self) -> str:
        if self.foreign_key:
            return self.foreign_key
        if self.relation_kind is RelationKind.BELONGS_TO:
            return f"{self.name}_id"
        return self.name

    @classmethod
    def from_column(cls, column: ColumnInfo) -> "FieldDescriptor":
        return cls(
            name=column.name,
            declared_type=column.type_tag,
            choices=column.choices,
            nullable=column.nullable,
        )

    @classmethod
    def from_relation(cls, relation: RelationInfo, type_tag: TypeTag) -> "FieldDescriptor":
        return cls(
            name=relation.name,
            declared_type=type_tag,
            is_relation=True,
            relation_kind=relation.kind,
            target=relation.target,
            foreign_key=relation.key_column if relation.kind is RelationKind.BELONGS_TO else None,
        )
