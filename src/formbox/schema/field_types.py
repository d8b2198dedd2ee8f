"""
Field type tags and relationship kinds.

TypeTag is the normalized vocabulary every schema provider maps its
native column types onto. Widget selection only ever looks at TypeTag.
"""

from enum import Enum
from typing import FrozenSet


class TypeTag(Enum):
    """Declared type of a renderable field."""
    STRING = "string"
    TEXT = "text"
    INTEGER = "integer"
    FLOAT = "float"
    DECIMAL = "decimal"
    BOOLEAN = "boolean"
    DATE = "date"
    DATETIME = "datetime"
    TIME = "time"
    TIMESTAMP = "timestamp"
    BELONGS_TO = "belongs_to"
    HAS_MANY = "has_many"
    BINARY = "binary"

    @classmethod
    def coerce(cls, value) -> "TypeTag":
        """
        Accept a TypeTag or its string value (``"datetime"``, ``"belongs_to"``).

        Raises:
            ValueError: If the value names no TypeTag
        """
        if isinstance(value, cls):
            return value
        return cls(str(value).lower())


class RelationKind(Enum):
    """Kind of a declared relationship."""
    BELONGS_TO = "belongs_to"
    HAS_MANY = "has_many"
    HAS_ONE = "has_one"


CHOICE_TYPES: FrozenSet[TypeTag] = frozenset({TypeTag.INTEGER, TypeTag.STRING})
NUMERIC_TYPES: FrozenSet[TypeTag] = frozenset({TypeTag.INTEGER, TypeTag.FLOAT, TypeTag.DECIMAL})
TEMPORAL_TYPES: FrozenSet[TypeTag] = frozenset({
    TypeTag.DATE, TypeTag.DATETIME, TypeTag.TIME, TypeTag.TIMESTAMP
})
TEXTUAL_TYPES: FrozenSet[TypeTag] = frozenset({
    TypeTag.STRING, TypeTag.TEXT, TypeTag.INTEGER, TypeTag.FLOAT, TypeTag.DECIMAL
})

# Relationship kinds the resolver can render
SUPPORTED_RELATIONS: FrozenSet[RelationKind] = frozenset({
    RelationKind.BELONGS_TO, RelationKind.HAS_MANY
})

RELATION_TYPE_TAGS = {
    RelationKind.BELONGS_TO: TypeTag.BELONGS_TO,
    RelationKind.HAS_MANY: TypeTag.HAS_MANY,
}
