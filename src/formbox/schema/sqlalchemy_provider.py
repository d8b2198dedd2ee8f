"""
Schema provider reflecting SQLAlchemy mapped classes.

Column types are mapped onto TypeTag; relationship directions onto
RelationKind. Candidate instances for association editors are loaded
through a bound Session.

    | SQLAlchemy type               | TypeTag              |
    |-------------------------------|----------------------|
    | Enum                          | STRING (with choices)|
    | Text / UnicodeText            | TEXT                 |
    | String / Unicode              | STRING               |
    | Integer / BigInteger / Small  | INTEGER              |
    | Float / REAL                  | FLOAT                |
    | Numeric / DECIMAL             | DECIMAL              |
    | Boolean                       | BOOLEAN              |
    | TIMESTAMP                     | TIMESTAMP            |
    | DateTime                      | DATETIME             |
    | Date                          | DATE                 |
    | Time                          | TIME                 |
    | LargeBinary / BINARY          | BINARY               |
    | anything else                 | STRING               |
"""

from typing import Any, Dict, List, Optional, Tuple
import logging

from sqlalchemy import inspect, select
from sqlalchemy.exc import NoInspectionAvailable
from sqlalchemy.orm import Session
from sqlalchemy.orm.interfaces import MANYTOMANY, MANYTOONE, ONETOMANY
from sqlalchemy.sql import sqltypes as T

from formbox.exceptions import ProviderError
from formbox.protocols.schema_provider import SchemaProvider
from .descriptors import Choice, ColumnInfo, RelationInfo
from .field_types import RelationKind, TypeTag

logger = logging.getLogger(__name__)

# Checked in order: subclasses before their bases (Text < String, Float < Numeric)
_TYPE_MAP: Tuple[Tuple[Tuple[type, ...], TypeTag], ...] = (
    ((T.Enum,), TypeTag.STRING),
    ((T.Text,), TypeTag.TEXT),
    ((T.String,), TypeTag.STRING),
    ((T.Integer,), TypeTag.INTEGER),
    ((T.Float,), TypeTag.FLOAT),
    ((T.Numeric,), TypeTag.DECIMAL),
    ((T.Boolean,), TypeTag.BOOLEAN),
    ((T.TIMESTAMP,), TypeTag.TIMESTAMP),
    ((T.DateTime,), TypeTag.DATETIME),
    ((T.Date,), TypeTag.DATE),
    ((T.Time,), TypeTag.TIME),
    ((T.LargeBinary, T.BINARY, T.VARBINARY), TypeTag.BINARY),
)


def type_tag_for(sql_type: Any) -> TypeTag:
    """Map a SQLAlchemy column type instance onto a TypeTag."""
    for classes, tag in _TYPE_MAP:
        if isinstance(sql_type, classes):
            return tag
    return TypeTag.STRING


def enum_choices(sql_type: Any) -> Optional[Tuple[Choice, ...]]:
    """Choices declared by an Enum column, or None for other types."""
    if not isinstance(sql_type, T.Enum):
        return None
    enum_class = getattr(sql_type, "enum_class", None)
    if enum_class is not None:
        return tuple((member.name, member) for member in enum_class)
    return tuple((value, value) for value in sql_type.enums)


class SqlAlchemySchemaProvider(SchemaProvider):
    """
    Reflects columns and relationships of SQLAlchemy mapped classes.

    Args:
        session: Session used to load association candidates. Only needed
            when a form renders belongs-to / has-many fields without
            explicit choices.
    """

    def __init__(self, session: Optional[Session] = None):
        self.session = session

    def _mapper(self, record_cls: type):
        try:
            return inspect(record_cls)
        except NoInspectionAvailable:
            raise ProviderError(f"{record_cls!r} is not a SQLAlchemy mapped class") from None

    def columns(self, record_cls: type) -> Dict[str, ColumnInfo]:
        result = {}
        for prop in self._mapper(record_cls).column_attrs:
            column = prop.columns[0]
            result[prop.key] = ColumnInfo(
                name=prop.key,
                type_tag=type_tag_for(column.type),
                nullable=bool(getattr(column, "nullable", True)),
                choices=enum_choices(column.type),
            )
        return result

    def relations(self, record_cls: type) -> Dict[str, RelationInfo]:
        mapper = self._mapper(record_cls)
        result = {}
        for rel in mapper.relationships:
            kind = self._relation_kind(rel)
            foreign_key = None
            if kind is RelationKind.BELONGS_TO and len(rel.local_columns) == 1:
                local_column = next(iter(rel.local_columns))
                foreign_key = mapper.get_property_by_column(local_column).key
            result[rel.key] = RelationInfo(
                name=rel.key,
                kind=kind,
                target=rel.mapper.class_,
                foreign_key=foreign_key,
            )
        return result

    @staticmethod
    def _relation_kind(rel) -> RelationKind:
        if rel.direction is MANYTOONE:
            return RelationKind.BELONGS_TO
        if rel.direction in (ONETOMANY, MANYTOMANY) and rel.uselist:
            return RelationKind.HAS_MANY
        return RelationKind.HAS_ONE

    def candidates(self, target: type) -> List[Any]:
        if self.session is None:
            raise ProviderError(
                f"Cannot load {target.__name__} candidates: SqlAlchemySchemaProvider has no session"
            )
        rows = list(self.session.scalars(select(target)).all())
        logger.debug(f"Loaded {len(rows)} {target.__name__} candidates")
        return rows
