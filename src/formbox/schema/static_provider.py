"""Schema provider backed by explicit declarations."""

from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Union
import logging

from formbox.protocols.schema_provider import SchemaProvider
from .descriptors import ColumnInfo, RelationInfo
from .field_types import RelationKind, TypeTag

logger = logging.getLogger(__name__)

ColumnSpec = Union[ColumnInfo, TypeTag, str]
RelationSpec = Union[RelationInfo, RelationKind, str, Tuple[Any, ...]]


class StaticSchemaProvider(SchemaProvider):
    """
    Schema provider for plain classes (dataclasses, value objects, tests).

    Columns and relationships are declared per class. Candidate instances
    for association editors come from ``candidate_loader(target)`` when
    given, otherwise from a ``target.all()`` class method.

    Example:
        provider = StaticSchemaProvider()
        provider.declare(
            Product,
            columns={"name": "string", "price": TypeTag.DECIMAL},
            relations={"category": (RelationKind.BELONGS_TO, Category)},
        )
    """

    def __init__(self, candidate_loader: Optional[Callable[[type], List[Any]]] = None):
        self._columns: Dict[type, Dict[str, ColumnInfo]] = {}
        self._relations: Dict[type, Dict[str, RelationInfo]] = {}
        self._candidate_loader = candidate_loader

    def declare(self, record_cls: type,
                columns: Optional[Mapping[str, ColumnSpec]] = None,
                relations: Optional[Mapping[str, RelationSpec]] = None) -> "StaticSchemaProvider":
        """
        Declare the columns and relationships of ``record_cls``.

        Column specs may be a ColumnInfo, a TypeTag or a type name.
        Relation specs may be a RelationInfo, a RelationKind (or its name),
        or a ``(kind, target[, foreign_key])`` tuple.

        Returns:
            self, so declarations can be chained
        """
        cols = self._columns.setdefault(record_cls, {})
        for name, spec in (columns or {}).items():
            cols[name] = spec if isinstance(spec, ColumnInfo) else ColumnInfo(name, TypeTag.coerce(spec))

        rels = self._relations.setdefault(record_cls, {})
        for name, spec in (relations or {}).items():
            rels[name] = self._to_relation(name, spec)

        logger.debug(f"Declared {record_cls.__name__}: {len(cols)} columns, {len(rels)} relations")
        return self

    @staticmethod
    def _to_relation(name: str, spec: RelationSpec) -> RelationInfo:
        if isinstance(spec, RelationInfo):
            return spec
        if isinstance(spec, tuple):
            kind, *rest = spec
            target = rest[0] if rest else None
            foreign_key = rest[1] if len(rest) > 1 else None
            return RelationInfo(name, RelationKind(getattr(kind, "value", kind)), target, foreign_key)
        return RelationInfo(name, RelationKind(getattr(spec, "value", spec)))

    def columns(self, record_cls: type) -> Dict[str, ColumnInfo]:
        for klass in getattr(record_cls, "__mro__", (record_cls,)):
            if klass in self._columns:
                return self._columns[klass]
        return {}

    def relations(self, record_cls: type) -> Dict[str, RelationInfo]:
        for klass in getattr(record_cls, "__mro__", (record_cls,)):
            if klass in self._relations:
                return self._relations[klass]
        return {}

    def candidates(self, target: type) -> List[Any]:
        if target is None:
            return []
        if self._candidate_loader is not None:
            return list(self._candidate_loader(target))
        loader = getattr(target, "all", None)
        if callable(loader):
            return list(loader())
        logger.warning(f"No candidate source for {target.__name__}; association editor will be empty")
        return []
