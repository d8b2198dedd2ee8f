"""
Exception hierarchy for formbox.

Field errors are scoped to a single field: they carry the field name so a
form can skip or report the broken field and keep rendering the rest.
"""

from typing import Any, Optional


class FormBoxError(Exception):
    """Base class for all formbox errors."""


class ProviderError(FormBoxError):
    """Raised when a schema provider cannot describe a record class."""


class FieldError(FormBoxError):
    """
    Base class for errors raised while resolving or rendering one field.

    Attributes:
        field_name: Name of the field that failed
    """

    def __init__(self, field_name: str, message: str):
        self.field_name = field_name
        super().__init__(f"{field_name}: {message}")


class UnsupportedFieldType(FieldError):
    """Raised when a declared type has no widget (e.g. binary columns)."""

    def __init__(self, field_name: str, type_tag: Any):
        self.type_tag = type_tag
        super().__init__(field_name, f"unsupported field type {type_tag!r}")


class UnsupportedRelationKind(FieldError):
    """Raised for relationships other than belongs-to / has-many."""

    def __init__(self, field_name: str, relation_kind: Any):
        self.relation_kind = relation_kind
        super().__init__(field_name, f"relationship kind {relation_kind!r} is not supported")


class InvalidChoiceSet(FieldError):
    """Raised when a choice list has the wrong shape for its widget."""

    def __init__(self, field_name: str, choices: Any, expected: Optional[int] = None):
        self.choices = choices
        self.expected = expected
        detail = f"expected {expected} choices" if expected is not None else "malformed choices"
        super().__init__(field_name, f"invalid choice set ({detail}): {choices!r}")


class InvalidFieldValue(FieldError):
    """Raised when a field's current value cannot be shown in its control."""

    def __init__(self, field_name: str, value: Any, reason: str):
        self.value = value
        super().__init__(field_name, f"cannot display {value!r}: {reason}")


class FieldMetadataUnavailable(FieldError):
    """Raised when the schema provider fails while describing one field."""

    def __init__(self, field_name: str, cause: ProviderError):
        self.cause = cause
        super().__init__(field_name, str(cause))
