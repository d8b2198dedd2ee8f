"""
formbox: labelled form rows for PyQt6, resolved from record metadata.

Given a record and a field name, formbox works out the field's type
(explicit ``meta_field`` override, column, relationship, or string) and
picks the matching control: text input, text area, select, radio group,
check box, date/time picker, association select or check-box grid.
Read-only forms show formatted constant text instead.

Architecture:
- schema: type tags, field descriptors, static and SQLAlchemy providers
- protocols: widget ABCs, Qt adapters, form configuration
- forms: widget resolution (no Qt) and FormBoxBuilder
"""

from __future__ import annotations

import importlib

__version__ = "0.1.0"

_EXPORTS = {
    "FormBoxBuilder": ("formbox.forms.form_box_builder", "FormBoxBuilder"),
    "RenderOptions": ("formbox.forms.render_options", "RenderOptions"),
    "WidgetResolver": ("formbox.forms.widget_resolver", "WidgetResolver"),
    "WidgetKind": ("formbox.forms.widget_kinds", "WidgetKind"),
    "resolve": ("formbox.forms.widget_resolver", "resolve"),
    "as_choices": ("formbox.forms.choices", "as_choices"),
    "TypeTag": ("formbox.schema.field_types", "TypeTag"),
    "RelationKind": ("formbox.schema.field_types", "RelationKind"),
    "FieldDescriptor": ("formbox.schema.descriptors", "FieldDescriptor"),
    "StaticSchemaProvider": ("formbox.schema.static_provider", "StaticSchemaProvider"),
    "FormBoxConfig": ("formbox.protocols.form_config", "FormBoxConfig"),
    "FormBoxError": ("formbox.exceptions", "FormBoxError"),
    "FieldError": ("formbox.exceptions", "FieldError"),
    "UnsupportedFieldType": ("formbox.exceptions", "UnsupportedFieldType"),
    "UnsupportedRelationKind": ("formbox.exceptions", "UnsupportedRelationKind"),
    "InvalidChoiceSet": ("formbox.exceptions", "InvalidChoiceSet"),
    "InvalidFieldValue": ("formbox.exceptions", "InvalidFieldValue"),
    "FieldMetadataUnavailable": ("formbox.exceptions", "FieldMetadataUnavailable"),
}


def __getattr__(name: str):
    if name in _EXPORTS:
        module_name, attr = _EXPORTS[name]
        module = importlib.import_module(module_name)
        value = getattr(module, attr)
        globals()[name] = value
        return value
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["__version__", *_EXPORTS.keys()]
