"""
Widget protocol definitions, adapters and pluggable providers.

ABC-based widget contracts that eliminate duck typing in favor of
explicit, fail-loud inheritance-based architecture, plus the schema
provider and form configuration registries.
"""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .widget_protocols import (
        ValueGettable,
        ValueSettable,
        PlaceholderCapable,
        ChoiceConfigurable,
        ChangeSignalEmitter,
    )
    from .widget_adapters import PyQtWidgetMeta, LineEditAdapter, ComboBoxAdapter
    from .form_config import FormBoxConfig, set_form_config, get_form_config
    from .schema_provider import SchemaProvider, register_schema_provider, get_schema_provider

_EXPORTS = {
    "ValueGettable": ("formbox.protocols.widget_protocols", "ValueGettable"),
    "ValueSettable": ("formbox.protocols.widget_protocols", "ValueSettable"),
    "PlaceholderCapable": ("formbox.protocols.widget_protocols", "PlaceholderCapable"),
    "ChoiceConfigurable": ("formbox.protocols.widget_protocols", "ChoiceConfigurable"),
    "ChangeSignalEmitter": ("formbox.protocols.widget_protocols", "ChangeSignalEmitter"),
    "PyQtWidgetMeta": ("formbox.protocols.widget_adapters", "PyQtWidgetMeta"),
    "LineEditAdapter": ("formbox.protocols.widget_adapters", "LineEditAdapter"),
    "PasswordEditAdapter": ("formbox.protocols.widget_adapters", "PasswordEditAdapter"),
    "TextAreaAdapter": ("formbox.protocols.widget_adapters", "TextAreaAdapter"),
    "ComboBoxAdapter": ("formbox.protocols.widget_adapters", "ComboBoxAdapter"),
    "RadioGroupAdapter": ("formbox.protocols.widget_adapters", "RadioGroupAdapter"),
    "CheckBoxAdapter": ("formbox.protocols.widget_adapters", "CheckBoxAdapter"),
    "DateTimeEditAdapter": ("formbox.protocols.widget_adapters", "DateTimeEditAdapter"),
    "CheckBoxSetAdapter": ("formbox.protocols.widget_adapters", "CheckBoxSetAdapter"),
    "ConstantLabel": ("formbox.protocols.widget_adapters", "ConstantLabel"),
    "FormBoxConfig": ("formbox.protocols.form_config", "FormBoxConfig"),
    "set_form_config": ("formbox.protocols.form_config", "set_form_config"),
    "get_form_config": ("formbox.protocols.form_config", "get_form_config"),
    "SchemaProvider": ("formbox.protocols.schema_provider", "SchemaProvider"),
    "register_schema_provider": ("formbox.protocols.schema_provider", "register_schema_provider"),
    "get_schema_provider": ("formbox.protocols.schema_provider", "get_schema_provider"),
}


def __getattr__(name: str):
    if name in _EXPORTS:
        module_name, attr = _EXPORTS[name]
        module = importlib.import_module(module_name)
        value = getattr(module, attr)
        globals()[name] = value
        return value
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = list(_EXPORTS.keys())
