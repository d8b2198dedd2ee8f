"""
Form building.

Widget resolution (pure, no Qt) and FormBoxBuilder with its supporting
factory, dispatcher and widget registry.
"""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .form_box_builder import FormBoxBuilder
    from .render_options import RenderOptions
    from .choices import as_choices, option_text
    from .widget_kinds import WidgetKind, ResolvedWidget
    from .widget_resolver import WidgetResolver, resolve
    from .widget_factory import WidgetFactory
    from .widget_dispatcher import WidgetDispatcher
    from .widget_registry import (
        WIDGET_IMPLEMENTATIONS,
        WIDGET_CAPABILITIES,
        register_widget,
        get_widget_class,
        get_widget_capabilities,
        list_widgets_with_capability,
    )

_EXPORTS = {
    "FormBoxBuilder": ("formbox.forms.form_box_builder", "FormBoxBuilder"),
    "RenderOptions": ("formbox.forms.render_options", "RenderOptions"),
    "as_choices": ("formbox.forms.choices", "as_choices"),
    "option_text": ("formbox.forms.choices", "option_text"),
    "format_constant": ("formbox.forms.constant_formatter", "format_constant"),
    "WidgetKind": ("formbox.forms.widget_kinds", "WidgetKind"),
    "ResolvedWidget": ("formbox.forms.widget_kinds", "ResolvedWidget"),
    "WidgetResolver": ("formbox.forms.widget_resolver", "WidgetResolver"),
    "resolve": ("formbox.forms.widget_resolver", "resolve"),
    "WidgetFactory": ("formbox.forms.widget_factory", "WidgetFactory"),
    "WidgetDispatcher": ("formbox.forms.widget_dispatcher", "WidgetDispatcher"),
    "WIDGET_IMPLEMENTATIONS": ("formbox.forms.widget_registry", "WIDGET_IMPLEMENTATIONS"),
    "WIDGET_CAPABILITIES": ("formbox.forms.widget_registry", "WIDGET_CAPABILITIES"),
    "register_widget": ("formbox.forms.widget_registry", "register_widget"),
    "get_widget_class": ("formbox.forms.widget_registry", "get_widget_class"),
    "get_widget_capabilities": ("formbox.forms.widget_registry", "get_widget_capabilities"),
    "list_widgets_with_capability": ("formbox.forms.widget_registry", "list_widgets_with_capability"),
    "FormBoxLayoutConfig": ("formbox.forms.layout_constants", "FormBoxLayoutConfig"),
    "CURRENT_LAYOUT": ("formbox.forms.layout_constants", "CURRENT_LAYOUT"),
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
