"""
Widget factory with explicit kind-based dispatch.

Turns a ResolvedWidget into a Qt control. Every WidgetKind maps to one
factory function; an unregistered kind fails loud.

Design:
- WIDGET_KIND_REGISTRY: WidgetKind -> factory function
- Factories receive (resolved, object_id, config) and return a QWidget
  already holding the field's current value
"""

from typing import Callable, Dict, Optional
import logging

from PyQt6.QtWidgets import QWidget

from formbox.exceptions import InvalidFieldValue, UnsupportedFieldType
from formbox.protocols.form_config import FormBoxConfig, get_form_config
from formbox.protocols.widget_adapters import (
    CheckBoxAdapter, CheckBoxSetAdapter, ComboBoxAdapter, ConstantLabel,
    DateTimeEditAdapter, LineEditAdapter, RadioGroupAdapter, TextAreaAdapter,
    apply_char_width
)
from formbox.schema.field_types import TypeTag
from .widget_dispatcher import WidgetDispatcher
from .widget_kinds import ResolvedWidget, WidgetKind

logger = logging.getLogger(__name__)

WidgetFactoryFunc = Callable[[ResolvedWidget, str, FormBoxConfig], QWidget]


def _apply_placeholder(widget: QWidget, resolved: ResolvedWidget) -> None:
    if resolved.placeholder:
        WidgetDispatcher.set_placeholder(widget, resolved.placeholder)


def _create_text_input(resolved: ResolvedWidget, object_id: str, config: FormBoxConfig) -> QWidget:
    widget = LineEditAdapter()
    widget.setObjectName(object_id)
    WidgetDispatcher.set_value(widget, resolved.value)
    _apply_placeholder(widget, resolved)
    apply_char_width(widget, resolved.width)
    return widget


def _create_text_area(resolved: ResolvedWidget, object_id: str, config: FormBoxConfig) -> QWidget:
    widget = TextAreaAdapter()
    widget.setObjectName(object_id)
    widget.set_size(resolved.rows, resolved.cols)
    WidgetDispatcher.set_value(widget, resolved.value)
    _apply_placeholder(widget, resolved)
    return widget


def _create_select(resolved: ResolvedWidget, object_id: str, config: FormBoxConfig) -> QWidget:
    widget = ComboBoxAdapter(include_blank=resolved.include_blank, blank_label=config.blank_choice_label)
    widget.setObjectName(object_id)
    WidgetDispatcher.set_choices(widget, resolved.choices)
    WidgetDispatcher.set_value(widget, resolved.selected)
    _apply_placeholder(widget, resolved)
    return widget


def _create_radio_group(resolved: ResolvedWidget, object_id: str, config: FormBoxConfig) -> QWidget:
    widget = RadioGroupAdapter()
    # button names derive from the group's object name
    widget.setObjectName(object_id)
    WidgetDispatcher.set_choices(widget, resolved.choices)
    WidgetDispatcher.set_value(widget, resolved.selected)
    return widget


def _create_check_box(resolved: ResolvedWidget, object_id: str, config: FormBoxConfig) -> QWidget:
    widget = CheckBoxAdapter()
    widget.setObjectName(object_id)
    WidgetDispatcher.set_value(widget, resolved.value)
    return widget


def _create_date_time_picker(resolved: ResolvedWidget, object_id: str, config: FormBoxConfig) -> QWidget:
    widget = DateTimeEditAdapter(type_tag=resolved.type_tag)
    widget.setObjectName(object_id)
    try:
        WidgetDispatcher.set_value(widget, resolved.value)
    except (ValueError, TypeError) as error:
        raise InvalidFieldValue(resolved.field_name, resolved.value, str(error)) from error
    _apply_placeholder(widget, resolved)
    apply_char_width(widget, resolved.width + 4 if resolved.width else None)
    return widget


def _create_multi_select(resolved: ResolvedWidget, object_id: str, config: FormBoxConfig) -> QWidget:
    widget = CheckBoxSetAdapter(grid=resolved.grid)
    widget.setObjectName(object_id)
    WidgetDispatcher.set_choices(widget, resolved.choices)
    WidgetDispatcher.set_value(widget, list(resolved.checked))
    return widget


def _create_constant(resolved: ResolvedWidget, object_id: str, config: FormBoxConfig) -> QWidget:
    if resolved.icon and resolved.type_tag is TypeTag.BOOLEAN:
        widget = CheckBoxAdapter()
        widget.setObjectName(object_id)
        WidgetDispatcher.set_value(widget, resolved.value)
        widget.setEnabled(False)
        widget.setToolTip(resolved.display)
        return widget
    widget = ConstantLabel()
    widget.setObjectName(object_id)
    WidgetDispatcher.set_value(widget, resolved.display)
    return widget


def _create_unsupported(resolved: ResolvedWidget, object_id: str, config: FormBoxConfig) -> QWidget:
    raise UnsupportedFieldType(resolved.field_name, resolved.type_tag)


# Explicit kind dispatch - NO DUCK TYPING
WIDGET_KIND_REGISTRY: Dict[WidgetKind, WidgetFactoryFunc] = {
    WidgetKind.TEXT_INPUT: _create_text_input,
    WidgetKind.TEXT_AREA: _create_text_area,
    WidgetKind.SELECT: _create_select,
    WidgetKind.RADIO_GROUP: _create_radio_group,
    WidgetKind.CHECK_BOX: _create_check_box,
    WidgetKind.DATE_TIME_PICKER: _create_date_time_picker,
    WidgetKind.ASSOCIATION_SELECT: _create_select,
    WidgetKind.ASSOCIATION_MULTI_SELECT: _create_multi_select,
    WidgetKind.CONSTANT_DISPLAY: _create_constant,
    WidgetKind.UNSUPPORTED_BINARY: _create_unsupported,
}


class WidgetFactory:
    """
    Creates Qt controls for resolved widgets.

    Example:
        factory = WidgetFactory()
        widget = factory.create_widget(resolved, "product_name")
    """

    def __init__(self, config: Optional[FormBoxConfig] = None):
        self.config = config

    def create_widget(self, resolved: ResolvedWidget, object_id: str = "") -> QWidget:
        """
        Create the control for ``resolved``.

        Args:
            resolved: Output of widget resolution
            object_id: Qt object name for the control (``<form>_<field>``)

        Raises:
            TypeError: If no factory is registered for the widget kind
        """
        factory_func = WIDGET_KIND_REGISTRY.get(resolved.kind)
        if factory_func is None:
            raise TypeError(
                f"No widget factory registered for kind {resolved.kind} (field: '{resolved.field_name}'). "
                f"Available kinds: {[kind.value for kind in WIDGET_KIND_REGISTRY]}."
            )
        widget = factory_func(resolved, object_id, self.config or get_form_config())
        logger.debug(f"Created {type(widget).__name__} for field '{resolved.field_name}' ({resolved.kind.value})")
        return widget

    @staticmethod
    def register_widget_kind(kind: WidgetKind, factory_func: WidgetFactoryFunc) -> None:
        """
        Replace the factory used for ``kind``.

        Example:
            >>> WidgetFactory.register_widget_kind(WidgetKind.CHECK_BOX, create_toggle_switch)
        """
        if kind in WIDGET_KIND_REGISTRY:
            logger.warning(f"Overwriting existing widget factory for kind {kind.value}")
        WIDGET_KIND_REGISTRY[kind] = factory_func
