"""
Capability-checked access to form controls.

FormBoxBuilder and the widget factory never call ``get_value`` and
friends on a control directly. Going through WidgetDispatcher means a
control missing the matching ABC fails with a TypeError naming the ABC,
instead of an AttributeError somewhere in a form.
"""

from typing import Any, Callable, Sequence, Tuple

from formbox.protocols.widget_protocols import (
    ChangeSignalEmitter, ChoiceConfigurable, PlaceholderCapable, ValueGettable, ValueSettable
)


class WidgetDispatcher:
    """
    Reads and writes controls through their declared capabilities.

    Example:
        WidgetDispatcher.set_choices(combo, [("Books", 1), ("Music", 2)])
        WidgetDispatcher.set_value(combo, 2)
        WidgetDispatcher.get_value(combo)  # 2
    """

    @staticmethod
    def _require(widget: Any, abc_type: type, method: str) -> None:
        if isinstance(widget, abc_type):
            return
        raise TypeError(
            f"{type(widget).__name__} cannot {method}(): it is not a {abc_type.__name__}. "
            f"Form controls must inherit the {abc_type.__name__} ABC."
        )

    @staticmethod
    def get_value(widget: Any) -> Any:
        """Value entered in ``widget`` (TypeError unless ValueGettable)."""
        WidgetDispatcher._require(widget, ValueGettable, "get_value")
        return widget.get_value()

    @staticmethod
    def set_value(widget: Any, value: Any) -> None:
        """Show ``value`` in ``widget`` (TypeError unless ValueSettable)."""
        WidgetDispatcher._require(widget, ValueSettable, "set_value")
        widget.set_value(value)

    @staticmethod
    def set_placeholder(widget: Any, text: str) -> None:
        """Show hint ``text`` while ``widget`` is empty (TypeError unless PlaceholderCapable)."""
        WidgetDispatcher._require(widget, PlaceholderCapable, "set_placeholder")
        widget.set_placeholder(text)

    @staticmethod
    def set_choices(widget: Any, choices: Sequence[Tuple[Any, Any]]) -> None:
        """Offer ``(label, value)`` choices (TypeError unless ChoiceConfigurable)."""
        WidgetDispatcher._require(widget, ChoiceConfigurable, "set_choices")
        widget.set_choices(choices)

    @staticmethod
    def connect_change_signal(widget: Any, callback: Callable[[Any], None]) -> None:
        """Call ``callback(new_value)`` on edits (TypeError unless ChangeSignalEmitter)."""
        WidgetDispatcher._require(widget, ChangeSignalEmitter, "connect_change_signal")
        widget.connect_change_signal(callback)
