"""
Capabilities a formbox control can declare.

FormBoxBuilder talks to its controls only through these ABCs, and each
adapter lists the ones it supports among its base classes. A control that
lacks a capability is rejected by WidgetDispatcher with a TypeError, never
skipped.

    | ABC                 | Used for                                   |
    |---------------------|--------------------------------------------|
    | ValueGettable       | collecting ``FormBoxBuilder.values()``     |
    | ValueSettable       | showing the record's current value         |
    | PlaceholderCapable  | hint text in empty inputs                  |
    | ChoiceConfigurable  | selects, radio groups, check-box sets      |
    | ChangeSignalEmitter | reacting to edits without Qt signal names  |
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Sequence, Tuple


class ValueGettable(ABC):
    """Control whose value ends up in ``FormBoxBuilder.values()``."""

    @abstractmethod
    def get_value(self) -> Any:
        """
        Value the user entered, in the field's own type.

        Empty inputs report None; check-box sets report a list of keys.
        """
        pass


class ValueSettable(ABC):
    """Control that can show a field's current value."""

    @abstractmethod
    def set_value(self, value: Any) -> None:
        """Show ``value``; None empties the control."""
        pass


class PlaceholderCapable(ABC):
    @abstractmethod
    def set_placeholder(self, text: str) -> None:
        pass


class ChoiceConfigurable(ABC):
    """Control offering a fixed list of ``(label, value)`` choices."""

    @abstractmethod
    def set_choices(self, choices: Sequence[Tuple[Any, Any]]) -> None:
        """Replace the offered choices, keeping their order."""
        pass

    @abstractmethod
    def get_choices(self) -> Sequence[Tuple[Any, Any]]:
        pass


class ChangeSignalEmitter(ABC):
    """
    Control that reports edits.

    Qt names the signal differently per widget (textChanged,
    currentIndexChanged, toggled, buttonToggled); adapters map theirs here.
    """

    @abstractmethod
    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        """Call ``callback(new_value)`` whenever the user edits the control."""
        pass
