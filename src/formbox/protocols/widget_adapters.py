"""
Qt controls for form fields.

Each adapter wraps one Qt widget behind the capability ABCs of
``widget_protocols`` so FormBoxBuilder handles every control alike:

    | Adapter             | Qt widget       | Value                       |
    |---------------------|-----------------|-----------------------------|
    | LineEditAdapter     | QLineEdit       | str or None                 |
    | PasswordEditAdapter | QLineEdit       | str or None (masked)        |
    | TextAreaAdapter     | QPlainTextEdit  | str or None                 |
    | ComboBoxAdapter     | QComboBox       | choice value or None        |
    | RadioGroupAdapter   | QRadioButton[]  | choice value or None        |
    | CheckBoxAdapter     | QCheckBox       | bool                        |
    | DateTimeEditAdapter | QDateTimeEdit   | date / datetime / time      |
    | CheckBoxSetAdapter  | QCheckBox grid  | list of checked values      |
    | ConstantLabel       | QLabel          | (display only)              |

Importing this module registers every adapter with the widget registry.
"""

from abc import ABCMeta
from datetime import date, datetime, time
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from PyQt6.QtCore import QDate, QDateTime, QObject, QTime, Qt
from PyQt6.QtWidgets import (
    QButtonGroup, QCheckBox, QComboBox, QDateTimeEdit, QGridLayout, QLabel,
    QLineEdit, QPlainTextEdit, QRadioButton, QVBoxLayout, QWidget
)

from formbox.forms.widget_registry import register_widget
from formbox.schema.field_types import TypeTag
from .widget_protocols import (
    ChangeSignalEmitter, ChoiceConfigurable, PlaceholderCapable,
    ValueGettable, ValueSettable
)


class PyQtWidgetMeta(type(QObject), ABCMeta):
    """Lets Qt widget classes inherit the capability ABCs (sip metaclass first)."""
    pass


def apply_char_width(widget: QWidget, chars: Optional[int]) -> None:
    """Limit ``widget`` to roughly ``chars`` characters of width."""
    if not chars:
        return
    metrics = widget.fontMetrics()
    widget.setMaximumWidth(metrics.horizontalAdvance("M") * chars + 12)


def _as_text(value: Any) -> str:
    return "" if value is None else str(value)


def _same_value(left: Any, right: Any) -> bool:
    """Choice values compare equal directly or through their text form."""
    if left == right:
        return True
    if left is None or right is None:
        return False
    return str(left) == str(right)


class LineEditAdapter(QLineEdit, ValueGettable, ValueSettable, PlaceholderCapable,
                      ChangeSignalEmitter, metaclass=PyQtWidgetMeta):
    """Single-line text input; blank input reads back as None."""

    _widget_id = "line_edit"

    def get_value(self) -> Any:
        return self.text().strip() or None

    def set_value(self, value: Any) -> None:
        self.setText(_as_text(value))

    def set_placeholder(self, text: str) -> None:
        self.setPlaceholderText(text)

    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        self.textChanged.connect(lambda _text: callback(self.get_value()))


class PasswordEditAdapter(LineEditAdapter):
    """Line input echoing bullets instead of the typed text."""

    _widget_id = "password_edit"

    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.setEchoMode(QLineEdit.EchoMode.Password)


class TextAreaAdapter(QPlainTextEdit, ValueGettable, ValueSettable, PlaceholderCapable,
                      ChangeSignalEmitter, metaclass=PyQtWidgetMeta):
    """Multi-line text input sized in rows and columns."""

    _widget_id = "text_area"

    def set_size(self, rows: Optional[int] = None, cols: Optional[int] = None) -> None:
        metrics = self.fontMetrics()
        if rows:
            self.setFixedHeight(metrics.lineSpacing() * rows + 12)
        if cols:
            self.setFixedWidth(metrics.horizontalAdvance("M") * cols + 12)

    def get_value(self) -> Any:
        text = self.toPlainText()
        return text if text.strip() else None

    def set_value(self, value: Any) -> None:
        self.setPlainText(_as_text(value))

    def set_placeholder(self, text: str) -> None:
        self.setPlaceholderText(text)

    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        # QPlainTextEdit.textChanged carries no argument
        self.textChanged.connect(lambda: callback(self.get_value()))


class ComboBoxAdapter(QComboBox, ValueGettable, ValueSettable, PlaceholderCapable,
                      ChoiceConfigurable, ChangeSignalEmitter, metaclass=PyQtWidgetMeta):
    """
    Drop-down select.

    Each item's data holds its choice value. With ``include_blank`` the
    first item is a blank entry whose value is None.
    """

    _widget_id = "combo_box"

    def __init__(self, parent: Optional[QWidget] = None, include_blank: bool = False,
                 blank_label: str = ""):
        super().__init__(parent)
        self._include_blank = include_blank
        self._blank_label = blank_label
        self._choices: List[Tuple[Any, Any]] = []

    def set_choices(self, choices: Sequence[Tuple[Any, Any]]) -> None:
        self._choices = [tuple(choice) for choice in choices]
        self.blockSignals(True)
        self.clear()
        if self._include_blank:
            self.addItem(self._blank_label, None)
        for label, value in self._choices:
            self.addItem(str(label), value)
        self.blockSignals(False)

    def get_choices(self) -> Sequence[Tuple[Any, Any]]:
        return list(self._choices)

    def get_value(self) -> Any:
        index = self.currentIndex()
        return None if index < 0 else self.itemData(index)

    def set_value(self, value: Any) -> None:
        index = self._index_of(value)
        if index is None:
            # unknown or None: blank entry, or nothing selected
            index = 0 if self._include_blank else -1
        self.setCurrentIndex(index)

    def _index_of(self, value: Any) -> Optional[int]:
        if value is None:
            return None
        offset = 1 if self._include_blank else 0
        for position, (_, choice_value) in enumerate(self._choices):
            if _same_value(choice_value, value):
                return position + offset
        return None

    def set_placeholder(self, text: str) -> None:
        self.setPlaceholderText(text)

    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        self.currentIndexChanged.connect(lambda _index: callback(self.get_value()))


class RadioGroupAdapter(QWidget, ValueGettable, ValueSettable, ChoiceConfigurable,
                        ChangeSignalEmitter, metaclass=PyQtWidgetMeta):
    """Exclusive group of radio buttons, one per choice, stacked vertically."""

    _widget_id = "radio_group"

    def __init__(self, parent=None):
        super().__init__(parent)
        self._layout = QVBoxLayout(self)
        self._layout.setContentsMargins(0, 0, 0, 0)
        self._group = QButtonGroup(self)
        self._group.setExclusive(True)
        self._buttons: List[Tuple[QRadioButton, Any]] = []
        self._choices: List[Tuple[Any, Any]] = []

    def set_choices(self, choices: Sequence[Tuple[Any, Any]]) -> None:
        for button, _ in self._buttons:
            self._group.removeButton(button)
            button.deleteLater()
        self._buttons = []
        self._choices = [tuple(choice) for choice in choices]
        for label, value in self._choices:
            button = QRadioButton(str(label), self)
            button.setObjectName(f"{self.objectName()}_{value}")
            self._group.addButton(button)
            self._layout.addWidget(button)
            self._buttons.append((button, value))

    def get_choices(self) -> Sequence[Tuple[Any, Any]]:
        return list(self._choices)

    def buttons(self) -> List[QRadioButton]:
        return [button for button, _ in self._buttons]

    def get_value(self) -> Any:
        for button, value in self._buttons:
            if button.isChecked():
                return value
        return None

    def set_value(self, value: Any) -> None:
        for button, choice_value in self._buttons:
            if _same_value(choice_value, value):
                button.setChecked(True)
                return
        # exclusive groups refuse to uncheck the last button
        self._group.setExclusive(False)
        for button, _ in self._buttons:
            button.setChecked(False)
        self._group.setExclusive(True)

    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        self._group.buttonToggled.connect(lambda *_: callback(self.get_value()))


class CheckBoxAdapter(QCheckBox, ValueGettable, ValueSettable,
                      ChangeSignalEmitter, metaclass=PyQtWidgetMeta):
    """Boolean check box; None shows unchecked."""

    _widget_id = "check_box"

    def get_value(self) -> Any:
        return self.isChecked()

    def set_value(self, value: Any) -> None:
        self.setChecked(bool(value))

    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        # toggled already carries the new bool
        self.toggled.connect(callback)


# Minimum date-time doubles as the "no value" marker
_NULL_DATETIME = QDateTime(QDate(1752, 9, 14), QTime(0, 0))

_DISPLAY_FORMATS = {
    TypeTag.DATE: "yyyy-MM-dd",
    TypeTag.TIME: "HH:mm",
    TypeTag.DATETIME: "yyyy-MM-dd HH:mm",
    TypeTag.TIMESTAMP: "yyyy-MM-dd HH:mm:ss",
}


class DateTimeEditAdapter(QDateTimeEdit, ValueGettable, ValueSettable, PlaceholderCapable,
                          ChangeSignalEmitter, metaclass=PyQtWidgetMeta):
    """
    Date / datetime / time picker with a calendar popup.

    Handles None using special value text at the minimum date-time.
    Returns ``date``, ``datetime`` or ``time`` depending on the field type.
    """

    _widget_id = "date_time_edit"

    def __init__(self, parent=None, type_tag: TypeTag = TypeTag.DATETIME):
        super().__init__(parent)
        self.type_tag = type_tag
        self.setDisplayFormat(_DISPLAY_FORMATS.get(type_tag, _DISPLAY_FORMATS[TypeTag.DATETIME]))
        self.setCalendarPopup(type_tag is not TypeTag.TIME)
        self.setMinimumDateTime(_NULL_DATETIME)
        self.setSpecialValueText(" ")
        self.setDateTime(_NULL_DATETIME)

    def get_value(self) -> Any:
        if self.dateTime() == self.minimumDateTime() and self.specialValueText():
            return None
        if self.type_tag is TypeTag.DATE:
            return self.date().toPyDate()
        if self.type_tag is TypeTag.TIME:
            return self.time().toPyTime()
        return self.dateTime().toPyDateTime()

    def set_value(self, value: Any) -> None:
        if isinstance(value, str) and value.strip():
            value = self._parse_text(value.strip())
        if value is None or value == "":
            self.setDateTime(self.minimumDateTime())
        elif isinstance(value, datetime):
            self.setDateTime(QDateTime(
                QDate(value.year, value.month, value.day),
                QTime(value.hour, value.minute, value.second),
            ))
        elif isinstance(value, date):
            self.setDateTime(QDateTime(QDate(value.year, value.month, value.day), QTime(0, 0)))
        elif isinstance(value, time):
            self.setDateTime(QDateTime(QDate(2000, 1, 1), QTime(value.hour, value.minute, value.second)))
        else:
            raise TypeError(f"Cannot show {type(value).__name__} in a date/time picker")

    def _parse_text(self, text: str) -> Any:
        """ISO text in the field's own flavour; ValueError when it does not parse."""
        if self.type_tag is TypeTag.TIME:
            return time.fromisoformat(text)
        if self.type_tag is TypeTag.DATE:
            return date.fromisoformat(text)
        return datetime.fromisoformat(text)

    def set_placeholder(self, text: str) -> None:
        self.setSpecialValueText(text)

    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        self.dateTimeChanged.connect(lambda: callback(self.get_value()))


class CheckBoxSetAdapter(QWidget, ValueGettable, ValueSettable, ChoiceConfigurable,
                         ChangeSignalEmitter, metaclass=PyQtWidgetMeta):
    """
    Check-box set for has-many associations.

    One check box per candidate, laid out row-major in a (rows, columns)
    grid, or as a single column when no grid is given. The value is the
    list of checked identity keys.
    """

    _widget_id = "check_box_set"

    def __init__(self, parent=None, grid: Optional[Tuple[int, int]] = None):
        super().__init__(parent)
        self._grid = grid
        self._layout = QGridLayout(self)
        self._layout.setContentsMargins(0, 0, 0, 0)
        self._checkboxes: Dict[Any, QCheckBox] = {}
        self._choices: List[Tuple[Any, Any]] = []
        self._callbacks: List[Callable[[Any], None]] = []

    @property
    def grid(self) -> Optional[Tuple[int, int]]:
        return self._grid

    def set_choices(self, choices: Sequence[Tuple[Any, Any]]) -> None:
        for checkbox in self._checkboxes.values():
            self._layout.removeWidget(checkbox)
            checkbox.deleteLater()
        self._checkboxes = {}
        self._choices = [tuple(choice) for choice in choices]
        columns = self._grid[1] if self._grid else 1
        for index, (label, value) in enumerate(self._choices):
            checkbox = QCheckBox(str(label), self)
            checkbox.setObjectName(f"{self.objectName()}_{value}")
            for callback in self._callbacks:
                checkbox.toggled.connect(lambda *_, cb=callback: cb(self.get_value()))
            self._layout.addWidget(checkbox, index // columns, index % columns)
            self._checkboxes[value] = checkbox

    def get_choices(self) -> Sequence[Tuple[Any, Any]]:
        return list(self._choices)

    def checkbox_for(self, value: Any) -> QCheckBox:
        return self._checkboxes[value]

    def position_of(self, value: Any) -> Tuple[int, int]:
        """(row, column) of the check box for ``value``."""
        index = self._layout.indexOf(self._checkboxes[value])
        row, column, _, _ = self._layout.getItemPosition(index)
        return row, column

    def get_value(self) -> Any:
        return [value for value, checkbox in self._checkboxes.items() if checkbox.isChecked()]

    def set_value(self, value: Any) -> None:
        selected = list(value or [])
        for choice_value, checkbox in self._checkboxes.items():
            checkbox.setChecked(any(_same_value(choice_value, item) for item in selected))

    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        self._callbacks.append(callback)
        for checkbox in self._checkboxes.values():
            checkbox.toggled.connect(lambda *_: callback(self.get_value()))


class ConstantLabel(QLabel, ValueSettable, metaclass=PyQtWidgetMeta):
    """Read-only rich-text display of a formatted value."""

    _widget_id = "constant"

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setProperty("class", "constfield")
        self.setTextFormat(Qt.TextFormat.RichText)
        self.setTextInteractionFlags(Qt.TextInteractionFlag.TextSelectableByMouse)

    def set_value(self, value: Any) -> None:
        self.setText(_as_text(value))


ADAPTERS = (
    LineEditAdapter,
    PasswordEditAdapter,
    TextAreaAdapter,
    ComboBoxAdapter,
    RadioGroupAdapter,
    CheckBoxAdapter,
    DateTimeEditAdapter,
    CheckBoxSetAdapter,
    ConstantLabel,
)

for _adapter_class in ADAPTERS:
    register_widget(_adapter_class)
