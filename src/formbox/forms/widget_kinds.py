"""
Abstract widget kinds and the resolved-widget value object.

A ResolvedWidget says WHAT to render for one field; the Qt layer
(``widget_factory``) decides HOW.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Tuple

from formbox.schema.field_types import TypeTag


class WidgetKind(Enum):
    """Output-control kinds, independent of any toolkit."""
    TEXT_INPUT = "text_input"
    TEXT_AREA = "text_area"
    SELECT = "select"
    RADIO_GROUP = "radio_group"
    CHECK_BOX = "check_box"
    DATE_TIME_PICKER = "date_time_picker"
    ASSOCIATION_SELECT = "association_select"
    ASSOCIATION_MULTI_SELECT = "association_multi_select"
    CONSTANT_DISPLAY = "constant_display"
    UNSUPPORTED_BINARY = "unsupported_binary"


@dataclass(frozen=True)
class ResolvedWidget:
    """
    Everything a renderer needs to build the control for one field.

    Attributes:
        kind: Widget kind
        field_name: Field the widget edits or displays
        type_tag: Resolved declared type of the field
        key: Name the value is collected under (foreign key for belongs-to)
        value: Current value of the field on the record
        choices: (label, value) pairs for selects, radio groups and check-box sets
        selected: Preselected / checked value for selects and radio groups
        checked: Identity keys checked in a has-many check-box set
        include_blank: Selects start with a blank entry
        width: Input width in characters
        rows: Text area rows
        cols: Text area columns
        grid: (rows, columns) of a has-many check-box grid, None for a plain list
        display: Formatted snapshot for constant display (escaped rich text)
        icon: Constant booleans render as an icon
        placeholder: Hint text for empty inputs
    """
    kind: WidgetKind
    field_name: str
    type_tag: TypeTag
    key: str
    value: Any = None
    choices: Tuple[Tuple[Any, Any], ...] = ()
    selected: Any = None
    checked: Tuple[Any, ...] = ()
    include_blank: bool = False
    width: Optional[int] = None
    rows: Optional[int] = None
    cols: Optional[int] = None
    grid: Optional[Tuple[int, int]] = None
    display: str = ""
    icon: bool = False
    placeholder: Optional[str] = None

    @property
    def is_constant(self) -> bool:
        return self.kind is WidgetKind.CONSTANT_DISPLAY
