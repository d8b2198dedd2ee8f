"""
Per-field render options.

Options arrive as keyword arguments to ``FormBoxBuilder.field`` and are
frozen into a RenderOptions value so widget resolution stays a pure
function of its inputs.
"""

from dataclasses import dataclass, fields, replace
from typing import Any, Mapping, Optional, Sequence


@dataclass(frozen=True)
class RenderOptions:
    """
    Recognized options for rendering one field.

    Attributes:
        required: Field must be filled; selects get no blank entry
        read_only: Render this field as constant text
        radio: Render choices (or a boolean) as a radio group
        choices: Explicit choices; (label, value) pairs or domain objects
        show: Attribute used to label domain objects
        rows: Text area rows, or rows of a has-many check-box grid
        cols: Text area columns / input width, or columns of a check-box grid
        size: Input width in characters (wins over cols)
        label: Label text override
        no_label: Render the row without a label
        icon: Read-only booleans as an icon instead of text
        selected: Preselected value for selects (defaults to the record's value)
        include_blank: Force or suppress the blank select entry (default: only
            when the field is neither required nor a NOT NULL column)
        placeholder: Hint text shown while an input is empty
    """
    required: bool = False
    read_only: bool = False
    radio: bool = False
    choices: Optional[Sequence[Any]] = None
    show: Optional[str] = None
    rows: Optional[int] = None
    cols: Optional[int] = None
    size: Optional[int] = None
    label: Optional[str] = None
    no_label: bool = False
    icon: bool = False
    selected: Any = None
    include_blank: Optional[bool] = None
    placeholder: Optional[str] = None

    @classmethod
    def from_kwargs(cls, options: Optional[Mapping[str, Any]] = None, **kwargs) -> "RenderOptions":
        """
        Build options from a mapping and/or keyword arguments.

        ``visual="radio"`` is accepted as a spelling of ``radio=True``.
        Unknown keys raise TypeError.
        """
        merged = dict(options or {})
        merged.update(kwargs)
        if merged.pop("visual", None) == "radio":
            merged["radio"] = True
        known = {f.name for f in fields(cls)}
        unknown = set(merged) - known
        if unknown:
            raise TypeError(f"Unknown render options: {sorted(unknown)}. Known: {sorted(known)}")
        if merged.get("choices") is not None:
            merged["choices"] = tuple(merged["choices"])
        return cls(**merged)

    def with_overrides(self, **changes) -> "RenderOptions":
        return replace(self, **changes)

    @property
    def input_width(self) -> Optional[int]:
        """Width in characters for line inputs: ``size`` wins over ``cols``."""
        if self.size is not None:
            return self.size
        return self.cols
