"""Configuration for form building.

Applications set one FormBoxConfig globally (or pass one to a builder) to
customize labels, formats and error handling.
"""

from dataclasses import dataclass, field
from typing import Callable, Optional, Tuple


def humanize_field_name(name: str) -> str:
    """Default label resolver: ``published_on`` -> ``Published on``."""
    text = name.replace("_", " ").strip()
    return text[:1].upper() + text[1:]


@dataclass
class FormBoxConfig:
    """Configuration for form building behavior.

    Attributes:
        date_format: strftime format for read-only dates
        time_format: strftime format for read-only datetimes and timestamps
        clock_format: strftime format for read-only times of day
        yes_label: Read-only text for true booleans
        no_label: Read-only text for false booleans
        boolean_choices: Default (label, value) pairs for a boolean radio group
        possible_showers: Attribute names tried, in order, to label a domain object
        identity_attribute: Attribute holding a domain object's identity key
        numeric_field_size: Width (in characters) of numeric text inputs
        calendar_field_size: Width (in characters) of date/time pickers
        required_marker: Text appended to labels of required fields
        read_only_label_suffix: Text appended to labels on read-only forms
        blank_choice_label: Text of the blank entry added to optional selects
        label_resolver: Maps a field name (without ``_id``) to its label text
        field_error_policy: "report" renders an error row and keeps going,
            "raise" propagates the field error
    """

    date_format: str = "%Y-%m-%d"
    time_format: str = "%Y-%m-%d %H:%M"
    clock_format: str = "%H:%M"
    yes_label: str = "Yes"
    no_label: str = "No"
    boolean_choices: Tuple[Tuple[str, str], ...] = (("No", "0"), ("Yes", "1"))
    possible_showers: Tuple[str, ...] = ("name",)
    identity_attribute: str = "id"
    numeric_field_size: int = 10
    calendar_field_size: int = 10
    required_marker: str = " *"
    read_only_label_suffix: str = ":"
    blank_choice_label: str = ""
    label_resolver: Callable[[str], str] = field(default=humanize_field_name)
    field_error_policy: str = "report"

    def __post_init__(self):
        if self.field_error_policy not in ("report", "raise"):
            raise ValueError(
                f"field_error_policy must be 'report' or 'raise', got {self.field_error_policy!r}"
            )


# Global config instance (set by application)
_form_config: Optional[FormBoxConfig] = None


def set_form_config(config: Optional[FormBoxConfig]) -> None:
    """Set the global form configuration (None restores defaults).

    Args:
        config: FormBoxConfig instance
    """
    global _form_config
    _form_config = config


def get_form_config() -> FormBoxConfig:
    """Get the current form configuration.

    Returns:
        Current FormBoxConfig or default if not set
    """
    if _form_config is None:
        return FormBoxConfig()
    return _form_config
