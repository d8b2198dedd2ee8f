"""
Read-only snapshots of field values.

Constant display shows the current value as rich text: escaped, with
newlines turned into line breaks, booleans as Yes/No, temporal values
formatted, associations by display name.
"""

import html
from datetime import date, datetime, time
from typing import Any, Optional

from formbox.exceptions import UnsupportedFieldType
from formbox.protocols.form_config import FormBoxConfig, get_form_config
from formbox.schema.field_types import TEXTUAL_TYPES, TypeTag
from .choices import as_choices, display_name, identity_key, option_text
from .render_options import RenderOptions


def escape_text(value: Any) -> str:
    """Escape ``value`` for rich-text display, keeping line breaks."""
    if value is None:
        return ""
    return html.escape(str(value)).replace("\n", "<br/>")


def format_temporal(value: Any, type_tag: TypeTag, config: Optional[FormBoxConfig] = None) -> str:
    """Format a date/datetime/time value for display."""
    if value is None:
        return ""
    config = config or get_form_config()
    if not isinstance(value, (date, time)):
        return escape_text(value)
    if type_tag is TypeTag.DATE:
        return value.strftime(config.date_format)
    if isinstance(value, time) or (type_tag is TypeTag.TIME and isinstance(value, datetime)):
        return value.strftime(config.clock_format)
    if not isinstance(value, datetime):
        # a plain date in a datetime column
        return value.strftime(config.date_format)
    return value.strftime(config.time_format)


def format_constant(field_name: str, type_tag: TypeTag, value: Any,
                    options: Optional[RenderOptions] = None,
                    choices: Any = None,
                    config: Optional[FormBoxConfig] = None) -> str:
    """
    Formatted snapshot of ``value`` for a read-only field.

    Args:
        field_name: Field being displayed (used in errors)
        type_tag: Resolved declared type
        value: Current value on the record
        options: Render options (``show`` is honoured)
        choices: Effective choices of the field, if any
        config: Form configuration

    Returns:
        Escaped rich text

    Raises:
        UnsupportedFieldType: For binary fields
    """
    options = options or RenderOptions()
    config = config or get_form_config()

    if type_tag is TypeTag.BINARY:
        raise UnsupportedFieldType(field_name, type_tag)

    if choices and type_tag in (TypeTag.STRING, TypeTag.BELONGS_TO):
        if value is None:
            return ""
        if options.show:
            return escape_text(display_name(value, options.show, config))
        label = option_text(as_choices(choices, options.show, config), identity_key(value, config))
        if label is not None:
            return escape_text(label)
        if type_tag is TypeTag.BELONGS_TO:
            return escape_text(display_name(value, None, config))
        return escape_text(value)

    if type_tag in TEXTUAL_TYPES:
        return escape_text(value)
    if type_tag is TypeTag.BOOLEAN:
        return config.yes_label if value else config.no_label
    if type_tag in (TypeTag.DATE, TypeTag.DATETIME, TypeTag.TIME, TypeTag.TIMESTAMP):
        return format_temporal(value, type_tag, config)
    if type_tag is TypeTag.BELONGS_TO:
        return escape_text(display_name(value, options.show, config))
    if type_tag is TypeTag.HAS_MANY:
        labels = [label for label, _ in as_choices(value or [], options.show, config)]
        return html.escape(",".join(str(label) for label in labels))
    return escape_text(value)
