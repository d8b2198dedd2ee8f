"""
Choice-list normalization.

Selects, radio groups and check-box sets all consume ``(label, value)``
pairs. ``as_choices`` turns whatever the caller supplied (pairs, domain
objects, scalars, enum members) into that shape. Normalization is
idempotent: already-paired input passes through unchanged.
"""

from datetime import date, time
from decimal import Decimal
from enum import Enum
from typing import Any, Iterable, List, Optional, Tuple

from formbox.protocols.form_config import FormBoxConfig, get_form_config

Choice = Tuple[Any, Any]

_SCALAR_TYPES = (str, bytes, int, float, Decimal, date, time)


def is_choice_pair(item: Any) -> bool:
    """True for a ``(label, value)`` pair."""
    return isinstance(item, (tuple, list)) and len(item) == 2


def shower_for(obj: Any, show: Optional[str] = None,
               config: Optional[FormBoxConfig] = None) -> Optional[str]:
    """
    Attribute used to label ``obj``.

    Returns the explicit ``show`` attribute if given, else the first
    preferred attribute ``obj`` has, else None (meaning ``str(obj)``).
    """
    if show:
        return show
    config = config or get_form_config()
    for attribute in config.possible_showers:
        if hasattr(obj, attribute):
            return attribute
    return None


def display_name(obj: Any, show: Optional[str] = None,
                 config: Optional[FormBoxConfig] = None) -> str:
    """Human-readable label of a domain object."""
    if obj is None:
        return ""
    attribute = shower_for(obj, show, config)
    if attribute is None:
        return str(obj)
    value = getattr(obj, attribute)
    if callable(value):
        value = value()
    return "" if value is None else str(value)


def identity_key(obj: Any, config: Optional[FormBoxConfig] = None) -> Any:
    """Identity key of a domain object (its ``id``), or the value itself."""
    if obj is None or isinstance(obj, _SCALAR_TYPES) or isinstance(obj, Enum):
        return obj
    config = config or get_form_config()
    return getattr(obj, config.identity_attribute, obj)


def _scalar_choice(item: Any) -> Choice:
    if isinstance(item, Enum):
        return (item.name, item)
    return (str(item), item)


def as_choices(items: Optional[Iterable[Any]], show: Optional[str] = None,
               config: Optional[FormBoxConfig] = None) -> List[Choice]:
    """
    Normalize ``items`` into a list of ``(label, value)`` pairs.

    Args:
        items: Pairs, domain objects, scalars or enum members (or None)
        show: Attribute used to label domain objects
        config: Form configuration (preferred label attributes, identity key)

    Returns:
        List of (label, value) pairs; empty for None or empty input

    Example:
        >>> as_choices([("Red", 1), ("Blue", 2)])
        [('Red', 1), ('Blue', 2)]
        >>> as_choices(["s", "m"])
        [('s', 's'), ('m', 'm')]
    """
    if items is None:
        return []
    items = list(items)
    if not items:
        return []
    if all(is_choice_pair(item) for item in items):
        return [tuple(item) for item in items]

    config = config or get_form_config()
    result = []
    for item in items:
        if is_choice_pair(item):
            result.append(tuple(item))
        elif isinstance(item, _SCALAR_TYPES) or isinstance(item, Enum):
            result.append(_scalar_choice(item))
        else:
            result.append((display_name(item, show, config), identity_key(item, config)))
    return result


def option_text(choices: Iterable[Choice], value: Any) -> Optional[str]:
    """Label paired with ``value`` in ``choices``, or None."""
    for label, choice_value in choices:
        if choice_value == value:
            return label
    return None
