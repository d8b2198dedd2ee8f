"""
Registry of form control classes.

Every adapter in ``formbox.protocols.widget_adapters`` registers itself
under its ``_widget_id``. The registry also records which capability ABCs
each class implements, so tooling can ask, for instance, which controls
can offer choices.
"""

from typing import Dict, List, Set, Type
import logging

from formbox.protocols.widget_protocols import (
    ChangeSignalEmitter, ChoiceConfigurable, PlaceholderCapable,
    ValueGettable, ValueSettable
)

logger = logging.getLogger(__name__)

# _widget_id -> control class
WIDGET_IMPLEMENTATIONS: Dict[str, Type] = {}

# control class -> capability ABCs it implements
WIDGET_CAPABILITIES: Dict[Type, Set[Type]] = {}

CAPABILITY_ABCS = (
    ValueGettable, ValueSettable, PlaceholderCapable,
    ChoiceConfigurable, ChangeSignalEmitter,
)


def register_widget(widget_class: Type) -> Type:
    """
    Register a control class under its ``_widget_id``.

    Returns the class unchanged, so this also works as a class decorator.

    Raises:
        TypeError: If the class still has abstract methods or declares no
            ``_widget_id``
    """
    abstract_methods = getattr(widget_class, "__abstractmethods__", None)
    if abstract_methods:
        raise TypeError(
            f"{widget_class.__name__} is abstract and cannot be registered "
            f"(unimplemented: {', '.join(sorted(abstract_methods))})"
        )
    widget_id = getattr(widget_class, "_widget_id", None)
    if widget_id is None:
        raise TypeError(f"{widget_class.__name__} declares no _widget_id and cannot be registered")

    previous = WIDGET_IMPLEMENTATIONS.get(widget_id)
    if previous is not None and previous is not widget_class:
        logger.warning(f"Widget id '{widget_id}': {widget_class.__name__} replaces {previous.__name__}")

    WIDGET_IMPLEMENTATIONS[widget_id] = widget_class
    capabilities = {abc_type for abc_type in CAPABILITY_ABCS if issubclass(widget_class, abc_type)}
    WIDGET_CAPABILITIES[widget_class] = capabilities
    logger.debug(
        f"Registered '{widget_id}' -> {widget_class.__name__} "
        f"[{', '.join(sorted(c.__name__ for c in capabilities))}]"
    )
    return widget_class


def get_widget_class(widget_id: str) -> Type:
    """
    Control class registered under ``widget_id``.

    Raises:
        KeyError: If nothing is registered under that id
    """
    try:
        return WIDGET_IMPLEMENTATIONS[widget_id]
    except KeyError:
        raise KeyError(
            f"Unknown widget id '{widget_id}'; registered ids: {sorted(WIDGET_IMPLEMENTATIONS)}"
        ) from None


def get_widget_capabilities(widget_class: Type) -> Set[Type]:
    return WIDGET_CAPABILITIES.get(widget_class, set())


def list_widgets_with_capability(capability: Type) -> List[Type]:
    """
    Registered control classes implementing ``capability``, in registration order.

    Example:
        >>> from formbox.protocols import ChoiceConfigurable
        >>> [w.__name__ for w in list_widgets_with_capability(ChoiceConfigurable)]
        ['ComboBoxAdapter', 'RadioGroupAdapter', 'CheckBoxSetAdapter']
    """
    return [cls for cls, capabilities in WIDGET_CAPABILITIES.items() if capability in capabilities]
