"""
Field-widget resolution.

Maps a FieldDescriptor plus render options onto exactly one WidgetKind,
then builds the ResolvedWidget for it. Resolution is a pure function of
its inputs: association candidates are passed in, not looked up.

Dispatch follows the enum-strategy pattern: ``determine_kind`` picks a
WidgetKind, a handler table builds the ResolvedWidget. Editable selection
(first match wins):

    | Condition                               | Kind                     |
    |-----------------------------------------|--------------------------|
    | TEXT, or STRING with rows               | TEXT_AREA                |
    | INTEGER/STRING with choices and radio   | RADIO_GROUP              |
    | INTEGER/STRING with choices             | SELECT                   |
    | STRING                                  | TEXT_INPUT               |
    | INTEGER/FLOAT/DECIMAL                   | TEXT_INPUT (narrow)      |
    | BOOLEAN with radio                      | RADIO_GROUP (2 choices)  |
    | BOOLEAN                                 | CHECK_BOX                |
    | DATE/DATETIME/TIME/TIMESTAMP            | DATE_TIME_PICKER         |
    | BELONGS_TO                              | ASSOCIATION_SELECT       |
    | HAS_MANY                                | ASSOCIATION_MULTI_SELECT |
    | BINARY                                  | UNSUPPORTED_BINARY       |

Read-only fields resolve to CONSTANT_DISPLAY, except BINARY which still
fails with UnsupportedFieldType.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Sequence, Tuple
import logging

from formbox.exceptions import InvalidChoiceSet, UnsupportedFieldType
from formbox.protocols.form_config import FormBoxConfig, get_form_config
from formbox.schema.descriptors import FieldDescriptor
from formbox.schema.field_types import CHOICE_TYPES, NUMERIC_TYPES, TEMPORAL_TYPES, TypeTag
from .choices import as_choices, identity_key
from .constant_formatter import format_constant
from .render_options import RenderOptions
from .widget_kinds import ResolvedWidget, WidgetKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolutionContext:
    """Inputs of one resolution, handed to every handler."""
    descriptor: FieldDescriptor
    options: RenderOptions
    read_only: bool
    value: Any
    candidates: Optional[Sequence[Any]]
    config: FormBoxConfig

    @property
    def name(self) -> str:
        return self.descriptor.name

    @property
    def type_tag(self) -> TypeTag:
        return self.descriptor.declared_type

    @property
    def choices(self) -> Optional[Sequence[Any]]:
        """Explicit choices win over choices declared by the column."""
        if self.options.choices is not None:
            return self.options.choices
        return self.descriptor.choices


def grid_shape(count: int, rows: Optional[int] = None, cols: Optional[int] = None) -> Optional[Tuple[int, int]]:
    """
    (rows, columns) of a check-box grid holding ``count`` items.

    Fixing ``rows`` derives the column count and vice versa; with neither
    the items form a single vertical list (None).
    """
    if count <= 0:
        return None
    if rows:
        return rows, 1 + (count - 1) // rows
    if cols:
        return 1 + (count - 1) // cols, cols
    return None


class WidgetResolver:
    """
    Enum-driven widget resolution.

    Example:
        resolver = WidgetResolver()
        widget = resolver.resolve(FieldDescriptor("title"), RenderOptions())
        assert widget.kind is WidgetKind.TEXT_INPUT
    """

    def __init__(self, config: Optional[FormBoxConfig] = None):
        self.config = config
        self._handlers: Dict[WidgetKind, Callable[[ResolutionContext], ResolvedWidget]] = {
            WidgetKind.TEXT_INPUT: self._text_input,
            WidgetKind.TEXT_AREA: self._text_area,
            WidgetKind.SELECT: self._select,
            WidgetKind.RADIO_GROUP: self._radio_group,
            WidgetKind.CHECK_BOX: self._check_box,
            WidgetKind.DATE_TIME_PICKER: self._date_time_picker,
            WidgetKind.ASSOCIATION_SELECT: self._association_select,
            WidgetKind.ASSOCIATION_MULTI_SELECT: self._association_multi_select,
            WidgetKind.CONSTANT_DISPLAY: self._constant_display,
            WidgetKind.UNSUPPORTED_BINARY: self._unsupported,
        }

    def resolve(self, descriptor: FieldDescriptor,
                options: Optional[RenderOptions] = None,
                read_only: bool = False,
                value: Any = None,
                candidates: Optional[Sequence[Any]] = None) -> ResolvedWidget:
        """
        Resolve the widget for one field.

        Args:
            descriptor: Field metadata
            options: Render options (defaults to none set)
            read_only: Form-level read-only flag; ``options.read_only`` also applies
            value: Current value of the field on the record
            candidates: All instances of an association's target, used when
                no explicit choices are given

        Returns:
            ResolvedWidget

        Raises:
            UnsupportedFieldType: Binary fields (editable or not)
            InvalidChoiceSet: Boolean radio with other than two choices
        """
        ctx = ResolutionContext(
            descriptor=descriptor,
            options=options or RenderOptions(),
            read_only=bool(read_only or (options is not None and options.read_only)),
            value=value,
            candidates=candidates,
            config=self.config or get_form_config(),
        )
        kind = self.determine_kind(ctx)
        logger.debug(f"Field '{ctx.name}' ({ctx.type_tag.value}) -> {kind.value}")
        return self._handlers[kind](ctx)

    def determine_kind(self, ctx: ResolutionContext) -> WidgetKind:
        """Pick the widget kind for ``ctx`` (first matching rule wins)."""
        type_tag = ctx.type_tag
        if type_tag is TypeTag.BINARY:
            return WidgetKind.UNSUPPORTED_BINARY
        if ctx.read_only:
            return WidgetKind.CONSTANT_DISPLAY

        options = ctx.options
        has_choices = ctx.choices is not None
        if type_tag is TypeTag.TEXT or (type_tag is TypeTag.STRING and options.rows):
            return WidgetKind.TEXT_AREA
        if type_tag in CHOICE_TYPES and has_choices and options.radio:
            return WidgetKind.RADIO_GROUP
        if type_tag in CHOICE_TYPES and has_choices:
            return WidgetKind.SELECT
        if type_tag is TypeTag.STRING or type_tag in NUMERIC_TYPES:
            return WidgetKind.TEXT_INPUT
        if type_tag is TypeTag.BOOLEAN:
            return WidgetKind.RADIO_GROUP if options.radio else WidgetKind.CHECK_BOX
        if type_tag in TEMPORAL_TYPES:
            return WidgetKind.DATE_TIME_PICKER
        if type_tag is TypeTag.BELONGS_TO:
            return WidgetKind.ASSOCIATION_SELECT
        if type_tag is TypeTag.HAS_MANY:
            return WidgetKind.ASSOCIATION_MULTI_SELECT
        raise UnsupportedFieldType(ctx.name, type_tag)

    # ==================== HANDLERS ====================

    def _widget(self, ctx: ResolutionContext, kind: WidgetKind, **fields) -> ResolvedWidget:
        fields.setdefault("value", ctx.value)
        fields.setdefault("placeholder", ctx.options.placeholder)
        return ResolvedWidget(
            kind=kind,
            field_name=ctx.name,
            type_tag=ctx.type_tag,
            key=ctx.descriptor.key_column,
            **fields,
        )

    def _text_input(self, ctx: ResolutionContext) -> ResolvedWidget:
        if ctx.type_tag in NUMERIC_TYPES:
            width = ctx.options.size or ctx.config.numeric_field_size
        else:
            width = ctx.options.input_width
        return self._widget(ctx, WidgetKind.TEXT_INPUT, width=width)

    def _text_area(self, ctx: ResolutionContext) -> ResolvedWidget:
        return self._widget(ctx, WidgetKind.TEXT_AREA, rows=ctx.options.rows, cols=ctx.options.cols)

    def _selected(self, ctx: ResolutionContext) -> Any:
        if ctx.options.selected is not None:
            return ctx.options.selected
        return identity_key(ctx.value, ctx.config)

    def _include_blank(self, ctx: ResolutionContext) -> bool:
        if ctx.options.include_blank is not None:
            return ctx.options.include_blank
        return not ctx.options.required and ctx.descriptor.nullable

    def _select(self, ctx: ResolutionContext) -> ResolvedWidget:
        return self._widget(
            ctx, WidgetKind.SELECT,
            choices=tuple(as_choices(ctx.choices, ctx.options.show, ctx.config)),
            selected=self._selected(ctx),
            include_blank=self._include_blank(ctx),
        )

    def _radio_group(self, ctx: ResolutionContext) -> ResolvedWidget:
        if ctx.type_tag is TypeTag.BOOLEAN:
            return self._boolean_radio_group(ctx)
        return self._widget(
            ctx, WidgetKind.RADIO_GROUP,
            choices=tuple(as_choices(ctx.choices, ctx.options.show, ctx.config)),
            selected=self._selected(ctx),
        )

    def _boolean_radio_group(self, ctx: ResolutionContext) -> ResolvedWidget:
        if ctx.options.choices is not None:
            choices = as_choices(ctx.options.choices, None, ctx.config)
        else:
            choices = [tuple(choice) for choice in ctx.config.boolean_choices]
        if len(choices) != 2:
            raise InvalidChoiceSet(ctx.name, ctx.options.choices, expected=2)
        # first choice is the "false" answer, second the "true" one
        selected = choices[1][1] if ctx.value else choices[0][1]
        return self._widget(ctx, WidgetKind.RADIO_GROUP, choices=tuple(choices), selected=selected)

    def _check_box(self, ctx: ResolutionContext) -> ResolvedWidget:
        return self._widget(ctx, WidgetKind.CHECK_BOX)

    def _date_time_picker(self, ctx: ResolutionContext) -> ResolvedWidget:
        width = ctx.options.size or ctx.config.calendar_field_size
        return self._widget(ctx, WidgetKind.DATE_TIME_PICKER, width=width)

    def _association_choices(self, ctx: ResolutionContext):
        source = ctx.options.choices if ctx.options.choices is not None else (ctx.candidates or ())
        return tuple(as_choices(source, ctx.options.show, ctx.config))

    def _association_select(self, ctx: ResolutionContext) -> ResolvedWidget:
        return self._widget(
            ctx, WidgetKind.ASSOCIATION_SELECT,
            choices=self._association_choices(ctx),
            selected=self._selected(ctx),
            include_blank=self._include_blank(ctx),
        )

    def _association_multi_select(self, ctx: ResolutionContext) -> ResolvedWidget:
        choices = self._association_choices(ctx)
        checked = tuple(value for _, value in as_choices(ctx.value or (), ctx.options.show, ctx.config))
        return self._widget(
            ctx, WidgetKind.ASSOCIATION_MULTI_SELECT,
            choices=choices,
            checked=checked,
            grid=grid_shape(len(choices), ctx.options.rows, ctx.options.cols),
        )

    def _constant_display(self, ctx: ResolutionContext) -> ResolvedWidget:
        display = format_constant(
            ctx.name, ctx.type_tag, ctx.value, ctx.options, ctx.choices, ctx.config
        )
        return self._widget(ctx, WidgetKind.CONSTANT_DISPLAY, display=display, icon=ctx.options.icon)

    def _unsupported(self, ctx: ResolutionContext) -> ResolvedWidget:
        raise UnsupportedFieldType(ctx.name, ctx.type_tag)


_default_resolver = WidgetResolver()


def resolve(descriptor: FieldDescriptor,
            options: Optional[RenderOptions] = None,
            read_only: bool = False,
            value: Any = None,
            candidates: Optional[Sequence[Any]] = None) -> ResolvedWidget:
    """Resolve a field widget with the global form configuration."""
    return _default_resolver.resolve(descriptor, options, read_only, value, candidates)
