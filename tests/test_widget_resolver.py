"""Tests for field-widget resolution."""

from datetime import date, datetime

import pytest

from formbox.exceptions import FieldError, InvalidChoiceSet, UnsupportedFieldType
from formbox.forms.render_options import RenderOptions
from formbox.forms.widget_kinds import WidgetKind
from formbox.forms.widget_resolver import WidgetResolver, grid_shape, resolve
from formbox.protocols.form_config import FormBoxConfig
from formbox.schema import FieldDescriptor, RelationKind, TypeTag

from records import CATEGORIES, TAGS, Category


def describe(name, type_tag, **kwargs):
    return FieldDescriptor(name=name, declared_type=type_tag, **kwargs)


def belongs_to(name="category"):
    return FieldDescriptor(
        name=name, declared_type=TypeTag.BELONGS_TO,
        is_relation=True, relation_kind=RelationKind.BELONGS_TO, target=Category,
    )


def has_many(name="tags"):
    return FieldDescriptor(
        name=name, declared_type=TypeTag.HAS_MANY,
        is_relation=True, relation_kind=RelationKind.HAS_MANY,
    )


@pytest.mark.parametrize("type_tag, options, expected", [
    (TypeTag.STRING, {}, WidgetKind.TEXT_INPUT),
    (TypeTag.STRING, {"rows": 4}, WidgetKind.TEXT_AREA),
    (TypeTag.STRING, {"choices": [("S", "s"), ("M", "m")]}, WidgetKind.SELECT),
    (TypeTag.STRING, {"choices": [("S", "s")], "radio": True}, WidgetKind.RADIO_GROUP),
    (TypeTag.TEXT, {}, WidgetKind.TEXT_AREA),
    (TypeTag.INTEGER, {}, WidgetKind.TEXT_INPUT),
    (TypeTag.INTEGER, {"choices": [("One", 1)]}, WidgetKind.SELECT),
    (TypeTag.INTEGER, {"choices": [("One", 1)], "visual": "radio"}, WidgetKind.RADIO_GROUP),
    (TypeTag.FLOAT, {}, WidgetKind.TEXT_INPUT),
    (TypeTag.FLOAT, {"choices": [("Half", 0.5)]}, WidgetKind.TEXT_INPUT),
    (TypeTag.DECIMAL, {}, WidgetKind.TEXT_INPUT),
    (TypeTag.BOOLEAN, {}, WidgetKind.CHECK_BOX),
    (TypeTag.BOOLEAN, {"radio": True}, WidgetKind.RADIO_GROUP),
    (TypeTag.DATE, {}, WidgetKind.DATE_TIME_PICKER),
    (TypeTag.DATETIME, {}, WidgetKind.DATE_TIME_PICKER),
    (TypeTag.TIME, {}, WidgetKind.DATE_TIME_PICKER),
    (TypeTag.TIMESTAMP, {}, WidgetKind.DATE_TIME_PICKER),
])
def test_editable_widget_table(type_tag, options, expected):
    """Each declared type and option combination picks one widget kind."""
    resolved = resolve(describe("field", type_tag), RenderOptions.from_kwargs(options))
    assert resolved.kind is expected
    assert resolved.field_name == "field"
    assert resolved.type_tag is type_tag


def test_title_string_is_text_input():
    resolved = resolve(describe("title", TypeTag.STRING), value="Dune")
    assert resolved.kind is WidgetKind.TEXT_INPUT
    assert resolved.value == "Dune"
    assert resolved.key == "title"


def test_bio_text_is_text_area_with_size():
    resolved = resolve(describe("bio", TypeTag.TEXT), RenderOptions(rows=5, cols=40))
    assert resolved.kind is WidgetKind.TEXT_AREA
    assert (resolved.rows, resolved.cols) == (5, 40)


def test_numeric_inputs_are_narrow():
    """Numeric text inputs default to the configured numeric width."""
    assert resolve(describe("stock", TypeTag.INTEGER)).width == 10
    assert resolve(describe("stock", TypeTag.INTEGER), RenderOptions(size=4)).width == 4
    assert resolve(describe("title", TypeTag.STRING)).width is None
    assert resolve(describe("title", TypeTag.STRING), RenderOptions(cols=30)).width == 30
    assert resolve(describe("title", TypeTag.STRING), RenderOptions(cols=30, size=12)).width == 12


def test_column_choices_are_used_when_no_option_given():
    descriptor = describe("size", TypeTag.STRING, choices=(("Small", "s"), ("Large", "l")))
    resolved = resolve(descriptor, value="l")
    assert resolved.kind is WidgetKind.SELECT
    assert resolved.choices == (("Small", "s"), ("Large", "l"))
    assert resolved.selected == "l"


def test_select_blank_entry_follows_required():
    options = {"choices": ["a", "b"]}
    optional = resolve(describe("grade", TypeTag.STRING), RenderOptions.from_kwargs(options))
    required = resolve(describe("grade", TypeTag.STRING), RenderOptions.from_kwargs(options, required=True))
    forced = resolve(describe("grade", TypeTag.STRING), RenderOptions.from_kwargs(options, include_blank=False))
    assert optional.include_blank is True
    assert required.include_blank is False
    assert forced.include_blank is False
    assert optional.choices == (("a", "a"), ("b", "b"))


def test_not_null_select_has_no_blank_entry():
    descriptor = describe("status", TypeTag.STRING, choices=(("Draft", "d"), ("Live", "l")), nullable=False)
    assert resolve(descriptor).include_blank is False
    assert resolve(descriptor, RenderOptions(include_blank=True)).include_blank is True
    assert resolve(describe("status", TypeTag.STRING, choices=(("Draft", "d"),))).include_blank is True


def test_integer_radio_with_text_choices_keeps_raw_value():
    options = RenderOptions.from_kwargs(choices=[("One", "1"), ("Two", "2")], radio=True)
    resolved = resolve(describe("count", TypeTag.INTEGER), options, value=2)
    assert resolved.kind is WidgetKind.RADIO_GROUP
    assert resolved.choices == (("One", "1"), ("Two", "2"))
    assert resolved.selected == 2


def test_placeholder_is_carried():
    resolved = resolve(describe("title", TypeTag.STRING), RenderOptions(placeholder="e.g. Dune"))
    assert resolved.placeholder == "e.g. Dune"
    assert resolve(describe("title", TypeTag.STRING)).placeholder is None


def test_selected_option_wins_over_value():
    options = RenderOptions.from_kwargs(choices=[("One", 1), ("Two", 2)], selected=2)
    assert resolve(describe("count", TypeTag.INTEGER), options, value=1).selected == 2


def test_boolean_radio_uses_default_choices():
    resolved = resolve(describe("active", TypeTag.BOOLEAN), RenderOptions(radio=True), value=True)
    assert resolved.choices == (("No", "0"), ("Yes", "1"))
    assert resolved.selected == "1"

    resolved = resolve(describe("active", TypeTag.BOOLEAN), RenderOptions(radio=True), value=False)
    assert resolved.selected == "0"


def test_boolean_radio_with_custom_pair():
    options = RenderOptions.from_kwargs(radio=True, choices=[("Off", False), ("On", True)])
    resolved = resolve(describe("active", TypeTag.BOOLEAN), options, value=None)
    assert resolved.choices == (("Off", False), ("On", True))
    assert resolved.selected is False


@pytest.mark.parametrize("choices", [
    [("No", 0), ("Maybe", 2), ("Yes", 1)],
    [("Yes", 1)],
])
def test_boolean_radio_needs_two_choices(choices):
    options = RenderOptions.from_kwargs(radio=True, choices=choices)
    with pytest.raises(InvalidChoiceSet) as exc_info:
        resolve(describe("active", TypeTag.BOOLEAN), options)
    assert exc_info.value.field_name == "active"
    assert exc_info.value.expected == 2
    assert "active" in str(exc_info.value)


@pytest.mark.parametrize("read_only", [False, True])
def test_binary_always_fails(read_only):
    with pytest.raises(UnsupportedFieldType) as exc_info:
        resolve(describe("thumbnail", TypeTag.BINARY), read_only=read_only, value=b"\x89PNG")
    assert exc_info.value.field_name == "thumbnail"
    assert isinstance(exc_info.value, FieldError)


@pytest.mark.parametrize("type_tag", [tag for tag in TypeTag if tag is not TypeTag.BINARY])
def test_read_only_is_constant_for_every_type(type_tag):
    """Read-only resolution never produces an editable control."""
    descriptor = describe("field", type_tag)
    assert resolve(descriptor, read_only=True).kind is WidgetKind.CONSTANT_DISPLAY
    assert resolve(descriptor, RenderOptions(read_only=True)).kind is WidgetKind.CONSTANT_DISPLAY


def test_read_only_boolean_shows_yes_no():
    active = describe("active", TypeTag.BOOLEAN)
    assert resolve(active, read_only=True, value=True).display == "Yes"
    assert resolve(active, read_only=True, value=False).display == "No"
    assert resolve(active, read_only=True, value=None).display == "No"


def test_read_only_icon_flag():
    resolved = resolve(describe("active", TypeTag.BOOLEAN), RenderOptions(icon=True), read_only=True, value=True)
    assert resolved.icon is True
    assert resolved.is_constant


def test_read_only_choice_shows_label():
    options = RenderOptions.from_kwargs(choices=[("Small", "s"), ("Large", "l")])
    resolved = resolve(describe("size", TypeTag.STRING), options, read_only=True, value="l")
    assert resolved.display == "Large"


def test_belongs_to_uses_candidates():
    category = CATEGORIES[1]
    resolved = resolve(belongs_to(), value=category, candidates=CATEGORIES)
    assert resolved.kind is WidgetKind.ASSOCIATION_SELECT
    assert resolved.key == "category_id"
    assert resolved.choices == (("Books", 1), ("Music", 2), ("Games", 3))
    assert resolved.selected == 2
    assert resolved.include_blank is True


def test_belongs_to_explicit_choices_win():
    options = RenderOptions.from_kwargs(choices=CATEGORIES[:1], required=True)
    resolved = resolve(belongs_to(), options, candidates=CATEGORIES)
    assert resolved.choices == (("Books", 1),)
    assert resolved.include_blank is False


def test_belongs_to_read_only_shows_name():
    resolved = resolve(belongs_to(), read_only=True, value=CATEGORIES[2])
    assert resolved.display == "Games"


def test_has_many_checks_current_members():
    resolved = resolve(has_many(), value=[TAGS[0], TAGS[3]], candidates=TAGS)
    assert resolved.kind is WidgetKind.ASSOCIATION_MULTI_SELECT
    assert resolved.key == "tags"
    assert [label for label, _ in resolved.choices] == ["new", "sale", "gift", "eco", "local"]
    assert resolved.checked == (10, 13)
    assert resolved.grid is None


def test_has_many_grid_from_rows_or_cols():
    by_rows = resolve(has_many(), RenderOptions(rows=2), candidates=TAGS)
    by_cols = resolve(has_many(), RenderOptions(cols=2), candidates=TAGS)
    assert by_rows.grid == (2, 3)
    assert by_cols.grid == (3, 2)


def test_has_many_read_only_lists_labels():
    resolved = resolve(has_many(), read_only=True, value=TAGS[:2])
    assert resolved.display == "new,sale"


@pytest.mark.parametrize("count, rows, cols, expected", [
    (5, 2, None, (2, 3)),
    (5, None, 2, (3, 2)),
    (4, 2, None, (2, 2)),
    (1, None, 3, (1, 3)),
    (5, None, None, None),
    (0, 2, None, None),
])
def test_grid_shape(count, rows, cols, expected):
    assert grid_shape(count, rows, cols) == expected


def test_resolver_uses_its_config():
    resolver = WidgetResolver(FormBoxConfig(yes_label="Oui", no_label="Non", numeric_field_size=6))
    active = describe("active", TypeTag.BOOLEAN)
    assert resolver.resolve(active, read_only=True, value=True).display == "Oui"
    assert resolver.resolve(describe("stock", TypeTag.INTEGER)).width == 6


def test_temporal_picker_width():
    resolved = resolve(describe("published_on", TypeTag.DATE), value=date(2024, 3, 1))
    assert resolved.width == 10
    assert resolved.value == date(2024, 3, 1)

    read_only = resolve(describe("updated_at", TypeTag.DATETIME), read_only=True,
                        value=datetime(2024, 3, 1, 9, 30))
    assert read_only.display == "2024-03-01 09:30"
