"""Tests for choice normalization."""

import enum

import pytest

from formbox.forms.choices import as_choices, display_name, identity_key, option_text
from formbox.protocols.form_config import FormBoxConfig

from records import CATEGORIES, TAGS


class Size(enum.Enum):
    SMALL = "s"
    LARGE = "l"


class Person:
    def __init__(self, id, first, last):
        self.id = id
        self.first = first
        self.last = last

    def full_name(self):
        return f"{self.first} {self.last}"


def test_empty_input():
    assert as_choices(None) == []
    assert as_choices([]) == []
    assert as_choices(iter(())) == []


def test_pairs_pass_through():
    pairs = [("Red", 1), ["Blue", 2]]
    assert as_choices(pairs) == [("Red", 1), ("Blue", 2)]


@pytest.mark.parametrize("items", [
    [("Red", 1), ("Blue", 2)],
    CATEGORIES,
    ["s", "m", "l"],
    [1, 2, 3],
    list(Size),
    TAGS,
])
def test_normalization_is_idempotent(items):
    once = as_choices(items)
    assert as_choices(once) == once


def test_domain_objects_use_name_and_id():
    assert as_choices(CATEGORIES) == [("Books", 1), ("Music", 2), ("Games", 3)]


def test_domain_objects_without_shower_use_str():
    assert as_choices(TAGS[:2]) == [("new", 10), ("sale", 11)]


def test_explicit_shower_may_be_a_method():
    people = [Person(7, "Ada", "Lovelace")]
    assert as_choices(people, show="full_name") == [("Ada Lovelace", 7)]
    assert display_name(people[0], "first") == "Ada"


def test_configured_showers_and_identity():
    config = FormBoxConfig(possible_showers=("label", "name"), identity_attribute="label")
    assert as_choices(TAGS[:1], config=config) == [("new", "new")]


def test_scalars_and_enums():
    assert as_choices([1, 2]) == [("1", 1), ("2", 2)]
    assert as_choices(list(Size)) == [("SMALL", Size.SMALL), ("LARGE", Size.LARGE)]


def test_mixed_pairs_and_objects():
    assert as_choices([("None", 0), CATEGORIES[0]]) == [("None", 0), ("Books", 1)]


def test_identity_key():
    assert identity_key(CATEGORIES[0]) == 1
    assert identity_key("x") == "x"
    assert identity_key(Size.SMALL) is Size.SMALL
    assert identity_key(None) is None


def test_display_name_of_none_is_empty():
    assert display_name(None) == ""


def test_option_text():
    choices = [("Small", "s"), ("Large", "l")]
    assert option_text(choices, "l") == "Large"
    assert option_text(choices, "x") is None
