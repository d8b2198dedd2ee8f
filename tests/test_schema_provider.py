"""Tests for field-type inference and the static schema provider."""

import pytest

from formbox.exceptions import UnsupportedFieldType, UnsupportedRelationKind
from formbox.protocols.schema_provider import get_schema_provider, register_schema_provider
from formbox.schema import (
    ColumnInfo, FieldDescriptor, RelationInfo, RelationKind, StaticSchemaProvider, TypeTag
)

from records import CATEGORIES, Article, Category, Product, Tag, product_provider


@pytest.fixture
def provider():
    return product_provider()


def test_column_type(provider):
    descriptor = provider.describe(Product, "bio")
    assert descriptor == FieldDescriptor(name="bio", declared_type=TypeTag.TEXT)
    assert descriptor.key_column == "bio"


def test_unknown_field_defaults_to_string(provider):
    descriptor = provider.describe(Product, "nickname")
    assert descriptor.declared_type is TypeTag.STRING
    assert not descriptor.is_relation


def test_no_record_class_defaults_to_string(provider):
    assert provider.describe(None, "anything").declared_type is TypeTag.STRING


def test_belongs_to_relation(provider):
    descriptor = provider.describe(Product, "category")
    assert descriptor.declared_type is TypeTag.BELONGS_TO
    assert descriptor.is_relation
    assert descriptor.relation_kind is RelationKind.BELONGS_TO
    assert descriptor.target is Category
    assert descriptor.key_column == "category_id"


def test_has_many_relation(provider):
    descriptor = provider.describe(Product, "tags")
    assert descriptor.declared_type is TypeTag.HAS_MANY
    assert descriptor.target is Tag
    assert descriptor.key_column == "tags"


def test_other_relation_kinds_are_rejected(provider):
    with pytest.raises(UnsupportedRelationKind) as exc_info:
        provider.describe(Product, "owner")
    assert exc_info.value.field_name == "owner"
    assert exc_info.value.relation_kind is RelationKind.HAS_ONE


def test_override_wins_over_columns():
    provider = StaticSchemaProvider().declare(Article, columns={"body": "string", "rating": "float"})
    assert provider.describe(Article, "body").declared_type is TypeTag.TEXT
    assert provider.describe(Article, "rating").declared_type is TypeTag.INTEGER
    assert provider.describe(Article, "missing").declared_type is TypeTag.STRING


def test_override_keeps_column_choices():
    class Shirt:
        @classmethod
        def meta_field(cls, name):
            return "string"

    choices = (("Small", "s"), ("Large", "l"))
    provider = StaticSchemaProvider().declare(Shirt, columns={"size": ColumnInfo("size", TypeTag.INTEGER, choices=choices)})
    descriptor = provider.describe(Shirt, "size")
    assert descriptor.declared_type is TypeTag.STRING
    assert descriptor.choices == choices


def test_override_to_relation_uses_declared_target():
    class Review:
        @classmethod
        def meta_field(cls, name):
            return TypeTag.BELONGS_TO

    provider = StaticSchemaProvider().declare(
        Review, relations={"author": RelationInfo("author", RelationKind.HAS_ONE, Category, "writer_id")}
    )
    descriptor = provider.describe(Review, "author")
    assert descriptor.relation_kind is RelationKind.BELONGS_TO
    assert descriptor.target is Category
    assert descriptor.key_column == "writer_id"

    plain = provider.describe(Review, "editor")
    assert plain.is_relation
    assert plain.key_column == "editor_id"


def test_invalid_override_type_raises():
    class Broken:
        @classmethod
        def meta_field(cls, name):
            return "blob"

    with pytest.raises(UnsupportedFieldType) as exc_info:
        StaticSchemaProvider().describe(Broken, "data")
    assert exc_info.value.field_name == "data"
    assert exc_info.value.type_tag == "blob"


def test_override_without_entry_is_string():
    class Partial:
        @classmethod
        def meta_field(cls, name):
            return {"notes": "text"}.get(name)

    provider = StaticSchemaProvider().declare(Partial, columns={"size": "integer"})
    assert provider.describe(Partial, "notes").declared_type is TypeTag.TEXT
    assert provider.describe(Partial, "nickname").declared_type is TypeTag.STRING
    assert provider.describe(Partial, "size").declared_type is TypeTag.STRING


def test_declarations_are_inherited(provider):
    class SpecialProduct(Product):
        pass

    assert provider.describe(SpecialProduct, "price").declared_type is TypeTag.DECIMAL


def test_relation_specs():
    provider = StaticSchemaProvider().declare(
        Product,
        relations={
            "category": ("belongs_to", Category, "cat_id"),
            "tags": "has_many",
        },
    )
    relations = provider.relations(Product)
    assert relations["category"] == RelationInfo("category", RelationKind.BELONGS_TO, Category, "cat_id")
    assert relations["tags"] == RelationInfo("tags", RelationKind.HAS_MANY)


def test_candidates_from_loader_or_all():
    loader_provider = StaticSchemaProvider(candidate_loader=lambda target: ["x"])
    assert loader_provider.candidates(Category) == ["x"]
    assert StaticSchemaProvider().candidates(Category) == CATEGORIES
    assert StaticSchemaProvider().candidates(Tag) == []
    assert StaticSchemaProvider().candidates(None) == []


def test_type_tag_coerce():
    assert TypeTag.coerce("DateTime") is TypeTag.DATETIME
    assert TypeTag.coerce(TypeTag.BINARY) is TypeTag.BINARY
    with pytest.raises(ValueError):
        TypeTag.coerce("blob")


def test_provider_registry(provider):
    assert isinstance(get_schema_provider(), StaticSchemaProvider)
    register_schema_provider(provider)
    assert get_schema_provider() is provider
