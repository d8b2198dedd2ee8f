"""Tests for the SQLAlchemy schema provider."""

import enum
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

import pytest
from sqlalchemy import (
    Boolean, Column, Date, DateTime, Enum, Float, ForeignKey, Integer, LargeBinary,
    Numeric, String, Table, Text, TIMESTAMP, Time, create_engine
)
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column, relationship

from formbox.exceptions import FieldMetadataUnavailable, ProviderError, UnsupportedRelationKind
from formbox.forms.widget_kinds import WidgetKind
from formbox.forms.widget_resolver import resolve
from formbox.schema import RelationKind, TypeTag
from formbox.schema.sqlalchemy_provider import SqlAlchemySchemaProvider, enum_choices, type_tag_for


class Base(DeclarativeBase):
    pass


class Status(enum.Enum):
    DRAFT = "draft"
    LIVE = "live"


book_tags = Table(
    "book_tags",
    Base.metadata,
    Column("book_id", ForeignKey("books.id"), primary_key=True),
    Column("tag_id", ForeignKey("tags.id"), primary_key=True),
)


class Author(Base):
    __tablename__ = "authors"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(80))
    books: Mapped[List["Book"]] = relationship(back_populates="writer")
    profile: Mapped[Optional["Profile"]] = relationship(back_populates="author")


class Profile(Base):
    __tablename__ = "profiles"

    id: Mapped[int] = mapped_column(primary_key=True)
    author_id: Mapped[int] = mapped_column(ForeignKey("authors.id"))
    author: Mapped[Author] = relationship(back_populates="profile")


class Tag(Base):
    __tablename__ = "tags"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(40))


class Book(Base):
    __tablename__ = "books"

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String(200))
    summary: Mapped[Optional[str]] = mapped_column(Text)
    pages: Mapped[Optional[int]] = mapped_column(Integer)
    rating: Mapped[Optional[float]] = mapped_column(Float)
    price: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2))
    in_print: Mapped[bool] = mapped_column(Boolean, default=True)
    published_on: Mapped[Optional[date]] = mapped_column(Date)
    updated_at: Mapped[Optional[datetime]] = mapped_column(DateTime)
    indexed_at = mapped_column(TIMESTAMP)
    opens_at = mapped_column(Time)
    cover: Mapped[Optional[bytes]] = mapped_column(LargeBinary)
    status: Mapped[Status] = mapped_column(Enum(Status), default=Status.DRAFT)
    writer_id: Mapped[Optional[int]] = mapped_column(ForeignKey("authors.id"))
    writer: Mapped[Optional[Author]] = relationship(back_populates="books")
    tags: Mapped[List[Tag]] = relationship(secondary=book_tags)


@pytest.fixture
def session():
    engine = create_engine("sqlite://")
    Base.metadata.create_all(engine)
    with Session(engine) as session:
        session.add_all([Author(id=1, name="Le Guin"), Author(id=2, name="Herbert")])
        session.add_all([Tag(id=1, name="classic"), Tag(id=2, name="space")])
        session.commit()
        yield session


@pytest.mark.parametrize("name, expected", [
    ("title", TypeTag.STRING),
    ("summary", TypeTag.TEXT),
    ("pages", TypeTag.INTEGER),
    ("rating", TypeTag.FLOAT),
    ("price", TypeTag.DECIMAL),
    ("in_print", TypeTag.BOOLEAN),
    ("published_on", TypeTag.DATE),
    ("updated_at", TypeTag.DATETIME),
    ("indexed_at", TypeTag.TIMESTAMP),
    ("opens_at", TypeTag.TIME),
    ("cover", TypeTag.BINARY),
    ("status", TypeTag.STRING),
    ("writer_id", TypeTag.INTEGER),
])
def test_column_types(name, expected):
    provider = SqlAlchemySchemaProvider()
    assert provider.describe(Book, name).declared_type is expected


def test_type_tag_for_unknown_type_is_string():
    from sqlalchemy import JSON
    assert type_tag_for(JSON()) is TypeTag.STRING


def test_enum_column_choices():
    descriptor = SqlAlchemySchemaProvider().describe(Book, "status")
    assert descriptor.choices == (("DRAFT", Status.DRAFT), ("LIVE", Status.LIVE))
    assert enum_choices(Enum("a", "b")) == (("a", "a"), ("b", "b"))
    assert enum_choices(String()) is None


def test_enum_column_resolves_to_select():
    descriptor = SqlAlchemySchemaProvider().describe(Book, "status")
    resolved = resolve(descriptor, value=Status.LIVE)
    assert resolved.kind is WidgetKind.SELECT
    assert resolved.selected is Status.LIVE


def test_many_to_one_is_belongs_to():
    descriptor = SqlAlchemySchemaProvider().describe(Book, "writer")
    assert descriptor.relation_kind is RelationKind.BELONGS_TO
    assert descriptor.target is Author
    assert descriptor.key_column == "writer_id"


def test_collections_are_has_many():
    provider = SqlAlchemySchemaProvider()
    assert provider.describe(Book, "tags").relation_kind is RelationKind.HAS_MANY
    assert provider.describe(Author, "books").relation_kind is RelationKind.HAS_MANY


def test_scalar_one_to_one_is_rejected():
    with pytest.raises(UnsupportedRelationKind):
        SqlAlchemySchemaProvider().describe(Author, "profile")


def test_candidates_need_a_session(session):
    assert [author.name for author in SqlAlchemySchemaProvider(session).candidates(Author)] == [
        "Le Guin", "Herbert"
    ]
    with pytest.raises(ProviderError):
        SqlAlchemySchemaProvider().candidates(Author)


def test_unmapped_class_raises():
    class Plain:
        pass

    with pytest.raises(ProviderError):
        SqlAlchemySchemaProvider().columns(Plain)


def test_not_null_enum_select_has_no_blank_entry(qapp):
    from formbox.forms import FormBoxBuilder

    descriptor = SqlAlchemySchemaProvider().describe(Book, "status")
    assert descriptor.nullable is False
    assert SqlAlchemySchemaProvider().describe(Book, "summary").nullable is True

    form = FormBoxBuilder("book", Book(status=Status.LIVE), provider=SqlAlchemySchemaProvider())
    form.field("status")
    combo = form.widgets["status"]
    assert [combo.itemText(i) for i in range(combo.count())] == ["DRAFT", "LIVE"]
    assert combo.get_value() == Status.LIVE


def test_provider_failures_are_reported_per_field(qapp):
    from formbox.forms import FormBoxBuilder

    form = FormBoxBuilder("book", Book(title="Dune"), provider=SqlAlchemySchemaProvider())
    form.field("writer")
    form.field("title")

    error = form.field_errors["writer"]
    assert isinstance(error, FieldMetadataUnavailable)
    assert isinstance(error.cause, ProviderError)
    assert error.field_name == "writer"
    assert form.values() == {"title": "Dune"}


def test_unmapped_record_is_reported_per_field(qapp):
    from formbox.forms import FormBoxBuilder

    class Plain:
        title = "Dune"

    form = FormBoxBuilder("plain", Plain(), provider=SqlAlchemySchemaProvider())
    form.field("title")
    assert isinstance(form.field_errors["title"], FieldMetadataUnavailable)
    assert form.values() == {}
