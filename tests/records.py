"""Plain record classes shared by the tests."""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from formbox.schema import RelationKind, StaticSchemaProvider, TypeTag


@dataclass
class Category:
    id: int
    name: str

    @classmethod
    def all(cls):
        return list(CATEGORIES)


@dataclass
class Tag:
    id: int
    label: str

    def __str__(self):
        return self.label


@dataclass
class Product:
    title: Optional[str] = None
    bio: Optional[str] = None
    price: Any = None
    stock: Optional[int] = None
    active: Optional[bool] = None
    published_on: Optional[date] = None
    updated_at: Optional[datetime] = None
    thumbnail: Optional[bytes] = None
    category: Optional[Category] = None
    tags: List[Tag] = field(default_factory=list)
    owner: Any = None
    errors: Dict[str, List[str]] = field(default_factory=dict)


class Article:
    """Record whose field types come from ``meta_field``."""

    def __init__(self, body=None, rating=None):
        self.body = body
        self.rating = rating

    @classmethod
    def meta_field(cls, name):
        return {"body": "text", "rating": TypeTag.INTEGER}.get(name, "string")


CATEGORIES = [Category(1, "Books"), Category(2, "Music"), Category(3, "Games")]
TAGS = [Tag(10, "new"), Tag(11, "sale"), Tag(12, "gift"), Tag(13, "eco"), Tag(14, "local")]


def product_provider() -> StaticSchemaProvider:
    provider = StaticSchemaProvider(
        candidate_loader=lambda target: list(TAGS) if target is Tag else target.all()
    )
    return provider.declare(
        Product,
        columns={
            "title": TypeTag.STRING,
            "bio": TypeTag.TEXT,
            "price": TypeTag.DECIMAL,
            "stock": TypeTag.INTEGER,
            "active": TypeTag.BOOLEAN,
            "published_on": TypeTag.DATE,
            "updated_at": TypeTag.DATETIME,
            "thumbnail": TypeTag.BINARY,
        },
        relations={
            "category": (RelationKind.BELONGS_TO, Category),
            "tags": (RelationKind.HAS_MANY, Tag),
            "owner": RelationKind.HAS_ONE,
        },
    )
