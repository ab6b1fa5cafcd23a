"""Data models for catalog documents and per-request query predicates."""

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, FrozenSet, Optional, Union

from bson import ObjectId

__all__ = [
    "Product",
    "Subcategory",
    "QueryPredicate",
    "is_valid_object_id",
    "to_object_id",
    "to_json_value",
]

# MongoDB ObjectIds travel over HTTP as 24 hex characters
OBJECT_ID_RE = re.compile(r"^[0-9a-fA-F]{24}$")


def is_valid_object_id(value: Any) -> bool:
    """Return True if value is an ObjectId or its 24-char hex form."""
    if isinstance(value, ObjectId):
        return True
    return isinstance(value, str) and bool(OBJECT_ID_RE.match(value))


def to_object_id(value: Union[str, ObjectId]) -> ObjectId:
    """Convert a validated identifier to an ObjectId.

    Raises:
        ValueError: If value is not a well-formed identifier.
    """
    if isinstance(value, ObjectId):
        return value
    if not is_valid_object_id(value):
        raise ValueError(f"Malformed identifier: {value!r}")
    return ObjectId(value)


def to_json_value(value: Any) -> Any:
    """Project a raw store value into something jsonify can emit."""
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: to_json_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json_value(v) for v in value]
    return value


def _project(fields: Dict[str, Any], stored: FrozenSet[str]) -> Dict[str, Any]:
    """Keep the fields the document stored, plus any set since loading."""
    return {k: v for k, v in fields.items() if k in stored or v is not None}


@dataclass
class Subcategory:
    """A subcategory document from the `subcategories` collection."""

    id: ObjectId
    slug: Optional[str] = None
    name: Optional[str] = None
    is_active: Optional[bool] = None

    # Any other stored fields, returned untouched
    extra: Dict[str, Any] = field(default_factory=dict)
    # Known keys present in the source document
    stored: FrozenSet[str] = frozenset()

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "Subcategory":
        known = {"_id", "slug", "name", "isActive"}
        return cls(
            id=doc["_id"],
            slug=doc.get("slug"),
            name=doc.get("name"),
            is_active=doc.get("isActive"),
            extra={k: v for k, v in doc.items() if k not in known},
            stored=frozenset(known.intersection(doc)),
        )

    def to_dict(self) -> Dict[str, Any]:
        data = _project(
            {
                "_id": self.id,
                "slug": self.slug,
                "name": self.name,
                "isActive": self.is_active,
            },
            self.stored,
        )
        return to_json_value({**data, **self.extra})


@dataclass
class Product:
    """A product document from the `products` collection.

    `subcategory` holds the raw ObjectId reference until the store
    populates it, after which it holds the referenced Subcategory.
    """

    id: ObjectId
    slug: Optional[str] = None
    article_number: Optional[str] = None
    name: Optional[str] = None
    category: Optional[str] = None
    subcategory: Union[ObjectId, Subcategory, None] = None
    is_active: Optional[bool] = None
    created_at: Optional[datetime] = None

    extra: Dict[str, Any] = field(default_factory=dict)
    stored: FrozenSet[str] = frozenset()

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "Product":
        known = {
            "_id", "slug", "articleNumber", "name", "category",
            "subcategory", "isActive", "createdAt",
        }
        return cls(
            id=doc["_id"],
            slug=doc.get("slug"),
            article_number=doc.get("articleNumber"),
            name=doc.get("name"),
            category=doc.get("category"),
            subcategory=doc.get("subcategory"),
            is_active=doc.get("isActive"),
            created_at=doc.get("createdAt"),
            extra={k: v for k, v in doc.items() if k not in known},
            stored=frozenset(known.intersection(doc)),
        )

    @property
    def subcategory_id(self) -> Optional[ObjectId]:
        if isinstance(self.subcategory, Subcategory):
            return self.subcategory.id
        return self.subcategory

    def to_dict(self) -> Dict[str, Any]:
        subcategory: Any = self.subcategory
        if isinstance(subcategory, Subcategory):
            subcategory = subcategory.to_dict()
        data = _project(
            {
                "_id": self.id,
                "articleNumber": self.article_number,
                "slug": self.slug,
                "name": self.name,
                "category": self.category,
                "subcategory": subcategory,
                "isActive": self.is_active,
                "createdAt": self.created_at,
            },
            self.stored,
        )
        return to_json_value({**data, **self.extra})


@dataclass
class QueryPredicate:
    """Filter built for a single product listing request.

    A field left as None places no constraint on the store query;
    `is_active=False` is a real filter, not the same as None.
    """

    category: Optional[str] = None
    subcategory: Optional[ObjectId] = None
    is_active: Optional[bool] = None

    def to_filter(self) -> Dict[str, Any]:
        """Return the store filter map for this predicate."""
        query: Dict[str, Any] = {}
        if self.category is not None:
            query["category"] = self.category
        if self.subcategory is not None:
            query["subcategory"] = self.subcategory
        if self.is_active is not None:
            query["isActive"] = self.is_active
        return query

    def to_dict(self) -> Dict[str, Any]:
        return to_json_value(self.to_filter())
