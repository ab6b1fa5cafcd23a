"""Shared test fixtures for the kalium_web test suite."""

from datetime import datetime
from typing import Any, Dict, List

import pytest
from bson import ObjectId

from kalium_web.app import create_app
from kalium_web.store import CatalogStore

ORIGIN = "https://sites.kaliumtheme.com/elementor/furniture"

MIRRORS_ID = ObjectId("64b000000000000000000001")
RUGS_ID = ObjectId("64b000000000000000000002")
LAMPS_ID = ObjectId("64b000000000000000000003")

TACT_ID = ObjectId("65a000000000000000000001")
ROUND_ID = ObjectId("65a000000000000000000002")
OLD_MIRROR_ID = ObjectId("65a000000000000000000003")
RUG_ID = ObjectId("65a000000000000000000004")
CHAIR_ID = ObjectId("65a000000000000000000005")


def _matches(doc: Dict[str, Any], query: Dict[str, Any]) -> bool:
    for key, cond in query.items():
        value = doc.get(key)
        if isinstance(cond, dict) and "$in" in cond:
            if value not in cond["$in"]:
                return False
        elif value != cond:
            return False
    return True


class FakeCursor:
    """The slice of pymongo's Cursor that CatalogStore uses."""

    def __init__(self, docs: List[Dict[str, Any]]):
        self.docs = docs

    def sort(self, keys):
        for field, direction in reversed(keys):
            self.docs.sort(key=lambda d: d.get(field), reverse=direction < 0)
        return self

    def __iter__(self):
        return iter(self.docs)


class FakeCollection:
    def __init__(self, docs: List[Dict[str, Any]]):
        self.docs = docs
        self.queries: List[Dict[str, Any]] = []

    def find(self, query: Dict[str, Any]) -> FakeCursor:
        self.queries.append(query)
        return FakeCursor([dict(d) for d in self.docs if _matches(d, query)])

    def find_one(self, query: Dict[str, Any]):
        self.queries.append(query)
        for doc in self.docs:
            if _matches(doc, query):
                return dict(doc)
        return None

    def distinct(self, field: str) -> list:
        seen = []
        for doc in self.docs:
            value = doc.get(field)
            if value is not None and value not in seen:
                seen.append(value)
        return seen


class FakeDatabase:
    """Dict-backed stand-in for a pymongo Database."""

    def __init__(self, collections: Dict[str, List[Dict[str, Any]]]):
        self.collections = {name: FakeCollection(docs) for name, docs in collections.items()}

    def __getitem__(self, name: str) -> FakeCollection:
        return self.collections.setdefault(name, FakeCollection([]))

    def command(self, name: str) -> Dict[str, Any]:
        return {"ok": 1.0}


@pytest.fixture
def subcategory_docs():
    return [
        {"_id": MIRRORS_ID, "slug": "mirrors", "name": "Mirrors", "isActive": True},
        {"_id": RUGS_ID, "slug": "rugs", "name": "Rugs", "isActive": True},
        {"_id": LAMPS_ID, "slug": "lamps", "name": "Lamps", "isActive": False},
    ]


@pytest.fixture
def product_docs():
    return [
        {
            "_id": ROUND_ID, "articleNumber": "1002", "slug": "round-mirror",
            "name": "Round Mirror", "category": "decor", "subcategory": MIRRORS_ID,
            "isActive": True, "createdAt": datetime(2024, 3, 1), "price": 120,
        },
        {
            "_id": TACT_ID, "articleNumber": "1001", "slug": "tact-mirror",
            "name": "Tact Mirror", "category": "decor", "subcategory": MIRRORS_ID,
            "isActive": True, "createdAt": datetime(2024, 1, 1),
        },
        {
            "_id": OLD_MIRROR_ID, "articleNumber": "1003", "slug": "old-mirror",
            "name": "Old Mirror", "category": "decor", "subcategory": MIRRORS_ID,
            "isActive": False, "createdAt": datetime(2023, 6, 1),
        },
        {
            "_id": RUG_ID, "articleNumber": "2001", "slug": "wool-rug",
            "name": "Wool Rug", "category": "decor", "subcategory": RUGS_ID,
            "isActive": True, "createdAt": datetime(2024, 2, 1),
        },
        {
            "_id": CHAIR_ID, "articleNumber": "3001", "slug": "chair-1",
            "name": "Chair", "category": "living-room", "subcategory": None,
            "isActive": True, "createdAt": datetime(2024, 4, 1),
        },
    ]


@pytest.fixture
def catalog_db(subcategory_docs, product_docs):
    return FakeDatabase({"products": product_docs, "subcategories": subcategory_docs})


@pytest.fixture
def store(catalog_db):
    return CatalogStore(catalog_db)


@pytest.fixture
def frontend_root(tmp_path):
    """A tiny mirror with the templates the page routes fall back to."""
    root = tmp_path / "frontend"
    root.mkdir()
    (root / "index.html").write_text(
        f'<html><a href="{ORIGIN}/about-us/">About</a> root page</html>', encoding="utf-8"
    )
    (root / "index_decor.html").write_text(
        f'<html>decor category <a href="{ORIGIN}/product/tact-mirror/" '
        'onclick="window.location.href=this.href; return false;">Tact</a></html>',
        encoding="utf-8",
    )
    (root / "index_tact-mirror.html").write_text(
        '<html>product template <link href="/wp-content/theme.css"></html>', encoding="utf-8"
    )
    (root / "index_chair-1.html").write_text("<html>chair page</html>", encoding="utf-8")
    (root / "index_mirrors.html").write_text(
        '<html>mirrors page <a href="/index_round-mirror.html">Round</a></html>', encoding="utf-8"
    )
    (root / "style.css").write_text("body { color: black; }", encoding="utf-8")
    return root


@pytest.fixture
def app(store, frontend_root):
    app = create_app(store=store, frontend_root=frontend_root, profile="routes")
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    with app.test_client() as test_client:
        yield test_client
