"""MongoDB-backed catalog store.

Wraps the `products` and `subcategories` collections behind a handful of
read helpers: find, find-one, sorted results, `$in` membership and a
populate step that swaps a product's subcategory reference for the
referenced document. Every pymongo failure is re-raised as StoreError so
the HTTP layer only has to know about catalog errors.
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Generator, Iterable, List, Optional, Sequence, Tuple

from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError

from .config import (
    MONGO_DB_NAME,
    MONGO_TIMEOUT_MS,
    MONGODB_URI,
    PRODUCTS_COLLECTION,
    SUBCATEGORIES_COLLECTION,
)
from .errors import StoreError
from .models import Product, Subcategory

__all__ = ["CatalogStore", "ASCENDING", "DESCENDING", "SortSpec"]

logger = logging.getLogger(__name__)

SortSpec = Sequence[Tuple[str, int]]


@contextmanager
def _store_errors(operation: str) -> Generator[None, None, None]:
    """Translate pymongo failures into StoreError."""
    try:
        yield
    except PyMongoError as e:
        logger.error(f"[DB] {operation} failed: {e}")
        raise StoreError(str(e)) from e


class CatalogStore:
    """Read access to the product catalog."""

    def __init__(self, database: Database, client: Optional[MongoClient] = None):
        self.database = database
        self.client = client
        self.products = database[PRODUCTS_COLLECTION]
        self.subcategories = database[SUBCATEGORIES_COLLECTION]

    @classmethod
    def from_uri(
        cls,
        uri: str = MONGODB_URI,
        db_name: str = MONGO_DB_NAME,
        timeout_ms: int = MONGO_TIMEOUT_MS,
    ) -> "CatalogStore":
        """Create a store from a connection string.

        The client connects lazily, so this never blocks on the network.
        """
        client: MongoClient = MongoClient(uri, serverSelectionTimeoutMS=timeout_ms)
        database = client.get_default_database(default=db_name)
        return cls(database, client=client)

    def ping(self) -> None:
        """Round-trip to the server, raising StoreError if it is unreachable."""
        with _store_errors("ping"):
            self.database.command("ping")

    def close(self) -> None:
        if self.client is not None:
            self.client.close()

    # ---------- SUBCATEGORIES ----------

    def find_subcategory(self, query: Dict[str, Any]) -> Optional[Subcategory]:
        with _store_errors("find_subcategory"):
            doc = self.subcategories.find_one(query)
        return Subcategory.from_document(doc) if doc else None

    def find_subcategories(
        self, query: Dict[str, Any], sort: Optional[SortSpec] = None
    ) -> List[Subcategory]:
        with _store_errors("find_subcategories"):
            cursor = self.subcategories.find(query)
            if sort:
                cursor = cursor.sort(list(sort))
            docs = list(cursor)
        return [Subcategory.from_document(doc) for doc in docs]

    # ---------- PRODUCTS ----------

    def find_product(
        self, query: Dict[str, Any], populate: bool = True
    ) -> Optional[Product]:
        with _store_errors("find_product"):
            doc = self.products.find_one(query)
        if not doc:
            return None
        product = Product.from_document(doc)
        if populate:
            self.populate([product])
        return product

    def find_products(
        self,
        query: Dict[str, Any],
        sort: Optional[SortSpec] = None,
        populate: bool = True,
    ) -> List[Product]:
        with _store_errors("find_products"):
            cursor = self.products.find(query)
            if sort:
                cursor = cursor.sort(list(sort))
            docs = list(cursor)
        products = [Product.from_document(doc) for doc in docs]
        if populate:
            self.populate(products)
        return products

    def distinct_categories(self) -> List[str]:
        """Return the distinct legacy category labels stored on products."""
        with _store_errors("distinct_categories"):
            values = self.products.distinct("category")
        return [v for v in values if isinstance(v, str) and v]

    def populate(self, products: Iterable[Product]) -> None:
        """Resolve each product's subcategory reference in place.

        References to missing subcategories become None, matching what a
        populate against a dangling reference returns.
        """
        products = list(products)
        ids = {p.subcategory_id for p in products if p.subcategory_id is not None}
        if not ids:
            return
        with _store_errors("populate"):
            docs = list(self.subcategories.find({"_id": {"$in": list(ids)}}))
        by_id = {doc["_id"]: Subcategory.from_document(doc) for doc in docs}
        for product in products:
            if product.subcategory_id is not None:
                product.subcategory = by_id.get(product.subcategory_id)
