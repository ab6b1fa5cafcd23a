"""Product and subcategory queries behind the /api blueprint."""

import logging
import re
from typing import Any, Dict, List, Optional, Tuple

from .category_resolver import resolve_product_filter
from .errors import NotFoundError
from .logging_config import log_event
from .models import Product, Subcategory, is_valid_object_id, to_object_id
from .store import ASCENDING, DESCENDING, CatalogStore

__all__ = ["CatalogService"]

logger = logging.getLogger(__name__)

BY_ARTICLE_NUMBER = [("articleNumber", ASCENDING)]
NEWEST_FIRST = [("createdAt", DESCENDING)]
BY_NAME = [("name", ASCENDING)]

# BSON integers are signed 64-bit
MAX_BSON_INT = 2**63
DIGITS_RE = re.compile(r"[0-9]+")


def _article_number_query(article_number: str) -> Dict[str, Any]:
    """Match an article number stored either as text or as an integer."""
    if DIGITS_RE.fullmatch(article_number) and int(article_number) < MAX_BSON_INT:
        return {"articleNumber": {"$in": [article_number, int(article_number)]}}
    return {"articleNumber": article_number}


class CatalogService:
    """Read-only catalog queries.

    Every method either returns data, raises NotFoundError for a missing
    entity, or lets StoreError from the store propagate.
    """

    def __init__(self, store: CatalogStore):
        self.store = store

    # ---------- PRODUCTS ----------

    def list_products(
        self,
        category: Optional[str] = None,
        subcategory: Optional[str] = None,
        is_active: Optional[str] = None,
    ) -> List[Product]:
        """List products matching the resolved category filter."""
        predicate = resolve_product_filter(
            self.store, category=category, subcategory=subcategory, is_active=is_active
        )
        products = self.store.find_products(predicate.to_filter(), sort=BY_ARTICLE_NUMBER)
        log_event(
            "products_query",
            {
                "message": f"Found {len(products)} products",
                "params": {"category": category, "subcategory": subcategory, "isActive": is_active},
                "filter": predicate.to_dict(),
                "count": len(products),
            },
        )
        return products

    def products_by_subcategory(self, slug: str) -> List[Product]:
        subcat = self._subcategory_or_404(slug)
        return self.store.find_products(
            {"subcategory": subcat.id, "isActive": True}, sort=BY_ARTICLE_NUMBER
        )

    def product_by_slug(self, slug: str) -> Product:
        return self._product_or_404({"slug": slug})

    def product_by_article_number(self, article_number: str) -> Product:
        return self._product_or_404(_article_number_query(article_number))

    def product_by_id(self, product_id: str) -> Product:
        # A malformed id can never match, so it is reported as missing
        if not is_valid_object_id(product_id):
            raise NotFoundError("Product not found")
        return self._product_or_404({"_id": to_object_id(product_id)})

    # ---------- SUBCATEGORIES ----------

    def list_subcategories(self) -> List[Subcategory]:
        return self.store.find_subcategories({"isActive": True}, sort=BY_NAME)

    def subcategory_detail(self, slug: str) -> Tuple[Subcategory, List[Product]]:
        """Return a subcategory with its active products, newest first."""
        subcat = self._subcategory_or_404(slug)
        products = self.store.find_products(
            {"subcategory": subcat.id, "isActive": True},
            sort=NEWEST_FIRST,
            populate=False,
        )
        return subcat, products

    # ---------- CATEGORY LABELS ----------

    def list_categories(self) -> List[Dict[str, str]]:
        """List the legacy category labels used by products."""
        return [
            {"key": label, "display_name": label.replace("-", " ").replace("_", " ").title()}
            for label in sorted(set(self.store.distinct_categories()))
        ]

    # ---------- HELPERS ----------

    def _subcategory_or_404(self, slug: str) -> Subcategory:
        subcat = self.store.find_subcategory({"slug": slug})
        if not subcat:
            raise NotFoundError("Subcategory not found")
        return subcat

    def _product_or_404(self, query: Dict[str, Any]) -> Product:
        product = self.store.find_product(query)
        if not product:
            raise NotFoundError("Product not found")
        return product
