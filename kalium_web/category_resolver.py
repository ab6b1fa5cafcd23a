"""Turn the product listing query parameters into a QueryPredicate.

The `category` token is ambiguous: the frontend sends either a subcategory
slug or a legacy category label. Subcategory slugs win; anything else is
matched literally against the product's `category` field.
"""

import logging
from typing import Optional

from .models import QueryPredicate, is_valid_object_id, to_object_id
from .store import CatalogStore

__all__ = ["resolve_product_filter", "parse_is_active"]

logger = logging.getLogger(__name__)


def parse_is_active(value: Optional[str]) -> Optional[bool]:
    """Parse the isActive query parameter.

    None means the parameter was absent (no filter). Only the exact string
    "true" is truthy; any other value filters to inactive products.
    """
    if value is None:
        return None
    return value == "true"


def resolve_product_filter(
    store: CatalogStore,
    category: Optional[str] = None,
    subcategory: Optional[str] = None,
    is_active: Optional[str] = None,
) -> QueryPredicate:
    """Build the listing predicate from raw query parameters.

    Args:
        store: Catalog store used to look up subcategory slugs.
        category: Subcategory slug or legacy category label.
        subcategory: Subcategory id or slug; overrides a subcategory
            resolved from `category`.
        is_active: Raw isActive parameter.

    Returns:
        The merged predicate. Unresolvable tokens never raise; they fall
        through to a literal category match that may find nothing.
    """
    predicate = QueryPredicate()

    if category:
        subcat = store.find_subcategory({"slug": category})
        if subcat:
            predicate.subcategory = subcat.id
        else:
            predicate.category = category

    if subcategory:
        if is_valid_object_id(subcategory):
            predicate.subcategory = to_object_id(subcategory)
        else:
            sub = store.find_subcategory({"slug": subcategory})
            if sub:
                predicate.subcategory = sub.id
            else:
                logger.debug(f"Unknown subcategory slug ignored: {subcategory}")

    predicate.is_active = parse_is_active(is_active)
    return predicate
