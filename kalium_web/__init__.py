"""Kalium furniture catalog API and mirror page server."""

__version__ = "0.1.0"

from kalium_web.app import create_app
from kalium_web.catalog import CatalogService
from kalium_web.errors import CatalogError, NotFoundError, StoreError
from kalium_web.page_resolver import PageResolver
from kalium_web.rewrite import LinkRewriter, build_profile
from kalium_web.store import CatalogStore

__all__ = [
    "__version__",
    "create_app",
    "CatalogService",
    "CatalogStore",
    "PageResolver",
    "LinkRewriter",
    "build_profile",
    "CatalogError",
    "NotFoundError",
    "StoreError",
]
