"""Flask app serving the Kalium furniture catalog API and mirror pages.

The /api blueprint answers catalog queries from MongoDB; the pages
blueprint serves the scraped WordPress HTML with its links rewritten to
local routes, followed by the mirror's static files.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from flask import Flask

from .api import CATALOG_EXTENSION, api
from .catalog import CatalogService
from .config import FRONTEND_ROOT, REWRITE_PROFILE
from .page_resolver import PageResolver
from .pages import PAGES_EXTENSION, REWRITER_EXTENSION, pages
from .rewrite import LinkRewriter, SiteProfile, build_profile
from .store import CatalogStore

__all__ = ["create_app"]

logger = logging.getLogger(__name__)


def create_app(
    store: Optional[CatalogStore] = None,
    frontend_root: Optional[Union[str, Path]] = None,
    profile: Union[str, SiteProfile, None] = None,
) -> Flask:
    """Build the Flask app.

    Args:
        store: Catalog store; defaults to one built from MONGODB_URI.
        frontend_root: Directory with the mirror's HTML and assets.
        profile: Rewrite profile name or a prebuilt SiteProfile.

    Returns:
        Configured Flask app.
    """
    if store is None:
        store = CatalogStore.from_uri()
    if frontend_root is None:
        frontend_root = FRONTEND_ROOT
    if not isinstance(profile, SiteProfile):
        profile = build_profile(profile or REWRITE_PROFILE)

    # Static files are served by the pages blueprint, after the HTML routes
    app = Flask(__name__, static_folder=None)
    app.json.sort_keys = False

    app.extensions[CATALOG_EXTENSION] = CatalogService(store)
    app.extensions[PAGES_EXTENSION] = PageResolver(frontend_root, root_page=profile.root_page)
    app.extensions[REWRITER_EXTENSION] = LinkRewriter(profile)

    app.register_blueprint(api)
    app.register_blueprint(pages)

    logger.info(f"Serving frontend from: {frontend_root} (rewrite profile: {profile.name})")
    return app
