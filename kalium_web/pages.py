"""HTML pages from the scraped mirror, plus the static assets behind them.

Page routes resolve a file through PageResolver and pass its text through
LinkRewriter. Werkzeug matches the literal routes (/product, /category,
/index_decor/category) before the pretty /<page>/category/<slug> route,
and those before the catch-all, which rewrites `.html` files and serves
everything else verbatim.
"""

import logging
from pathlib import Path
from typing import Optional

from flask import Blueprint, Response, current_app, jsonify, send_from_directory
from werkzeug.exceptions import NotFound

from .logging_config import log_event
from .page_resolver import PageResolver
from .rewrite import LinkRewriter

__all__ = ["pages", "PAGES_EXTENSION", "REWRITER_EXTENSION"]

logger = logging.getLogger(__name__)

PAGES_EXTENSION = "kalium_pages"
REWRITER_EXTENSION = "kalium_rewriter"

pages = Blueprint("pages", __name__)


def _resolver() -> PageResolver:
    return current_app.extensions[PAGES_EXTENSION]


def _rewriter() -> LinkRewriter:
    return current_app.extensions[REWRITER_EXTENSION]


def _not_found() -> Response:
    return Response("Not found", status=404, mimetype="text/plain")


def _render_page(path: Optional[Path], kind: str, requested: str) -> Response:
    """Read, rewrite and send a resolved page, or 404 if there is none."""
    if path is None:
        logger.error(f"[{kind}] No page found for {requested}")
        return _not_found()

    try:
        html = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"[{kind}] Error reading file: {path} ({e})")
        return _not_found()

    log_event(
        "page_served",
        {"message": f"[{kind}] {requested} -> {path.name}", "kind": kind, "file": path.name},
        level=logging.DEBUG,
    )
    return Response(_rewriter().rewrite(html), mimetype="text/html")


def _serve_static(filename: str) -> Response:
    try:
        return send_from_directory(_resolver().root, filename)
    except NotFound:
        return _not_found()


# ---------- PAGE ROUTES ----------


@pages.route("/product/<slug>", methods=["GET"])
def product_page(slug: str) -> Response:
    """Product page; unknown slugs get the generic product template."""
    return _render_page(_resolver().resolve_product(slug), "Product", slug)


@pages.route("/category/<slug>", methods=["GET"])
@pages.route("/index_decor/category/<slug>", methods=["GET"])
def category_page(slug: str) -> Response:
    return _render_page(_resolver().resolve_category(slug), "Category", slug)


@pages.route("/<page>/category/<path:slug>", methods=["GET"])
def pretty_category_page(page: str, slug: str) -> Response:
    """`/<page>/category/<slug>` serves <page> itself when it exists."""
    path = _resolver().resolve_pretty_category(page)
    if path is None:
        return _serve_static(f"{page}/category/{slug}")
    return _render_page(path, "Category", f"{page}/category/{slug}")


@pages.route("/", methods=["GET"])
def root_page() -> Response:
    return _render_page(_resolver().resolve_html("/"), "HTML", "/")


@pages.route("/<path:filename>", methods=["GET"])
def html_or_static(filename: str) -> Response:
    """Legacy `*.html` pages are rewritten; anything else is a static asset."""
    if filename.endswith(".html"):
        return _render_page(_resolver().resolve_html(filename), "HTML", filename)
    return _serve_static(filename)


# ---------- LEGACY WORDPRESS ENDPOINTS ----------
# The theme's scripts still call a live WordPress backend.


@pages.route("/wp-json", methods=["GET", "POST"])
@pages.route("/wp-json/<path:rest>", methods=["GET", "POST"])
def wp_json(rest: str = "") -> Response:
    return jsonify({})


@pages.route("/elementor/<path:rest>", methods=["GET", "POST"])
@pages.route("/wp-includes/<path:rest>", methods=["GET", "POST"])
@pages.route("/wp-admin", methods=["GET", "POST"])
@pages.route("/wp-admin/<path:rest>", methods=["GET", "POST"])
def wp_stub(rest: str = "") -> Response:
    return Response("", status=200)
