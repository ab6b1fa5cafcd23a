"""JSON API over the product catalog.

Routes (all under /api):
    GET /health
    GET /products?category=&subcategory=&isActive=
    GET /products/subcategory/<slug>
    GET /products/slug/<slug>
    GET /products/article/<article_number>
    GET /products/<product_id>
    GET /subcategories
    GET /subcategories/<slug>
    GET /categories
"""

import logging
from typing import Tuple

from flask import Blueprint, Response, current_app, jsonify, request
from werkzeug.exceptions import HTTPException

from .catalog import CatalogService
from .errors import CatalogError, NotFoundError

__all__ = ["api", "CATALOG_EXTENSION"]

logger = logging.getLogger(__name__)

CATALOG_EXTENSION = "kalium_catalog"

# Create blueprint for API
api = Blueprint("api", __name__, url_prefix="/api")


def _catalog() -> CatalogService:
    return current_app.extensions[CATALOG_EXTENSION]


@api.errorhandler(CatalogError)
def handle_catalog_error(error: CatalogError) -> Tuple[Response, int]:
    if isinstance(error, NotFoundError):
        logger.info(f"[{request.method} {request.path}] {error.message}")
    else:
        logger.error(f"[{request.method} {request.path}] Error: {error.message}")
    return jsonify({"error": error.message}), error.status_code


@api.errorhandler(Exception)
def handle_unexpected_error(error: Exception):
    if isinstance(error, HTTPException):
        return error
    logger.exception(f"[{request.method} {request.path}] Unexpected error")
    return jsonify({"error": str(error)}), 500


@api.route("/health", methods=["GET"])
def health() -> Response:
    """Health check used by the frontend's api-client.js."""
    return jsonify({"status": "ok"})


# ---------- PRODUCTS ----------


@api.route("/products", methods=["GET"])
def list_products() -> Response:
    """List products, sorted by article number.

    Query params:
        category: Subcategory slug, or a legacy category label.
        subcategory: Subcategory id or slug.
        isActive: "true" for active products, any other value for inactive.
    """
    logger.info(f"[GET /api/products] Incoming Query Params: {request.args.to_dict()}")
    products = _catalog().list_products(
        category=request.args.get("category"),
        subcategory=request.args.get("subcategory"),
        is_active=request.args.get("isActive"),
    )
    return jsonify([p.to_dict() for p in products])


@api.route("/products/subcategory/<slug>", methods=["GET"])
def products_by_subcategory(slug: str) -> Response:
    """Active products of one subcategory."""
    products = _catalog().products_by_subcategory(slug)
    return jsonify([p.to_dict() for p in products])


@api.route("/products/slug/<slug>", methods=["GET"])
def product_by_slug(slug: str) -> Response:
    return jsonify(_catalog().product_by_slug(slug).to_dict())


@api.route("/products/article/<article_number>", methods=["GET"])
def product_by_article_number(article_number: str) -> Response:
    return jsonify(_catalog().product_by_article_number(article_number).to_dict())


@api.route("/products/<product_id>", methods=["GET"])
def product_by_id(product_id: str) -> Response:
    return jsonify(_catalog().product_by_id(product_id).to_dict())


# ---------- SUBCATEGORIES ----------


@api.route("/subcategories", methods=["GET"])
def list_subcategories() -> Response:
    """Active subcategories sorted by name."""
    return jsonify([s.to_dict() for s in _catalog().list_subcategories()])


@api.route("/subcategories/<slug>", methods=["GET"])
def subcategory_detail(slug: str) -> Response:
    """One subcategory plus its active products, newest first."""
    subcat, products = _catalog().subcategory_detail(slug)
    return jsonify({
        "subcategory": subcat.to_dict(),
        "products": [p.to_dict() for p in products],
    })


# ---------- CATEGORIES ----------


@api.route("/categories", methods=["GET"])
def list_categories() -> Response:
    """List the legacy category labels found on products.

    Returns:
        JSON object with a `categories` list of {key, display_name}.
    """
    return jsonify({"categories": _catalog().list_categories()})
