"""Test error translation for store failures and unreadable pages."""

from unittest.mock import MagicMock, patch

import pytest
from pymongo.errors import OperationFailure, ServerSelectionTimeoutError

from kalium_web.errors import CatalogError, NotFoundError, StoreError


@pytest.fixture
def broken_products(catalog_db):
    """Make every products query fail as if the server were down."""
    collection = catalog_db["products"]
    error = ServerSelectionTimeoutError("127.0.0.1:27017: connection refused")
    collection.find = MagicMock(side_effect=error)
    collection.find_one = MagicMock(side_effect=error)
    collection.distinct = MagicMock(side_effect=error)
    return collection


class TestErrorTypes:
    def test_status_codes(self):
        assert NotFoundError("x").status_code == 404
        assert StoreError("x").status_code == 500

    def test_message_kept(self):
        error = StoreError("boom")
        assert isinstance(error, CatalogError)
        assert error.message == "boom"
        assert str(error) == "boom"


class TestStoreErrors:
    """Store failures surface as 500 with the underlying message."""

    @pytest.mark.parametrize(
        "url",
        [
            "/api/products",
            "/api/products?category=decor",
            "/api/products/slug/tact-mirror",
            "/api/products/article/1001",
            "/api/products/65a000000000000000000001",
            "/api/products/subcategory/mirrors",
            "/api/subcategories/mirrors",
            "/api/categories",
        ],
    )
    def test_store_error_is_500(self, client, broken_products, url):
        response = client.get(url)
        assert response.status_code == 500
        assert "connection refused" in response.json["error"]

    def test_subcategory_lookup_failure(self, client, catalog_db):
        catalog_db["subcategories"].find_one = MagicMock(
            side_effect=OperationFailure("bad query")
        )
        response = client.get("/api/products?category=mirrors")
        assert response.status_code == 500
        assert response.json == {"error": "bad query"}

    def test_not_found_still_404_for_malformed_id(self, client, broken_products):
        """A malformed id never reaches the store."""
        response = client.get("/api/products/not-an-id")
        assert response.status_code == 404
        broken_products.find_one.assert_not_called()

    def test_health_does_not_touch_store(self, client, broken_products):
        assert client.get("/api/health").status_code == 200


class TestUnexpectedErrors:
    def test_unexpected_exception_is_json_500(self, client):
        with patch(
            "kalium_web.catalog.CatalogService.list_subcategories",
            side_effect=RuntimeError("unexpected"),
        ):
            response = client.get("/api/subcategories")
        assert response.status_code == 500
        assert response.json == {"error": "unexpected"}


class TestPageReadErrors:
    def test_unreadable_page_is_404(self, client):
        with patch("pathlib.Path.read_text", side_effect=PermissionError("denied")):
            response = client.get("/product/chair-1")
        assert response.status_code == 404
        assert response.get_data(as_text=True) == "Not found"

    def test_non_utf8_page_is_404(self, client, frontend_root):
        (frontend_root / "index_chair-1.html").write_bytes(b"\xff\xfe\xfa bad")
        response = client.get("/product/chair-1")
        assert response.status_code == 404
