"""Error types shared by the catalog service and the HTTP layer."""

__all__ = ["CatalogError", "NotFoundError", "StoreError"]


class CatalogError(Exception):
    """Base class for catalog failures that map to an HTTP status."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(CatalogError):
    """Raised when a requested product or subcategory does not exist."""

    status_code = 404


class StoreError(CatalogError):
    """Raised when the document store is unreachable or a query fails."""

    status_code = 500
