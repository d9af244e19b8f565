"""
Error types shared by the store, the resolver and the API layer.

Only request-shaped problems are raised as exceptions.  A missing
product is reported through return values (``None``/``False``) by the
store, and a failed warehouse call is reported as a
:class:`~product_catalog_api.app.services.warehouse_client.WarehouseFailure`
value, so neither ever aborts a whole response.
"""

from typing import List, Optional, Union

# Error codes used in query-graph error entries.
BAD_REQUEST = "BAD_REQUEST"
NOT_FOUND = "NOT_FOUND"
UPSTREAM_UNAVAILABLE = "UPSTREAM_UNAVAILABLE"

PathElement = Union[str, int]


class CatalogError(Exception):
    """Base class for catalog errors."""

    code = BAD_REQUEST

    def __init__(self, message: str, path: Optional[List[PathElement]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path or []


class RequestError(CatalogError):
    """Malformed arguments, unknown field names or mismatched identifiers."""


class InvalidProductError(RequestError):
    """Product data rejected by the store (negative price, empty name...)."""


class ProductNotFoundError(CatalogError):
    """Product identifier is absent from the store."""

    code = NOT_FOUND

    def __init__(self, product_id: int, path: Optional[List[PathElement]] = None) -> None:
        super().__init__(f"Product {product_id} not found", path)
        self.product_id = product_id
