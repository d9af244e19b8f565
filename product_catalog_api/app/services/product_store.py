"""
In-memory product store.

``ProductStore`` is the authoritative record of products for the
lifetime of the process.  Records live in an insertion-ordered dict
keyed by identifier and every operation runs under one reentrant lock,
so a reader never sees a half-applied write and two concurrent creates
can never be handed the same identifier.

Identifier policy: the store always assigns identifiers itself from a
monotonically increasing counter.  An identifier supplied by a caller
on creation is ignored, and identifiers of deleted products are never
reused.

Products are validated here (non-empty name, non-negative price and
quantity) and every value handed out is a copy, so callers cannot
mutate stored state behind the lock's back.
"""

from __future__ import annotations

import logging
import threading
from decimal import Decimal
from typing import Dict, List, Optional

from product_catalog_api.app.core.errors import InvalidProductError
from product_catalog_api.app.schemas.product import ProductCreate, ProductRead, ProductUpdate


logger = logging.getLogger(__name__)


class ProductStore:
    """Thread-safe in-memory mapping from product id to product."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._products: Dict[int, ProductRead] = {}
        self._next_id = 1

    def get(self, product_id: int) -> Optional[ProductRead]:
        """Return the product with ``product_id`` or ``None``."""
        with self._lock:
            product = self._products.get(product_id)
            return product.model_copy() if product is not None else None

    def list(self) -> List[ProductRead]:
        """Return all products in insertion order."""
        with self._lock:
            return [product.model_copy() for product in self._products.values()]

    def create(self, data: ProductCreate) -> ProductRead:
        """Store a new product and return it with its assigned id."""
        self._validate(data.name, data.price, data.quantity_in_stock)
        with self._lock:
            product = ProductRead(
                id=self._next_id,
                name=data.name,
                price=data.price,
                quantity_in_stock=data.quantity_in_stock,
            )
            self._products[product.id] = product
            self._next_id += 1
        logger.info("Created product %s", product.id)
        return product.model_copy()

    def update(self, product_id: int, data: ProductUpdate) -> Optional[ProductRead]:
        """Update an existing product.

        Only fields provided in ``data`` are changed.  Returns the
        updated product or ``None`` if the record does not exist.  The
        merged record is validated before it replaces the stored one,
        so a rejected update leaves the store untouched.
        """
        with self._lock:
            current = self._products.get(product_id)
            if current is None:
                return None
            updated = ProductRead(
                id=current.id,
                name=data.name if data.name is not None else current.name,
                price=data.price if data.price is not None else current.price,
                quantity_in_stock=(
                    data.quantity_in_stock if data.quantity_in_stock is not None else current.quantity_in_stock
                ),
            )
            self._validate(updated.name, updated.price, updated.quantity_in_stock)
            self._products[product_id] = updated
        logger.info("Updated product %s", product_id)
        return updated.model_copy()

    def delete(self, product_id: int) -> bool:
        """Delete a product by id.

        Returns ``True`` if a record was deleted, ``False`` otherwise.
        """
        with self._lock:
            deleted = self._products.pop(product_id, None) is not None
        if deleted:
            logger.info("Deleted product %s", product_id)
        return deleted

    def count(self) -> int:
        with self._lock:
            return len(self._products)

    def clear(self) -> None:
        """Drop every record.  Identifiers keep counting upwards."""
        with self._lock:
            self._products.clear()

    @staticmethod
    def _validate(name: str, price: Decimal, quantity_in_stock: int) -> None:
        if not name or not name.strip():
            raise InvalidProductError("Product name must not be empty", ["name"])
        if not price.is_finite() or price < 0:
            raise InvalidProductError("Product price must be a non-negative number", ["price"])
        if quantity_in_stock < 0:
            raise InvalidProductError("Quantity in stock must not be negative", ["quantity_in_stock"])
