"""
Pydantic models for product data.

``ProductBase`` carries the mutable fields; ``ProductCreate`` is the
creation payload, ``ProductReplace`` the full-body PUT payload (which
repeats the identifier so it can be checked against the path) and
``ProductRead`` the shape returned by both surfaces.  Non-negativity of
price and quantity is enforced by the store, not here, so both
surfaces share one set of rules.
"""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class ProductBase(BaseModel):
    name: str = Field(..., examples=["Widget"])
    price: Decimal = Field(..., examples=["9.99"])
    quantity_in_stock: int = Field(0, examples=[10])


class ProductCreate(ProductBase):
    """Schema for creating a product.

    An ``id`` in the payload is ignored: identifiers are always
    assigned by the store.
    """
    pass


class ProductReplace(ProductBase):
    """Schema for ``PUT /products/{id}``."""

    id: int


class ProductUpdate(BaseModel):
    """Schema for updating a product.

    All fields are optional; only provided fields will be updated.
    """
    name: Optional[str] = None
    price: Optional[Decimal] = None
    quantity_in_stock: Optional[int] = None


class ProductRead(ProductBase):
    """Schema for reading a product from the API."""

    id: int

    model_config = {
        "from_attributes": True,
    }
