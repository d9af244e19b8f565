"""
Product endpoints for API v1.

These routes expose CRUD operations on the product store with fixed
verbs and paths.  They always return the full product shape; field
selection and warehouse data are only available through the query
endpoint.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from product_catalog_api.app.api.deps import get_store
from product_catalog_api.app.core.errors import InvalidProductError
from product_catalog_api.app.schemas.product import ProductCreate, ProductRead, ProductReplace, ProductUpdate
from product_catalog_api.app.services.product_store import ProductStore

router = APIRouter()


@router.get("", response_model=List[ProductRead])
async def list_products(store: ProductStore = Depends(get_store)) -> List[ProductRead]:
    """Return every product in insertion order."""
    return store.list()


@router.get("/{product_id}", response_model=ProductRead)
async def get_product(product_id: int, store: ProductStore = Depends(get_store)) -> ProductRead:
    """Retrieve a single product by ID.

    Returns HTTP 404 if the product is not found.
    """
    product = store.get(product_id)
    if product is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")
    return product


@router.post("", response_model=ProductRead, status_code=status.HTTP_201_CREATED)
async def create_product(
    product_in: ProductCreate,
    request: Request,
    response: Response,
    store: ProductStore = Depends(get_store),
) -> ProductRead:
    """Create a product.

    The identifier is assigned by the store; an ``id`` in the body is
    ignored.  The ``Location`` header points at the new resource.
    """
    try:
        product = store.create(product_in)
    except InvalidProductError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=exc.message)
    response.headers["Location"] = f"{request.url.path}/{product.id}"
    return product


@router.put("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def replace_product(
    product_id: int,
    product_in: ProductReplace,
    store: ProductStore = Depends(get_store),
) -> None:
    """Replace a product's mutable fields.

    Returns 400 when the body's ``id`` differs from the path, before
    the store is consulted, and 404 when the product does not exist.
    """
    if product_in.id != product_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Product id in body does not match the path",
        )
    try:
        updated = store.update(
            product_id,
            ProductUpdate(
                name=product_in.name,
                price=product_in.price,
                quantity_in_stock=product_in.quantity_in_stock,
            ),
        )
    except InvalidProductError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=exc.message)
    if updated is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")
    return None


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(product_id: int, store: ProductStore = Depends(get_store)) -> None:
    """Delete a product.  Returns 404 if it does not exist."""
    if not store.delete(product_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")
    return None
