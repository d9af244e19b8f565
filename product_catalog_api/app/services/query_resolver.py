"""
Query-graph resolver.

``QueryResolver`` turns a :class:`QueryRequest` into calls against the
:class:`ProductStore` and, when the ``warehouse`` field is selected,
against the :class:`WarehouseClient`.  Dispatch goes through an
explicit table keyed by :class:`Operation`.

Only selected fields are materialized, in the order they were asked
for.  Warehouse lookups for all returned products are issued
concurrently and joined before the response is assembled; a failed
lookup turns that one product's ``warehouse`` field into ``null`` and
adds an ``UPSTREAM_UNAVAILABLE`` entry to ``errors`` instead of
failing the response.  Cancelling the task that awaits
:meth:`QueryResolver.resolve` cancels any pending lookups with it.

Request-shaped problems (missing or non-coercible arguments, unknown
fields) raise :class:`RequestError` before the store is touched.  The
resolver does not validate product values itself; the store does.
"""

from __future__ import annotations

import asyncio
import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple

from product_catalog_api.app.core.errors import (
    NOT_FOUND,
    UPSTREAM_UNAVAILABLE,
    PathElement,
    ProductNotFoundError,
    RequestError,
)
from product_catalog_api.app.schemas.product import ProductCreate, ProductRead, ProductUpdate
from product_catalog_api.app.schemas.query import (
    ArgumentValue,
    DecimalArgument,
    IntArgument,
    ObjectArgument,
    Operation,
    QueryErrorEntry,
    QueryRequest,
    QueryResponse,
    TextArgument,
)
from product_catalog_api.app.services.product_store import ProductStore
from product_catalog_api.app.services.warehouse_client import WarehouseClient


logger = logging.getLogger(__name__)

LOCAL_FIELDS = ("id", "name", "price", "quantity_in_stock")
WAREHOUSE_FIELD = "warehouse"
SELECTABLE_FIELDS = LOCAL_FIELDS + (WAREHOUSE_FIELD,)

# Sub-fields accepted inside the ``product`` argument.  ``id`` is only
# meaningful for updates and is ignored on create.
PRODUCT_INPUT_FIELDS = ("id", "name", "price", "quantity_in_stock")


class QueryResolver:
    """Resolve query-graph requests against the store and the warehouse."""

    def __init__(self, store: ProductStore, warehouse: WarehouseClient) -> None:
        self.store = store
        self.warehouse = warehouse
        self._handlers: Dict[Operation, Callable[[QueryRequest], Awaitable[QueryResponse]]] = {
            Operation.FETCH_ALL: self._fetch_all,
            Operation.FETCH_BY_ID: self._fetch_by_id,
            Operation.CREATE: self._create,
            Operation.UPDATE: self._update,
            Operation.DELETE: self._delete,
        }

    async def resolve(self, request: QueryRequest) -> QueryResponse:
        logger.debug("Resolving %s with fields %s", request.operation.value, request.fields)
        handler = self._handlers[request.operation]
        return await handler(request)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    async def _fetch_all(self, request: QueryRequest) -> QueryResponse:
        fields = self._selection(request.fields)
        rows, errors = await self._project_many(self.store.list(), fields, [request.operation.value])
        return QueryResponse(data=rows, errors=errors)

    async def _fetch_by_id(self, request: QueryRequest) -> QueryResponse:
        fields = self._selection(request.fields)
        product_id = self._require_id(request.arguments)
        product = self.store.get(product_id)
        if product is None:
            return QueryResponse(data=None)
        row, errors = await self._project_one(product, fields, [request.operation.value])
        return QueryResponse(data=row, errors=errors)

    async def _create(self, request: QueryRequest) -> QueryResponse:
        fields = self._selection(request.fields)
        values = self._product_values(request.arguments)
        values.pop("id", None)
        for required in ("name", "price"):
            if required not in values:
                raise RequestError(f"Missing required product field '{required}'", ["product", required])
        product = self.store.create(ProductCreate(**values))
        row, errors = await self._project_one(product, fields, [request.operation.value])
        return QueryResponse(data=row, errors=errors)

    async def _update(self, request: QueryRequest) -> QueryResponse:
        fields = self._selection(request.fields)
        values = self._product_values(request.arguments)
        body_id = values.pop("id", None)
        if "id" in request.arguments:
            product_id = self._require_id(request.arguments)
            if body_id is not None and body_id != product_id:
                raise RequestError(
                    f"Argument id {product_id} does not match product id {body_id}", ["product", "id"]
                )
        elif body_id is not None:
            product_id = body_id
        else:
            raise RequestError("Missing required argument 'id'", ["id"])

        product = self.store.update(product_id, ProductUpdate(**values))
        if product is None:
            return QueryResponse(data=None, errors=[self._not_found(product_id, [request.operation.value])])
        row, errors = await self._project_one(product, fields, [request.operation.value])
        return QueryResponse(data=row, errors=errors)

    async def _delete(self, request: QueryRequest) -> QueryResponse:
        # The result is a flag, so a selection is optional; if given it
        # must still name real fields.
        if request.fields:
            self._selection(request.fields)
        product_id = self._require_id(request.arguments)
        if self.store.delete(product_id):
            return QueryResponse(data=True)
        return QueryResponse(data=False, errors=[self._not_found(product_id, [request.operation.value])])

    # ------------------------------------------------------------------
    # Projection
    # ------------------------------------------------------------------
    @staticmethod
    def _selection(fields: List[str]) -> List[str]:
        """Validate the field selection, dropping repeats but keeping order."""
        if not fields:
            raise RequestError("At least one field must be selected", ["fields"])
        selection: List[str] = []
        for index, name in enumerate(fields):
            if name not in SELECTABLE_FIELDS:
                raise RequestError(f"Unknown field '{name}'", ["fields", index])
            if name not in selection:
                selection.append(name)
        return selection

    async def _project_one(
        self, product: ProductRead, fields: List[str], path: List[PathElement]
    ) -> Tuple[Dict[str, Any], List[QueryErrorEntry]]:
        rows, errors = await self._project_many([product], fields, path, indexed=False)
        return rows[0], errors

    async def _project_many(
        self,
        products: List[ProductRead],
        fields: List[str],
        path: List[PathElement],
        indexed: bool = True,
    ) -> Tuple[List[Dict[str, Any]], List[QueryErrorEntry]]:
        rows: List[Dict[str, Any]] = []
        for product in products:
            dumped = product.model_dump(mode="json")
            rows.append({name: dumped.get(name) for name in fields})

        errors: List[QueryErrorEntry] = []
        if WAREHOUSE_FIELD not in fields or not products:
            return rows, errors

        results = await asyncio.gather(
            *(self.warehouse.fetch_info(product.id) for product in products)
        )
        for index, (payload, failure) in enumerate(results):
            rows[index][WAREHOUSE_FIELD] = payload
            if failure is not None:
                field_path = path + ([index] if indexed else []) + [WAREHOUSE_FIELD]
                errors.append(
                    QueryErrorEntry(message=failure.message, code=UPSTREAM_UNAVAILABLE, path=field_path)
                )
        return rows, errors

    # ------------------------------------------------------------------
    # Argument coercion
    # ------------------------------------------------------------------
    @staticmethod
    def _require_id(arguments: Dict[str, ArgumentValue]) -> int:
        if "id" not in arguments:
            raise RequestError("Missing required argument 'id'", ["id"])
        product_id = _coerce_int(arguments["id"])
        if product_id is None:
            raise RequestError("Argument 'id' must be an integer", ["id"])
        return product_id

    @staticmethod
    def _product_values(arguments: Dict[str, ArgumentValue]) -> Dict[str, Any]:
        """Map the ``product`` object argument onto product field values."""
        argument = arguments.get("product")
        if not isinstance(argument, ObjectArgument):
            raise RequestError("Argument 'product' must be an object", ["product"])

        values: Dict[str, Any] = {}
        for name, value in argument.value.items():
            path: List[PathElement] = ["product", name]
            if name not in PRODUCT_INPUT_FIELDS:
                raise RequestError(f"Unknown product field '{name}'", path)
            if name == "name":
                if not isinstance(value, TextArgument):
                    raise RequestError("Product name must be text", path)
                values[name] = value.value
            elif name == "price":
                price = _coerce_decimal(value)
                if price is None:
                    raise RequestError("Product price must be a number", path)
                values[name] = price
            else:
                number = _coerce_int(value)
                if number is None:
                    raise RequestError(f"Product {name} must be an integer", path)
                values[name] = number
        return values

    @staticmethod
    def _not_found(product_id: int, path: List[PathElement]) -> QueryErrorEntry:
        error = ProductNotFoundError(product_id, path)
        return QueryErrorEntry(message=error.message, code=NOT_FOUND, path=error.path)


def _coerce_int(value: ArgumentValue) -> Optional[int]:
    if isinstance(value, IntArgument):
        return value.value
    if isinstance(value, TextArgument):
        text = value.value.strip()
        # Plain ASCII digits only: no signs, underscores or other scripts.
        if text.isascii() and text.isdigit():
            return int(text)
        return None
    if isinstance(value, DecimalArgument):
        number = value.value
        if number.is_finite() and number == number.to_integral_value():
            return int(number)
    return None


def _coerce_decimal(value: ArgumentValue) -> Optional[Decimal]:
    number: Optional[Decimal] = None
    if isinstance(value, DecimalArgument):
        number = value.value
    elif isinstance(value, IntArgument):
        number = Decimal(value.value)
    elif isinstance(value, TextArgument):
        try:
            number = Decimal(value.value.strip())
        except InvalidOperation:
            return None
    # NaN and infinities are not prices
    if number is None or not number.is_finite():
        return None
    return number
