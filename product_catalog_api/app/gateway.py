"""
Process-level owner of the catalog's collaborators.

``Gateway`` builds the product store, the warehouse client, the query
resolver and the v1 routing table (REST product handlers plus the
query endpoint) once, at application start, and hands the same
instances to every request.  There is no module-level store: the
FastAPI application mounts ``gateway.router`` and keeps the gateway on
``app.state``, and endpoints reach its collaborators through the
dependencies in ``api/deps.py``.
"""

import logging
from typing import Optional

from fastapi import APIRouter

from product_catalog_api.app.core.config import Settings
from product_catalog_api.app.services.product_store import ProductStore
from product_catalog_api.app.services.query_resolver import QueryResolver
from product_catalog_api.app.services.warehouse_client import WarehouseClient


logger = logging.getLogger(__name__)


class Gateway:
    """Holds the store, warehouse client, resolver and routes for the process."""

    def __init__(
        self,
        settings: Settings,
        *,
        store: Optional[ProductStore] = None,
        warehouse: Optional[WarehouseClient] = None,
    ) -> None:
        # Imported here: the endpoint modules depend on this module via api.deps.
        from product_catalog_api.app.api.v1.router import build_router

        self.settings = settings
        self.store = store or ProductStore()
        self.warehouse = warehouse or WarehouseClient(
            base_url=settings.warehouse_base_url,
            timeout=settings.warehouse_timeout,
        )
        self.resolver = QueryResolver(self.store, self.warehouse)
        self.router: APIRouter = build_router()
        logger.info("Gateway ready; warehouse at %s", self.warehouse.base_url)

    async def close(self) -> None:
        await self.warehouse.close()
