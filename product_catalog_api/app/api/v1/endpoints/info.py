"""
Information endpoint for API v1.

Returns the service name and version together with the number of
stored products and the warehouse the gateway talks to.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends

from product_catalog_api.app.api.deps import get_gateway
from product_catalog_api.app.gateway import Gateway

router = APIRouter()


@router.get("", response_model=Dict[str, Any])
async def get_info(gateway: Gateway = Depends(get_gateway)) -> Dict[str, Any]:
    return {
        "name": gateway.settings.project_name,
        "version": gateway.settings.api_version,
        "products": gateway.store.count(),
        "warehouse_url": gateway.warehouse.base_url,
    }
