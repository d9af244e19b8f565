"""
Top‑level router for version 1 of the API.

This is the gateway's routing table: fixed REST paths go to the
product handlers, the query-graph endpoint goes to the resolver, and
``/info`` describes the running service.  ``build_router`` assembles a
fresh table; each :class:`~product_catalog_api.app.gateway.Gateway`
builds and keeps its own.
"""

from fastapi import APIRouter

from .endpoints import info, products, query


def build_router() -> APIRouter:
    router = APIRouter()
    router.include_router(products.router, prefix="/products", tags=["products"])
    router.include_router(query.router, prefix="/query", tags=["query"])
    router.include_router(info.router, prefix="/info", tags=["info"])
    return router
