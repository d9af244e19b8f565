"""
FastAPI dependencies resolving the gateway's collaborators.

Handlers declare what they need (``store = Depends(get_store)``) and
receive the instances owned by the application's :class:`Gateway`.
Tests swap collaborators by building the app with their own gateway.
"""

from fastapi import Request

from product_catalog_api.app.gateway import Gateway
from product_catalog_api.app.services.product_store import ProductStore
from product_catalog_api.app.services.query_resolver import QueryResolver


def get_gateway(request: Request) -> Gateway:
    return request.app.state.gateway


def get_store(request: Request) -> ProductStore:
    return get_gateway(request).store


def get_resolver(request: Request) -> QueryResolver:
    return get_gateway(request).resolver
