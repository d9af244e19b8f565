"""
Query-graph endpoint for API v1.

``POST /query`` accepts an operation name, its arguments and a field
selection, converts the arguments into typed variants once and hands
the request to the gateway's :class:`QueryResolver`.

Resolution runs as its own task.  While it is pending the endpoint
watches the connection and cancels the task if the client goes away,
which in turn cancels any warehouse lookups still in flight.
"""

import asyncio
import logging

from fastapi import APIRouter, Depends, Request, Response

from product_catalog_api.app.api.deps import get_resolver
from product_catalog_api.app.schemas.query import QueryRequest, QueryRequestIn, QueryResponse
from product_catalog_api.app.services.query_resolver import QueryResolver

router = APIRouter()

logger = logging.getLogger(__name__)

# Seconds between checks for a disconnected client.
DISCONNECT_POLL_INTERVAL = 0.1

# Non-standard status used by nginx for "client closed request".
CLIENT_CLOSED_REQUEST = 499


@router.post("", response_model=QueryResponse)
async def run_query(
    payload: QueryRequestIn,
    request: Request,
    resolver: QueryResolver = Depends(get_resolver),
):
    """Resolve a query-graph request.

    Returns ``{"data": ..., "errors": [...]}``.  Malformed arguments and
    unknown fields produce HTTP 400 with ``data`` set to ``null``.
    Missing products and warehouse outages are reported in ``errors``
    alongside a 200 response.
    """
    query = QueryRequest.from_payload(payload)
    task = asyncio.create_task(resolver.resolve(query))
    try:
        while True:
            done, _ = await asyncio.wait({task}, timeout=DISCONNECT_POLL_INTERVAL)
            if done:
                return task.result()
            if await request.is_disconnected():
                task.cancel()
                # Let the cancellation reach the warehouse lookups before answering.
                await asyncio.wait({task})
                logger.info("Client disconnected; cancelled %s query", query.operation.value)
                return Response(status_code=CLIENT_CLOSED_REQUEST)
    except asyncio.CancelledError:
        task.cancel()
        raise
