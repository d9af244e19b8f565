"""Test doubles for the warehouse collaborator.

``FakeWarehouseClient`` stands in for
:class:`~product_catalog_api.app.services.warehouse_client.WarehouseClient`
without any network I/O.  ``FakeSession`` and ``FakeResponse`` stand in
for an ``aiohttp.ClientSession`` so the real client can be exercised
without a server.
"""

from __future__ import annotations

import asyncio
import json
from typing import Any, Dict, List, Optional, Set

from product_catalog_api.app.services.warehouse_client import WarehouseFailure, WarehouseResult


class FakeWarehouseClient:

    def __init__(
        self,
        payloads: Optional[Dict[int, Any]] = None,
        failing: Optional[Set[int]] = None,
        delay: float = 0.0,
    ) -> None:
        self.base_url = "http://warehouse.test"
        self.payloads = payloads or {}
        self.failing = failing or set()
        self.delay = delay
        self.calls: List[int] = []
        self.cancelled: List[int] = []
        self.started = asyncio.Event()
        self.block: Optional[asyncio.Event] = None
        self.in_flight = 0
        self.max_in_flight = 0
        self.closed = False

    async def fetch_info(self, product_id: int) -> WarehouseResult:
        self.calls.append(product_id)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        self.started.set()
        try:
            if self.block is not None:
                await self.block.wait()
            if self.delay:
                await asyncio.sleep(self.delay)
        except asyncio.CancelledError:
            self.cancelled.append(product_id)
            raise
        finally:
            self.in_flight -= 1
        if product_id in self.failing:
            return None, WarehouseFailure(product_id, None, "Warehouse unreachable: connection refused")
        return self.payloads.get(product_id, {"product_id": product_id, "shelf": "A1"}), None

    async def close(self) -> None:
        self.closed = True


class FakeResponse:

    def __init__(
        self,
        status: int,
        body: Any = None,
        content_type: str = "application/json",
        delay: float = 0.0,
    ) -> None:
        self.status = status
        self.content_type = content_type
        self.delay = delay
        if body is None:
            self._body = ""
        elif isinstance(body, str):
            self._body = body
        else:
            self._body = json.dumps(body)

    async def __aenter__(self) -> FakeResponse:
        if self.delay:
            await asyncio.sleep(self.delay)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    async def text(self) -> str:
        return self._body


class FakeSession:
    """Stand-in for ``aiohttp.ClientSession`` recording GET calls."""

    def __init__(self, response: Optional[FakeResponse] = None, error: Optional[BaseException] = None) -> None:
        self.response = response
        self.error = error
        self.requests: List[Dict[str, Any]] = []
        self.closed = False

    def get(self, url: str, timeout: Any = None) -> FakeResponse:
        self.requests.append({"url": url, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response

    async def close(self) -> None:
        self.closed = True
