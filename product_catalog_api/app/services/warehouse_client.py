"""Warehouse service client.

The warehouse is an external microservice that knows about stock and
storage details for products.  This module wraps its single endpoint,
``GET /api/products/{id}``, with an ``aiohttp`` session.  Lookups are
plain coroutines on the event loop: any number of them can be in
flight at once without borrowing threads from a shared pool, and
cancelling the awaiting task aborts the HTTP request itself.

An unreachable or misbehaving warehouse is a normal outcome, not an
exceptional one: :meth:`WarehouseClient.fetch_info` never raises for
transport or HTTP problems and instead returns a ``(payload, failure)``
tuple in which exactly one side is set.  Any status outside 2xx counts
as a failure.  Callers decide whether to degrade (drop the supplement)
or report the failure next to otherwise valid data.

The payload is treated as opaque.  JSON bodies are decoded; anything
else is returned as text.  Nothing in it is ever used to override the
catalog's own name, price or quantity.
"""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Any, Optional, Tuple

import aiohttp


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WarehouseFailure:
    """Describes why supplementary info for a product is unavailable.

    Attributes:
        product_id: The product the info was requested for.
        status_code: HTTP status returned by the warehouse, or ``None``
            when no response was received (timeout, refused connection).
        message: Human-readable reason.
    """

    product_id: int
    status_code: Optional[int]
    message: str


WarehouseResult = Tuple[Optional[Any], Optional[WarehouseFailure]]


class WarehouseClient:
    """Client for the external warehouse service."""

    def __init__(
        self,
        *,
        base_url: str,
        timeout: float = 5.0,
        session: Optional[aiohttp.ClientSession] = None,
    ) -> None:
        """Initialise the client.

        Args:
            base_url: Base URL of the warehouse, e.g.
                ``https://warehouse-service``.
            timeout: Total seconds allowed per lookup before it counts
                as failed.
            session: Optional aiohttp session.  If not supplied one is
                opened on first use, inside the running event loop.
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._session = session

    def product_url(self, product_id: int) -> str:
        return f"{self.base_url}/api/products/{product_id}"

    async def fetch_info(self, product_id: int) -> WarehouseResult:
        """Fetch warehouse info for a product.

        Returns ``(payload, None)`` on a 2xx response and
        ``(None, WarehouseFailure)`` on any other status or transport
        error.  Cancellation is not swallowed.
        """
        url = self.product_url(product_id)
        try:
            logger.debug("Fetching warehouse info from %s", url)
            async with self._get_session().get(url, timeout=self.timeout) as response:
                if not 200 <= response.status < 300:
                    logger.warning("Warehouse returned %s for product %s", response.status, product_id)
                    return None, WarehouseFailure(
                        product_id, response.status, f"Warehouse responded with status {response.status}"
                    )
                return await self._decode(response), None
        except asyncio.TimeoutError:
            logger.warning("Warehouse request for product %s timed out", product_id)
            return None, WarehouseFailure(product_id, None, "Warehouse unreachable: request timed out")
        except aiohttp.ClientError as exc:
            logger.warning("Warehouse request for product %s failed: %s", product_id, exc)
            return None, WarehouseFailure(product_id, None, f"Warehouse unreachable: {exc}")

    async def close(self) -> None:
        if self._session is not None and not self._session.closed:
            await self._session.close()

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
        return self._session

    @staticmethod
    async def _decode(response: aiohttp.ClientResponse) -> Any:
        text = await response.text()
        if not text:
            return None
        if "json" in response.content_type:
            try:
                return json.loads(text)
            except ValueError:
                # Declared JSON but is not; keep the raw text.
                pass
        return text
