"""
Main entrypoint for the Product Catalog API.

This module assembles the FastAPI application: it sets up logging,
builds the :class:`Gateway` that owns the store, warehouse client and
resolver, registers error handlers and includes the versioned router.
The ``create_app`` function builds and configures the app, which is
then instantiated at module import time as ``app``, e.g.::

    uvicorn product_catalog_api.app.main:app --reload
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from .core.config import Settings, settings as default_settings
from .core.errors import RequestError
from .core.logging_config import setup_logging
from .gateway import Gateway
from .schemas.query import QueryErrorEntry, QueryResponse


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Close the gateway's outbound resources on shutdown."""
    yield
    logger.info("Shutting down; closing warehouse client")
    await app.state.gateway.close()


def create_app(settings: Optional[Settings] = None, gateway: Optional[Gateway] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Settings to use; defaults to the environment-derived
        ``settings`` instance.
    gateway : Optional[Gateway]
        A prebuilt gateway.  Tests pass one wired to fakes; normally a
        new gateway is built from ``settings``.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or (gateway.settings if gateway is not None else default_settings)
    setup_logging(settings)

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.gateway = gateway or Gateway(settings)

    app.include_router(app.state.gateway.router, prefix="/api/v1")

    @app.exception_handler(RequestError)
    async def request_error_handler(request: Request, exc: RequestError) -> JSONResponse:
        logger.info("Rejected request to %s: %s", request.url.path, exc.message)
        body = QueryResponse(
            data=None,
            errors=[QueryErrorEntry(message=exc.message, code=exc.code, path=exc.path)],
        )
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body.model_dump(mode="json"))

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
