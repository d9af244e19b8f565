"""Entry point for the Product Catalog API.

Launches the FastAPI application with Uvicorn.  Host, port and log
level are read from the application settings, which in turn come from
environment variables (``HOST``, ``PORT``, ``LOG_LEVEL``, see
``product_catalog_api/app/core/config.py``).

Usage:
    python run.py
"""
import asyncio

from uvicorn import Config, Server

from product_catalog_api.app.core.config import settings
from product_catalog_api.app.main import app


async def main() -> None:
    """Serve the API until interrupted."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass
