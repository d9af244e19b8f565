"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service starts with no configuration at all; the warehouse URL
defaults to the in-cluster name of the warehouse service.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Product Catalog API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Base URL of the external warehouse service.  Product info is
    # fetched from ``{warehouse_base_url}/api/products/{id}``.
    warehouse_base_url: str = os.getenv("WAREHOUSE_BASE_URL", "https://warehouse-service")

    # Seconds to wait for the warehouse before treating the call as
    # failed.  Covers both connect and read.
    warehouse_timeout: float = float(os.getenv("WAREHOUSE_TIMEOUT", "5"))

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8000"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# must be set before importing this module.
settings = Settings()
