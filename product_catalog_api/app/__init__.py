"""
Application package initializer.

This package contains the main entrypoint for the API and all of its
submodules: ``core`` (settings, logging, errors), ``schemas``
(pydantic payloads), ``services`` (store, warehouse client, query
resolver) and ``api`` (versioned routers).
"""

from .main import app  # noqa: F401
