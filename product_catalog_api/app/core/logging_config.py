"""
Logging setup for the catalog service.

``setup_logging`` installs one console handler (and, when
``settings.log_file`` is set, one file handler) on the root logger and
applies the configured level.  Handlers are tagged by name so repeated
calls, e.g. one ``create_app()`` per test, never stack duplicates,
while the level is re-applied every time.

Outside debug mode the HTTP client and server libraries are held at
WARNING or above: the warehouse client already logs each failed
lookup once, with the product id, and per-request access lines would
drown it.
"""

import logging
from pathlib import Path

from .config import Settings

CONSOLE_HANDLER_NAME = "catalog-console"
FILE_HANDLER_NAME = "catalog-file"

# Third-party loggers that only get through at WARNING unless debugging.
NOISY_LOGGERS = ("aiohttp", "uvicorn.access")

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(settings: Settings) -> None:
    """Configure the root logger from ``settings``."""
    root = logging.getLogger()
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    root.setLevel(level)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    installed = {handler.get_name() for handler in root.handlers}

    if CONSOLE_HANDLER_NAME not in installed:
        console_handler = logging.StreamHandler()
        console_handler.set_name(CONSOLE_HANDLER_NAME)
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)

    if settings.log_file and FILE_HANDLER_NAME not in installed:
        file_handler = logging.FileHandler(Path(settings.log_file).resolve(), encoding="utf-8")
        file_handler.set_name(FILE_HANDLER_NAME)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    library_level = level if settings.debug else max(level, logging.WARNING)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(library_level)
