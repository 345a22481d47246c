"""Logging setup for docx_replace.

Modules call ``get_logger(__name__)``; the CLI's ``--verbose`` flag calls
``set_verbose`` to drop every ``docx_replace.*`` logger to DEBUG.
"""
from __future__ import annotations

import logging
from typing import Optional

_DEFAULT_LEVEL = logging.INFO
_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

PACKAGE_LOGGER = "docx_replace"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-level logger with default configuration applied."""
    logger = logging.getLogger(name)
    if not logging.getLogger().handlers:
        logging.basicConfig(level=_DEFAULT_LEVEL, format=_FORMAT)
    return logger


def set_verbose(enabled: bool = True) -> None:
    """Switch the package loggers between DEBUG and the default level."""
    logging.getLogger(PACKAGE_LOGGER).setLevel(logging.DEBUG if enabled else _DEFAULT_LEVEL)
