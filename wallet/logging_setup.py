"""Logging configuration for the ``wallet`` package.

``configure_logging`` is called once by the entry point. Library modules only
call ``get_logger(__name__)`` and never attach handlers themselves.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

_PKG_LOGGER_NAME = "wallet"
_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
_CONFIGURED = False


def configure_logging(level: int | str | None = None, *, stream: IO[str] = sys.stderr) -> None:
    """Send ``wallet.*`` records to ``stream``; later calls are ignored.

    ``level`` falls back to ``WALLET_LOG_LEVEL``, then INFO.
    """
    global _CONFIGURED
    if _CONFIGURED:
        return

    level = level or os.getenv("WALLET_LOG_LEVEL") or "INFO"
    if isinstance(level, str):
        level = level.strip().upper()

    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(_FORMAT))

    logger = logging.getLogger(_PKG_LOGGER_NAME)
    logger.handlers = [h for h in logger.handlers if not isinstance(h, logging.NullHandler)]
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False

    _CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger, keeping the package logger silent until configured."""
    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if not _CONFIGURED and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)
