"""Logging configuration for orderdesk.

Modules log through ``logging.getLogger(__name__)``; this is the single
place that attaches a handler and picks the level.
"""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s: %(message)s"


def configure_logging(level: str = "WARNING") -> None:
    """Send ``orderdesk.*`` records to stderr at *level*."""
    logger = logging.getLogger("orderdesk")
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
