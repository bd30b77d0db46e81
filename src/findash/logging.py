"""Package logger.

Modules either import ``logger`` from here or create their own child with
``logging.getLogger(__name__)``; both end up under the ``findash`` tree.
"""
from __future__ import annotations
import logging
import sys

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger("findash")


def setup_logging(level: str | None = None) -> None:
    """Attach a stdout handler to the ``findash`` logger (idempotent)."""
    if level is None:
        from findash.config import settings
        level = settings.LOG_LEVEL

    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    if not any(getattr(h, "_findash", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._findash = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
