"""Logging configuration helpers for the attempt client."""

from __future__ import annotations

import logging
from logging import Logger


def configure_logging(verbose: bool = False) -> Logger:
    """Configure basic logging for the application and return the app logger."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    return logging.getLogger("attempt_app")
