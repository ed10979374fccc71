"""Adapter startup and delegation logger."""

from __future__ import annotations

import logging


def get_adapter_logger() -> logging.Logger:
    """Return configured adapter logger instance."""
    logger = logging.getLogger("paper_exchange.adapter")
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("%(asctime)s | ADAPTER | %(levelname)s | %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
    return logger
