"""Order fetch event logger."""

from __future__ import annotations

import logging


def build_logger(name: str, label: str) -> logging.Logger:
    """Return a named logger with a single labelled stream handler."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(f"%(asctime)s | {label} | %(levelname)s | %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
    return logger


def get_fetch_logger() -> logging.Logger:
    """Return configured fetch logger instance."""
    return build_logger("order_browser.fetch", "FETCH")
