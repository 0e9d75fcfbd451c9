"""Navigation event logger."""

from __future__ import annotations

import logging

from order_browser.logging.fetch_log import build_logger, get_fetch_logger


def get_nav_logger() -> logging.Logger:
    """Return configured navigation logger instance."""
    return build_logger("order_browser.nav", "NAV")


def set_log_level(level: str | int) -> None:
    """Apply one level to every order browser logger."""
    for logger in (get_fetch_logger(), get_nav_logger()):
        logger.setLevel(level)
