"""Display formatting for order rows."""

from __future__ import annotations

import time
from typing import Optional

from order_browser.config.constants import (
    ASSET_ICON_URL,
    DEFAULT_STATUS_COLOR,
    DIRECTION_COLORS,
    STATUS_COLORS,
)
from order_browser.data.order import status_category

_TIME_UNITS = (
    ("year", 365 * 24 * 3600),
    ("month", 30 * 24 * 3600),
    ("day", 24 * 3600),
    ("hour", 3600),
    ("minute", 60),
)


def status_color(status: str) -> str:
    return STATUS_COLORS.get(status_category(status), DEFAULT_STATUS_COLOR)


def direction_color(direction: str) -> str:
    return DIRECTION_COLORS.get(direction, DEFAULT_STATUS_COLOR)


def format_address(address: str, chars: int = 6) -> str:
    """Shorten an address to its head and tail, e.g. 1A2b3C...x8Y9z0."""
    if not address or len(address) <= chars * 2 + 3:
        return address or ""
    return f"{address[:chars]}...{address[-chars:]}"


def format_time_ago(block_time: Optional[int], now: Optional[float] = None) -> str:
    """Relative time of a block timestamp (seconds since epoch)."""
    if block_time is None:
        return "-"
    now = time.time() if now is None else now
    elapsed = int(now - block_time)
    if elapsed < 60:
        return "just now"
    for unit, seconds in _TIME_UNITS:
        count = elapsed // seconds
        if count >= 1:
            return f"{count} {unit}{'' if count == 1 else 's'} ago"
    return "just now"


def asset_icon_url(asset: str) -> str:
    return f"{ASSET_ICON_URL}/{asset}"
