"""Project-wide constants for the order browser."""

from __future__ import annotations

# Paging
ORDERS_PER_PAGE = 100
PAGE_WINDOW_RADIUS = 2

# "all" means no status filter is sent to the endpoint
DEFAULT_STATUS = "all"
STATUS_SEPARATOR = ":"

# Row navigation
TRADE_CONTEXT = "trade"
TRADE_PATH = "/trade"
ORDER_PATH = "/orders"

# Badge colors
STATUS_COLORS = {
    "open": "lime",
    "filled": "sky",
    "expired": "orange",
    "cancelled": "red",
}
DEFAULT_STATUS_COLOR = "zinc"
DIRECTION_COLORS = {"buy": "green", "sell": "red"}

# Assets that are preferred as the quote side of a pair, best first
QUOTE_ASSET_PRIORITY = ("BTC", "XCP", "PEPECASH", "BITCRYSTALS")
ASSET_ICON_URL = "https://app.xcp.io/img/icon"

# Precision controls for quantity rendering
QUANTITY_DECIMALS = 8
DIVISIBLE_UNIT = 10**QUANTITY_DECIMALS

# HTTP
REQUEST_TIMEOUT_SECONDS = 10.0
