"""Trading pair helpers deriving market, side, amount and price from an order."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Mapping

from order_browser.config.constants import DIVISIBLE_UNIT, QUANTITY_DECIMALS, QUOTE_ASSET_PRIORITY
from order_browser.data.order import Order

BUY = "buy"
SELL = "sell"


def _asset_rank(asset: str) -> int:
    try:
        return QUOTE_ASSET_PRIORITY.index(asset)
    except ValueError:
        return len(QUOTE_ASSET_PRIORITY)


def get_quote_asset(order: Order) -> str:
    """Quote side of the pair: the higher priority asset, else alphabetical first."""
    give, get = order.give_asset, order.get_asset
    return min(give, get, key=lambda asset: (_asset_rank(asset), asset))


def get_base_asset(order: Order) -> str:
    quote = get_quote_asset(order)
    return order.get_asset if quote == order.give_asset else order.give_asset


def get_trading_direction(order: Order) -> str:
    """An order paying the quote asset buys the base asset."""
    if order.give_asset == order.get_asset:
        return SELL
    return BUY if order.give_asset == get_quote_asset(order) else SELL


def _display_name(asset: str, info: Mapping[str, Any]) -> str:
    return str(info.get("asset_longname") or asset)


def _info_for(order: Order, asset: str) -> Mapping[str, Any]:
    return order.give_asset_info if asset == order.give_asset else order.get_asset_info


def get_base_asset_string(order: Order) -> str:
    base = get_base_asset(order)
    return _display_name(base, _info_for(order, base))


def get_quote_asset_string(order: Order) -> str:
    quote = get_quote_asset(order)
    return _display_name(quote, _info_for(order, quote))


def get_trading_pair_string(order: Order) -> str:
    return f"{get_base_asset_string(order)}/{get_quote_asset_string(order)}"


def get_trading_pair_slug(order: Order) -> str:
    return f"{get_base_asset(order)}_{get_quote_asset(order)}"


def _normalized(quantity: int, normalized: str | None, info: Mapping[str, Any]) -> Decimal:
    if normalized is not None:
        try:
            value = Decimal(normalized)
        except InvalidOperation:
            value = None
        if value is not None and value.is_finite():
            return value
    if info.get("divisible", True):
        return Decimal(quantity) / DIVISIBLE_UNIT
    return Decimal(quantity)


def _give_normalized(order: Order) -> Decimal:
    return _normalized(order.give_quantity, order.give_quantity_normalized, order.give_asset_info)


def _get_normalized(order: Order) -> Decimal:
    return _normalized(order.get_quantity, order.get_quantity_normalized, order.get_asset_info)


def _base_and_quote_quantities(order: Order) -> tuple[Decimal, Decimal]:
    if get_trading_direction(order) == BUY:
        return _get_normalized(order), _give_normalized(order)
    return _give_normalized(order), _get_normalized(order)


def format_quantity(value: Decimal) -> str:
    """Fixed-point rendering with at most 8 decimals and no trailing zeros."""
    text = f"{value.quantize(Decimal(1).scaleb(-QUANTITY_DECIMALS)):f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text or "0"


def calculate_amount(order: Order) -> str:
    """Base asset quantity of the order."""
    base_qty, _ = _base_and_quote_quantities(order)
    return format_quantity(base_qty)


def calculate_price(order: Order) -> str:
    """Quote asset paid per unit of base asset."""
    base_qty, quote_qty = _base_and_quote_quantities(order)
    if base_qty == 0:
        return "0"
    return format_quantity(quote_qty / base_qty)
