"""Order table and pagination controls built from the current page and fetch result."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from order_browser.config.constants import ORDER_PATH, TRADE_CONTEXT, TRADE_PATH
from order_browser.data.order import Order
from order_browser.data.order_fetcher import FetchResult
from order_browser.pagination.links import NavTarget, next_target, page_target, previous_target
from order_browser.pagination.page_window import PageState
from order_browser.trading.pair_utils import (
    calculate_amount,
    calculate_price,
    get_base_asset_string,
    get_quote_asset_string,
    get_trading_direction,
    get_trading_pair_slug,
    get_trading_pair_string,
)
from order_browser.view.formatting import (
    asset_icon_url,
    direction_color,
    format_address,
    format_time_ago,
    status_color,
)

COLUMNS = ("Side", "Market", "Amount", "Price", "Source", "Status", "Time")
LOADING_TEXT = "Loading orders..."
EMPTY_TEXT = "No orders found."
GAP_TEXT = "..."


@dataclass(frozen=True)
class OrderRow:
    """Display values for one order."""

    direction: str
    direction_color: str
    market: str
    amount: str
    price: str
    base_icon: str
    quote_icon: str
    source: str
    status: str
    status_color: str
    time: str
    href: str
    title: str

    def cells(self) -> tuple[str, ...]:
        return (self.direction, self.market, self.amount, self.price, self.source, self.status, self.time)


def order_href(order: Order, context: Optional[str]) -> str:
    if context == TRADE_CONTEXT:
        return f"{TRADE_PATH}/{get_trading_pair_slug(order)}"
    return f"{ORDER_PATH}/{order.tx_hash}"


def build_row(order: Order, context: Optional[str] = None, now: Optional[float] = None) -> OrderRow:
    direction = get_trading_direction(order)
    return OrderRow(
        direction=direction,
        direction_color=direction_color(direction),
        market=get_trading_pair_string(order),
        amount=calculate_amount(order),
        price=calculate_price(order),
        base_icon=asset_icon_url(get_base_asset_string(order)),
        quote_icon=asset_icon_url(get_quote_asset_string(order)),
        source=format_address(order.source),
        status=order.status_category,
        status_color=status_color(order.status),
        time=format_time_ago(order.block_time, now=now),
        href=order_href(order, context),
        title=f"Order #{order.tx_index}",
    )


@dataclass(frozen=True)
class PageLink:
    """A numbered page link or a gap in the page list."""

    label: str
    target: Optional[NavTarget] = None
    current: bool = False

    @property
    def href(self) -> Optional[str]:
        return self.target.href if self.target else None

    @property
    def is_gap(self) -> bool:
        return self.target is None


@dataclass(frozen=True)
class PaginationControls:
    previous: Optional[NavTarget]
    next: Optional[NavTarget]
    pages: tuple[PageLink, ...]

    def render(self) -> str:
        parts = ["< Previous" if self.previous else "  --------"]
        for link in self.pages:
            if link.is_gap:
                parts.append(GAP_TEXT)
            elif link.current:
                parts.append(f"[{link.label}]")
            else:
                parts.append(link.label)
        parts.append("Next >" if self.next else "------")
        return "  ".join(parts)


def build_pagination(state: PageState) -> PaginationControls:
    status = state.status_filter
    pages = []
    for entry in state.window():
        if entry.is_gap:
            pages.append(PageLink(label=GAP_TEXT))
        else:
            pages.append(PageLink(label=str(entry.page), target=page_target(entry.page, status), current=entry.current))
    return PaginationControls(
        previous=previous_target(state.offset, state.current_page, status),
        next=next_target(state.offset, state.limit, state.total_results, state.current_page, status),
        pages=tuple(pages),
    )


class OrderListView:
    """Text rendering of one page of orders.

    While a fetch is outstanding only a loading line is shown, never the rows
    of a previous page. Failed and empty fetches both show the empty row, and
    pagination is only offered when there are rows.
    """

    def __init__(
        self,
        page_state: PageState,
        result: FetchResult,
        context: Optional[str] = None,
        now: Optional[float] = None,
    ) -> None:
        self.page_state = page_state
        self.result = result
        self.context = context
        self.now = now

    @property
    def is_loading(self) -> bool:
        return self.result.is_loading

    @property
    def rows(self) -> list[OrderRow]:
        if self.is_loading:
            return []
        return [build_row(order, self.context, self.now) for order in self.result.orders]

    @property
    def pagination(self) -> Optional[PaginationControls]:
        if self.is_loading or not self.result.orders:
            return None
        return build_pagination(self.page_state)

    def render(self) -> list[str]:
        if self.is_loading:
            return [LOADING_TEXT]

        rows = self.rows
        widths = _column_widths([row.cells() for row in rows])
        lines = [_format_cells(COLUMNS, widths), _format_cells(tuple("-" * w for w in widths), widths)]
        if not rows:
            lines.append(EMPTY_TEXT)
            return lines

        lines.extend(_format_cells(row.cells(), widths) for row in rows)
        pagination = self.pagination
        if pagination is not None:
            lines.append("")
            lines.append(pagination.render())
        return lines


def _column_widths(cells: Sequence[tuple[str, ...]]) -> list[int]:
    widths = [len(name) for name in COLUMNS]
    for row in cells:
        widths = [max(w, len(cell)) for w, cell in zip(widths, row)]
    return widths


def _format_cells(cells: Sequence[str], widths: Sequence[int]) -> str:
    return " | ".join(cell.ljust(width) for cell, width in zip(cells, widths)).rstrip()
