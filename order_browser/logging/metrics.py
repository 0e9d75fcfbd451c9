"""Run summary helpers."""

from __future__ import annotations

from dataclasses import asdict

from order_browser.data.order_fetcher import FetchStats
from order_browser.pagination.page_window import PageState


def summarize_fetch(stats: FetchStats, page_state: PageState) -> dict[str, int | str]:
    """Build a flat snapshot of request counters and the current page position."""
    base: dict[str, int | str] = {
        "status_filter": page_state.status_filter,
        "current_page": page_state.current_page,
        "total_pages": page_state.total_pages,
        "total_results": page_state.total_results,
    }
    base.update({f"requests_{k}": int(v) for k, v in asdict(stats).items()})
    return base
