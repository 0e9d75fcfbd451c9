"""Coordinates page state, order fetching and the list view."""

from __future__ import annotations

import asyncio
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

from order_browser.config.constants import DEFAULT_STATUS, REQUEST_TIMEOUT_SECONDS
from order_browser.data.order_fetcher import FetchResult, OrderFetcher, RequestKey
from order_browser.logging.fetch_log import get_fetch_logger
from order_browser.logging.metrics import summarize_fetch
from order_browser.logging.nav_log import get_nav_logger
from order_browser.pagination.links import NavTarget, next_target, previous_target
from order_browser.pagination.page_window import PageState
from order_browser.view.order_list_view import OrderListView

DEFAULT_SETTINGS_PATH = Path(__file__).parent / "config" / "settings.yaml"


@dataclass
class BrowserConfig:
    """Explicit component inputs: data source, status filter and row context."""

    endpoint: str
    status: str = DEFAULT_STATUS
    context: Optional[str] = None
    request_timeout_seconds: float = REQUEST_TIMEOUT_SECONDS
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if not self.endpoint:
            raise ValueError("endpoint is required")
        self.status = self.status or DEFAULT_STATUS

    @classmethod
    def from_yaml(cls, path: str | Path = DEFAULT_SETTINGS_PATH, **overrides: Any) -> "BrowserConfig":
        """Load settings; ORDERS_ENDPOINT and non-None overrides take precedence."""
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        browser = data.get("browser") or {}
        http = data.get("http") or {}
        values: dict[str, Any] = {
            "endpoint": os.environ.get("ORDERS_ENDPOINT") or browser.get("endpoint", ""),
            "status": browser.get("status", DEFAULT_STATUS),
            "context": browser.get("context"),
            "request_timeout_seconds": float(http.get("request_timeout_seconds", REQUEST_TIMEOUT_SECONDS)),
            "log_level": (data.get("logging") or {}).get("level", "INFO"),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


class OrderBrowser:
    """Owns the single PageState/FetchResult pair behind the order list.

    Every navigation replaces the page state and schedules a fetch for the
    new (endpoint, status, offset) tuple; the view shows a loading line until
    the fetch for that tuple resolves.
    """

    def __init__(self, config: BrowserConfig, fetcher: Optional[OrderFetcher] = None, page: int = 1) -> None:
        self.config = config
        self.fetcher = fetcher or OrderFetcher(timeout=config.request_timeout_seconds)
        self.nav_logger = get_nav_logger()
        self._state = PageState(current_page=page, status_filter=config.status, limit=self.fetcher.limit)

    @property
    def request_key(self) -> RequestKey:
        return RequestKey(endpoint=self.config.endpoint, status=self._state.status_filter, offset=self._state.offset)

    @property
    def result(self) -> FetchResult:
        result = self.fetcher.result
        if result.key != self.request_key:
            return FetchResult.idle()
        return result

    @property
    def page_state(self) -> PageState:
        """Current state; total_results only comes from a resolved fetch for this page."""
        result = self.result
        if result.is_loading:
            return self._state
        return self._state.with_total(result.total_results)

    def load(self) -> asyncio.Task[FetchResult]:
        return self.fetcher.request(self.config.endpoint, self._state.status_filter, self._state.offset)

    def navigate(self, target: NavTarget) -> asyncio.Task[FetchResult]:
        self._state = PageState.from_query({"page": target.page, "status": target.status}, limit=self.fetcher.limit)
        self.nav_logger.info("navigate status=%s page=%d", self._state.status_filter, self._state.current_page)
        return self.load()

    def go_to_page(self, page: int) -> asyncio.Task[FetchResult]:
        self._state = self._state.with_page(page)
        self.nav_logger.info("navigate status=%s page=%d", self._state.status_filter, self._state.current_page)
        return self.load()

    def set_status(self, status: str) -> asyncio.Task[FetchResult]:
        self._state = self._state.with_status(status)
        self.nav_logger.info("status_change status=%s page=1", self._state.status_filter)
        return self.load()

    def next_page(self) -> Optional[asyncio.Task[FetchResult]]:
        state = self.page_state
        target = next_target(state.offset, state.limit, state.total_results, state.current_page, state.status_filter)
        if target is None:
            self.nav_logger.info("skip navigate reason=no_next_page page=%d", state.current_page)
            return None
        return self.navigate(target)

    def previous_page(self) -> Optional[asyncio.Task[FetchResult]]:
        state = self.page_state
        target = previous_target(state.offset, state.current_page, state.status_filter)
        if target is None:
            self.nav_logger.info("skip navigate reason=no_previous_page page=%d", state.current_page)
            return None
        return self.navigate(target)

    def refresh(self) -> asyncio.Task[FetchResult]:
        """Re-fetch the current page; the only recovery path after a failure."""
        if self.fetcher.current_key != self.request_key:
            return self.load()
        self.nav_logger.info("refresh status=%s page=%d", self._state.status_filter, self._state.current_page)
        return self.fetcher.refresh()

    def view(self, now: Optional[float] = None) -> OrderListView:
        return OrderListView(self.page_state, self.result, context=self.config.context, now=now)

    def render(self, now: Optional[float] = None) -> list[str]:
        return self.view(now=now).render()

    def summary(self) -> dict[str, int | str]:
        return summarize_fetch(self.fetcher.stats, self.page_state)

    async def shutdown(self) -> None:
        """Close the fetcher and flush loggers."""
        await self.fetcher.aclose()
        for logger in [self.nav_logger, get_fetch_logger()]:
            for handler in logger.handlers:
                handler.flush()
