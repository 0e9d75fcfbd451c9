"""Order list fetching with last-request-wins result tracking."""

from __future__ import annotations

import asyncio
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

import httpx

from order_browser.config.constants import DEFAULT_STATUS, ORDERS_PER_PAGE, REQUEST_TIMEOUT_SECONDS
from order_browser.data.order import Order
from order_browser.logging.fetch_log import get_fetch_logger


class FetchError(Exception):
    """Base class for failures caught at the fetch boundary."""

    reason = "fetch_error"


class NetworkFailure(FetchError):
    """Transport error, timeout or non-2xx response."""

    reason = "network_failure"


class MalformedResponse(FetchError, ValueError):
    """Body could not be read as {result: [...], result_count: n}."""

    reason = "malformed_response"


@dataclass(frozen=True)
class RequestKey:
    """Parameter tuple a request was issued for."""

    endpoint: str
    status: str
    offset: int


class FetchStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


@dataclass(frozen=True)
class FetchResult:
    """Outcome of the latest request; exactly one status is active."""

    status: FetchStatus
    key: Optional[RequestKey] = None
    orders: tuple[Order, ...] = ()
    total_results: int = 0
    error: Optional[str] = None

    @classmethod
    def idle(cls) -> "FetchResult":
        return cls(status=FetchStatus.IDLE)

    @classmethod
    def loading(cls, key: RequestKey) -> "FetchResult":
        return cls(status=FetchStatus.LOADING, key=key)

    @classmethod
    def loaded(cls, key: RequestKey, orders: tuple[Order, ...], total_results: int) -> "FetchResult":
        return cls(status=FetchStatus.LOADED, key=key, orders=orders, total_results=total_results)

    @classmethod
    def failed(cls, key: RequestKey, error: str) -> "FetchResult":
        return cls(status=FetchStatus.FAILED, key=key, error=error)

    @property
    def is_loading(self) -> bool:
        return self.status in (FetchStatus.IDLE, FetchStatus.LOADING)

    @property
    def is_empty(self) -> bool:
        """True for a failed fetch or a successful fetch with zero orders."""
        return not self.is_loading and not self.orders


@dataclass
class FetchStats:
    """Request lifecycle counters."""

    issued: int = 0
    completed: int = 0
    failed: int = 0
    discarded: int = 0


def build_query_params(key: RequestKey, limit: int = ORDERS_PER_PAGE) -> dict[str, str]:
    """Query parameters for one page; status is omitted for the "all" filter."""
    params = {"verbose": "true"}
    if key.status != DEFAULT_STATUS:
        params["status"] = key.status
    params["limit"] = str(limit)
    params["offset"] = str(key.offset)
    return params


def parse_orders_response(payload: Any) -> tuple[tuple[Order, ...], int]:
    """Extract (orders, result_count) from a decoded response body.

    A missing `result` is an empty page and a missing `result_count` is 0.
    """
    if not isinstance(payload, dict):
        raise MalformedResponse(f"expected a JSON object, got {type(payload).__name__}")

    records = payload.get("result")
    if records is None:
        records = []
    if not isinstance(records, list):
        raise MalformedResponse(f"result must be a list, got {type(records).__name__}")

    try:
        orders = tuple(Order.from_dict(record) for record in records)
    except ValueError as exc:
        raise MalformedResponse(str(exc)) from exc

    count = payload.get("result_count")
    if count is None:
        return orders, 0
    if (
        isinstance(count, bool)
        or not isinstance(count, (int, float))
        or not math.isfinite(count)
        or count != int(count)
    ):
        raise MalformedResponse(f"result_count must be an integer, got {count!r}")
    return orders, max(0, int(count))


class OrderFetcher:
    """Issues page requests and keeps only the result of the latest parameter tuple.

    Every request is tagged with the RequestKey it was issued for. When a
    response arrives its key is compared with the current key and the
    response is dropped on mismatch, whatever order responses complete in.
    Superseded requests are left to finish and are only cancelled by aclose().
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        limit: int = ORDERS_PER_PAGE,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
    ) -> None:
        self.limit = limit
        self.timeout = timeout
        self.stats = FetchStats()
        self.logger = get_fetch_logger()
        self._client = client
        self._owns_client = client is None
        self._key: Optional[RequestKey] = None
        self._task: Optional[asyncio.Task[FetchResult]] = None
        self._pending: set[asyncio.Task[FetchResult]] = set()
        self._result = FetchResult.idle()

    @property
    def result(self) -> FetchResult:
        return self._result

    @property
    def current_key(self) -> Optional[RequestKey]:
        return self._key

    def request(self, endpoint: str, status: str, offset: int) -> asyncio.Task[FetchResult]:
        """Switch to a parameter tuple and schedule its fetch.

        Must be called from a running event loop. A repeated call for the
        tuple already in flight returns the pending task.
        """
        key = RequestKey(endpoint=endpoint, status=status or DEFAULT_STATUS, offset=max(0, offset))
        if key == self._key and self._in_flight():
            return self._task
        return self._issue(key)

    def refresh(self) -> asyncio.Task[FetchResult]:
        """Fetch the current tuple again, e.g. after a failure."""
        if self._key is None:
            raise RuntimeError("refresh() called before any request")
        if self._in_flight():
            return self._task
        return self._issue(self._key)

    async def aclose(self) -> None:
        """Cancel every request still running, superseded ones included, then close."""
        pending = list(self._pending)
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "OrderFetcher":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    def _in_flight(self) -> bool:
        return self._task is not None and not self._task.done()

    def _issue(self, key: RequestKey) -> asyncio.Task[FetchResult]:
        self._key = key
        self._result = FetchResult.loading(key)
        self.stats.issued += 1
        self.logger.info(
            "request endpoint=%s status=%s offset=%d limit=%d",
            key.endpoint,
            key.status,
            key.offset,
            self.limit,
        )
        self._task = asyncio.create_task(self._run(key))
        self._pending.add(self._task)
        self._task.add_done_callback(self._pending.discard)
        return self._task

    async def _run(self, key: RequestKey) -> FetchResult:
        """Fetch one page and hand the tagged outcome to _resolve."""
        try:
            orders, total = await self._get(key)
            outcome = FetchResult.loaded(key, orders, total)
        except FetchError as exc:
            outcome = FetchResult.failed(key, f"{exc.reason}: {exc}")
        except Exception as exc:
            outcome = FetchResult.failed(key, f"{FetchError.reason}: {type(exc).__name__}: {exc}")
        return self._resolve(outcome)

    def _resolve(self, outcome: FetchResult) -> FetchResult:
        if outcome.key != self._key:
            self.stats.discarded += 1
            self.logger.info(
                "discard stale status=%s offset=%d current_status=%s current_offset=%d",
                outcome.key.status,
                outcome.key.offset,
                self._key.status if self._key else "-",
                self._key.offset if self._key else -1,
            )
            return outcome

        if outcome.status is FetchStatus.FAILED:
            self.stats.failed += 1
            self.logger.warning(
                "failed status=%s offset=%d reason=%s",
                outcome.key.status,
                outcome.key.offset,
                outcome.error,
            )
        else:
            self.stats.completed += 1
            self.logger.info(
                "loaded status=%s offset=%d orders=%d total=%d",
                outcome.key.status,
                outcome.key.offset,
                len(outcome.orders),
                outcome.total_results,
            )
        self._result = outcome
        return outcome

    async def _get(self, key: RequestKey) -> tuple[tuple[Order, ...], int]:
        client = self._ensure_client()
        try:
            response = await client.get(key.endpoint, params=build_query_params(key, self.limit), timeout=self.timeout)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise NetworkFailure(str(exc) or type(exc).__name__) from exc

        if not response.is_success:
            raise NetworkFailure(f"HTTP {response.status_code}")

        try:
            payload = response.json()
        except ValueError as exc:
            raise MalformedResponse(f"body is not JSON: {exc}") from exc
        return parse_orders_response(payload)

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client
