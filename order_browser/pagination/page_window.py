"""Page arithmetic and the truncated page-number window."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from math import ceil
from typing import Mapping, Optional

from order_browser.config.constants import DEFAULT_STATUS, ORDERS_PER_PAGE, PAGE_WINDOW_RADIUS


class EntryKind(str, Enum):
    NUMBER = "number"
    GAP = "gap"


@dataclass(frozen=True)
class WindowEntry:
    """One slot of the pagination list: a page number or a gap marker."""

    kind: EntryKind
    page: Optional[int] = None
    current: bool = False

    @property
    def is_gap(self) -> bool:
        return self.kind is EntryKind.GAP


def compute_offset(page: int, limit: int) -> int:
    """Map a 1-indexed page to a record offset; pages below 1 count as page 1."""
    return (max(1, page) - 1) * limit


def compute_total_pages(total_results: int, limit: int) -> int:
    """Number of pages needed for total_results; 0 results means 0 pages."""
    if limit <= 0:
        raise ValueError(f"limit must be positive, got {limit}")
    return ceil(max(0, total_results) / limit)


def compute_visible_window(current_page: int, total_pages: int, radius: int = PAGE_WINDOW_RADIUS) -> list[WindowEntry]:
    """Build the page list around current_page with the first/last page and gaps.

    Page 1 and the last page are always reachable. A gap marker is only
    inserted when at least one page is skipped, so page 1 sits directly next
    to page 2 without a gap in between.
    """
    if total_pages <= 0:
        return []

    anchor = min(max(1, current_page), total_pages)
    start = max(1, anchor - radius)
    end = min(total_pages, anchor + radius)

    entries = [_number(page, current_page) for page in range(start, end + 1)]

    if start > 1:
        head = [_number(1, current_page)]
        if start > 2:
            head.append(WindowEntry(kind=EntryKind.GAP))
        entries = head + entries

    if end < total_pages:
        if end < total_pages - 1:
            entries.append(WindowEntry(kind=EntryKind.GAP))
        entries.append(_number(total_pages, current_page))

    return entries


def _number(page: int, current_page: int) -> WindowEntry:
    return WindowEntry(kind=EntryKind.NUMBER, page=page, current=page == current_page)


def parse_page(value: object) -> int:
    """Parse a page query value; anything unusable or below 1 becomes 1."""
    try:
        page = int(str(value).strip())
    except (TypeError, ValueError):
        return 1
    return max(1, page)


@dataclass(frozen=True)
class PageState:
    """Current page position; offset and total_pages are always derived."""

    current_page: int = 1
    status_filter: str = DEFAULT_STATUS
    limit: int = ORDERS_PER_PAGE
    total_results: int = 0

    def __post_init__(self) -> None:
        if self.limit <= 0:
            raise ValueError(f"limit must be positive, got {self.limit}")
        if self.current_page < 1:
            object.__setattr__(self, "current_page", 1)
        if self.total_results < 0:
            object.__setattr__(self, "total_results", 0)
        if not self.status_filter:
            object.__setattr__(self, "status_filter", DEFAULT_STATUS)

    @classmethod
    def from_query(cls, query: Mapping[str, object], limit: int = ORDERS_PER_PAGE) -> "PageState":
        """Build a state from navigation query parameters (page, status)."""
        status = query.get("status") or DEFAULT_STATUS
        return cls(current_page=parse_page(query.get("page", 1)), status_filter=str(status), limit=limit)

    @property
    def offset(self) -> int:
        return compute_offset(self.current_page, self.limit)

    @property
    def total_pages(self) -> int:
        return compute_total_pages(self.total_results, self.limit)

    def with_page(self, page: int) -> "PageState":
        return replace(self, current_page=max(1, page))

    def with_status(self, status: str) -> "PageState":
        """Switch the status filter; a new filter always starts at page 1."""
        return replace(self, status_filter=status or DEFAULT_STATUS, current_page=1)

    def with_total(self, total_results: int) -> "PageState":
        return replace(self, total_results=max(0, total_results))

    def window(self, radius: int = PAGE_WINDOW_RADIUS) -> list[WindowEntry]:
        return compute_visible_window(self.current_page, self.total_pages, radius)
