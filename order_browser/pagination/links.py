"""Navigation targets for previous/next/specific pages."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from urllib.parse import parse_qs, urlencode, urlsplit

from order_browser.config.constants import DEFAULT_STATUS
from order_browser.pagination.page_window import parse_page


@dataclass(frozen=True)
class NavTarget:
    """Query-string target carrying the status filter and the 1-indexed page."""

    status: str
    page: int

    @property
    def href(self) -> str:
        return "?" + urlencode({"status": self.status, "page": self.page})

    @classmethod
    def parse(cls, href: str) -> "NavTarget":
        """Parse an href produced by `href`; missing values fall back to defaults."""
        query = parse_qs(urlsplit(href).query)
        status = query.get("status", [DEFAULT_STATUS])[0] or DEFAULT_STATUS
        page = parse_page(query.get("page", ["1"])[0])
        return cls(status=status, page=page)


def next_target(offset: int, limit: int, total_results: int, current_page: int, status: str) -> Optional[NavTarget]:
    """Target for the following page, or None when this is the last one."""
    if offset + limit >= total_results:
        return None
    return NavTarget(status=status, page=current_page + 1)


def previous_target(offset: int, current_page: int, status: str) -> Optional[NavTarget]:
    """Target for the preceding page, or None on the first page."""
    if offset <= 0:
        return None
    return NavTarget(status=status, page=max(current_page - 1, 1))


def page_target(page: int, status: str) -> NavTarget:
    # Bounds come from the page window; no validation here.
    return NavTarget(status=status, page=page)
