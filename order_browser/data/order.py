"""Order record model as returned by the orders endpoint."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from order_browser.config.constants import STATUS_SEPARATOR


@dataclass(frozen=True)
class Order:
    """Immutable order record; replaced wholesale on every page fetch."""

    tx_hash: str
    tx_index: int
    block_time: Optional[int]
    source: str
    status: str
    give_asset: str
    give_quantity: int
    get_asset: str
    get_quantity: int
    give_quantity_normalized: Optional[str] = None
    get_quantity_normalized: Optional[str] = None
    give_asset_info: Mapping[str, Any] = field(default_factory=dict)
    get_asset_info: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, raw: Any) -> "Order":
        """Build an order from one API record; raises ValueError if unusable."""
        if not isinstance(raw, Mapping):
            raise ValueError(f"order record must be an object, got {type(raw).__name__}")
        tx_hash = raw.get("tx_hash")
        if not tx_hash:
            raise ValueError("order record has no tx_hash")

        try:
            return cls(
                tx_hash=str(tx_hash),
                tx_index=int(raw.get("tx_index") or 0),
                block_time=_optional_int(raw.get("block_time")),
                source=str(raw.get("source") or ""),
                status=str(raw.get("status") or ""),
                give_asset=str(raw.get("give_asset") or ""),
                give_quantity=int(raw.get("give_quantity") or 0),
                get_asset=str(raw.get("get_asset") or ""),
                get_quantity=int(raw.get("get_quantity") or 0),
                give_quantity_normalized=_optional_str(raw.get("give_quantity_normalized")),
                get_quantity_normalized=_optional_str(raw.get("get_quantity_normalized")),
                give_asset_info=dict(raw.get("give_asset_info") or {}),
                get_asset_info=dict(raw.get("get_asset_info") or {}),
            )
        except (TypeError, ValueError, OverflowError) as exc:
            raise ValueError(f"order {tx_hash} has invalid fields: {exc}") from exc

    @property
    def status_category(self) -> str:
        return status_category(self.status)


def status_category(status: str) -> str:
    """Only the part before the separator is significant ("open:partial" -> "open")."""
    return (status or "").split(STATUS_SEPARATOR, 1)[0]


def _optional_int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    return int(value)


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)
