from __future__ import annotations

from typing import Any

import pytest

ENDPOINT = "https://api.example.test/v2/orders"


def make_order_record(tx_index: int = 1, **overrides: Any) -> dict[str, Any]:
    """API-shaped order: gives 1 XCP for 50 PEPECASH (a PEPECASH/XCP buy)."""
    record = {
        "tx_index": tx_index,
        "tx_hash": f"{tx_index:064x}",
        "block_time": 1_700_000_000,
        "source": "1CounterpartyXXXXXXXXXXXXXXXUWLpVr",
        "status": "open",
        "give_asset": "XCP",
        "give_quantity": 100_000_000,
        "get_asset": "PEPECASH",
        "get_quantity": 5_000_000_000,
        "give_remaining": 100_000_000,
        "get_remaining": 5_000_000_000,
        "give_quantity_normalized": "1.00000000",
        "get_quantity_normalized": "50.00000000",
        "give_asset_info": {"divisible": True},
        "get_asset_info": {"divisible": True},
    }
    record.update(overrides)
    return record


def make_payload(count: int, start_index: int = 1, total: int | None = None) -> dict[str, Any]:
    return {
        "result": [make_order_record(tx_index=start_index + i) for i in range(count)],
        "result_count": count if total is None else total,
    }


@pytest.fixture
def order_record() -> dict[str, Any]:
    return make_order_record()
