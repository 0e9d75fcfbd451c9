from __future__ import annotations

import pytest

from order_browser.data.order import Order
from tests.conftest import make_order_record


def test_from_dict(order_record):
    order = Order.from_dict(order_record)
    assert order.tx_index == 1
    assert order.tx_hash == order_record["tx_hash"]
    assert order.block_time == 1_700_000_000
    assert order.give_asset == "XCP"
    assert order.get_quantity_normalized == "50.00000000"
    assert order.source == order_record["source"]


def test_from_dict_defaults_optional_fields():
    order = Order.from_dict({"tx_hash": "abc"})
    assert order.tx_index == 0
    assert order.block_time is None
    assert order.status == ""
    assert order.give_quantity_normalized is None
    assert order.give_asset_info == {}


@pytest.mark.parametrize("raw", [None, "abc", [], {"tx_index": 1}, {"tx_hash": ""}])
def test_from_dict_rejects_unusable_records(raw):
    with pytest.raises(ValueError):
        Order.from_dict(raw)


def test_from_dict_rejects_bad_numbers():
    with pytest.raises(ValueError):
        Order.from_dict(make_order_record(give_quantity="lots"))


@pytest.mark.parametrize("field", ["tx_index", "block_time", "give_quantity"])
@pytest.mark.parametrize("value", [float("inf"), float("nan")])
def test_from_dict_rejects_non_finite_numbers(field, value):
    with pytest.raises(ValueError):
        Order.from_dict(make_order_record(**{field: value}))


@pytest.mark.parametrize("status,category", [("open", "open"), ("open:partial", "open"), ("filled", "filled"), ("", "")])
def test_status_category(status, category):
    assert Order.from_dict(make_order_record(status=status)).status_category == category


def test_orders_are_immutable(order_record):
    order = Order.from_dict(order_record)
    with pytest.raises(AttributeError):
        order.status = "filled"
