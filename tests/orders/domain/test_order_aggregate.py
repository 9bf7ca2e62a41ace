"""Tests for the Order aggregate: placement, totals and status updates."""

import re

import pytest
from protean.exceptions import ValidationError

from storefront.order.events import OrderPlaced, OrderStatusChanged
from storefront.order.order import Order, OrderStatus

LINES = [
    {"product_id": "p-kurta", "name": "Block Print Kurta", "price": 500.0, "quantity": 2},
    {"product_id": "p-tea", "name": "Rose Tea", "price": 300.0, "quantity": 1},
]


def _place(**overrides):
    fields = {"user_id": "user-1", "lines": LINES, "address_id": "addr-1", "payment_id": "pay-1"}
    fields.update(overrides)
    return Order.place(**fields)


class TestPlace:
    def test_total_defaults_to_line_total(self):
        order = _place()
        assert order.total_amount == 1300.0
        assert order.status == OrderStatus.CONFIRMED.value

    def test_matching_total_accepted(self):
        assert _place(total_amount=1300.0).total_amount == 1300.0

    def test_mismatched_total_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _place(total_amount=1200.0)
        assert "total_amount" in exc.value.messages

    def test_empty_order_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _place(lines=[])
        assert "products" in exc.value.messages

    def test_quantity_defaults_to_one(self):
        order = _place(lines=[{"product_id": "p1", "name": "Rose Tea", "price": 300.0}])
        assert order.lines[0].quantity == 1
        assert order.total_amount == 300.0

    def test_zero_quantity_rejected(self):
        with pytest.raises(ValidationError):
            _place(lines=[{"product_id": "p1", "name": "Rose Tea", "price": 300.0, "quantity": 0}])

    def test_order_number_format(self):
        assert re.fullmatch(r"ORD-[0-9A-F]{12}", _place().order_number)

    def test_given_order_number_kept(self):
        assert _place(order_number="ORD-CUSTOM").order_number == "ORD-CUSTOM"

    def test_lines_are_snapshots(self):
        lines = [dict(line) for line in LINES]
        order = _place(lines=lines)
        lines[0]["price"] = 1.0
        assert order.lines[0].price == 500.0

    def test_raises_order_placed(self):
        event = _place()._events[-1]
        assert isinstance(event, OrderPlaced)
        assert event.item_count == 3
        assert event.total_amount == 1300.0

    def test_as_dict_products(self):
        products = _place().as_dict()["products"]
        assert [p["product_id"] for p in products] == ["p-kurta", "p-tea"]


class TestUpdateStatus:
    def test_permissive_by_default(self):
        order = _place()
        order.update_status("delivered")
        order.update_status("confirmed")
        assert order.status == "confirmed"

    def test_raises_status_changed(self):
        order = _place()
        order.update_status("shipped")
        event = order._events[-1]
        assert isinstance(event, OrderStatusChanged)
        assert (event.previous_status, event.new_status) == ("confirmed", "shipped")

    def test_unknown_status_always_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _place().update_status("lost")
        assert "status" in exc.value.messages

    @pytest.mark.parametrize(
        "path",
        [["shipped", "delivered"], ["cancelled"], ["shipped", "cancelled"]],
    )
    def test_strict_allowed_paths(self, path):
        order = _place()
        for status in path:
            order.update_status(status, strict=True)
        assert order.status == path[-1]

    @pytest.mark.parametrize(
        "path",
        [["delivered"], ["shipped", "confirmed"], ["cancelled", "shipped"], ["shipped", "delivered", "cancelled"]],
    )
    def test_strict_rejected_paths(self, path):
        order = _place()
        with pytest.raises(ValidationError):
            for status in path:
                order.update_status(status, strict=True)
