"""Unit tests for the Order aggregate and its status machine."""

from decimal import Decimal

import pytest

from storeops.domain.exceptions import InvalidTransitionError, ValidationError
from storeops.domain.model.order import Order, OrderLineItem, OrderStatus
from storeops.domain.model.value_objects import Money, Quantity


def _make_item(product_id: str = "1", qty: int = 1, price: str = "15.00") -> OrderLineItem:
    return OrderLineItem(
        product_id=product_id,
        product_name=f"Product {product_id}",
        quantity=Quantity(qty),
        unit_price=Money.of(price),
    )


def _make_order(status: OrderStatus = OrderStatus.PENDING) -> Order:
    order = Order.create("c1", [_make_item()], "1 Main St", "Card")
    order.status = status
    return order


class TestOrderCreation:

    def test_happy_path(self):
        order = Order.create("c1", [_make_item(qty=2, price="10.00")], " 1 Main St ", "Card")
        assert order.customer_id == "c1"
        assert order.status == OrderStatus.PENDING
        assert order.id is None  # assigned by repository
        assert order.shipping_address == "1 Main St"
        assert order.total_amount == Money.of("20.00")

    def test_total_is_exact_sum_of_line_subtotals(self):
        items = [
            _make_item("1", qty=3, price="0.10"),
            _make_item("2", qty=7, price="19.99"),
        ]
        order = Order.create("c1", items, "addr", "Card")
        assert order.total_amount.amount == Decimal("140.23")
        assert order.total_amount == order.line_total

    def test_no_items_rejected(self):
        with pytest.raises(ValidationError, match="at least one item"):
            Order.create("c1", [], "addr", "Card")

    def test_total_in_catalog_currency(self):
        eur = OrderLineItem("E1", "Euro thing", Quantity(3), Money.of("2.00", "EUR"))
        order = Order.create("c1", [eur], "addr", "Card")
        assert order.total_amount == Money.of("6.00", "EUR")
        assert order.line_total == order.total_amount

    def test_quantities_by_product_sums_duplicates(self):
        items = [_make_item("2", qty=1), _make_item("1", qty=2), _make_item("2", qty=4)]
        order = Order.create("c1", items, "addr", "Card")
        assert order.quantities_by_product() == {"2": 5, "1": 2}
        assert list(order.quantities_by_product()) == ["2", "1"]


class TestOrderTransitions:

    @pytest.mark.parametrize(
        "start, target",
        [
            (OrderStatus.PENDING, OrderStatus.PROCESSING),
            (OrderStatus.PROCESSING, OrderStatus.SHIPPED),
            (OrderStatus.SHIPPED, OrderStatus.DELIVERED),
            (OrderStatus.PENDING, OrderStatus.CANCELLED),
            (OrderStatus.PROCESSING, OrderStatus.CANCELLED),
        ],
    )
    def test_allowed(self, start, target):
        order = _make_order(start)
        order.transition_to(target)
        assert order.status == target

    @pytest.mark.parametrize("start", [OrderStatus.DELIVERED, OrderStatus.CANCELLED])
    @pytest.mark.parametrize("target", list(OrderStatus))
    def test_terminal_states_reject_everything(self, start, target):
        order = _make_order(start)
        with pytest.raises(InvalidTransitionError, match="final status"):
            order.transition_to(target)
        assert order.status == start

    def test_shipped_cannot_be_cancelled(self):
        order = _make_order(OrderStatus.SHIPPED)
        with pytest.raises(InvalidTransitionError, match="before they ship"):
            order.transition_to(OrderStatus.CANCELLED)

    def test_cannot_skip_a_step(self):
        order = _make_order(OrderStatus.PENDING)
        with pytest.raises(InvalidTransitionError) as info:
            order.transition_to(OrderStatus.SHIPPED)
        assert (info.value.current, info.value.target) == ("Pending", "Shipped")

    def test_parse_status(self):
        assert OrderStatus.parse("shipped") is OrderStatus.SHIPPED
        assert OrderStatus.parse("CANCELLED") is OrderStatus.CANCELLED
        with pytest.raises(ValidationError, match="Unknown order status"):
            OrderStatus.parse("Lost")


class TestShippingAddress:

    def test_update_while_processing(self):
        order = _make_order(OrderStatus.PROCESSING)
        order.update_shipping_address("2 Side St")
        assert order.shipping_address == "2 Side St"

    def test_update_after_shipment_rejected(self):
        order = _make_order(OrderStatus.SHIPPED)
        with pytest.raises(InvalidTransitionError, match="before shipment"):
            order.update_shipping_address("2 Side St")
        assert order.shipping_address == "1 Main St"

    def test_blank_address_rejected(self):
        order = _make_order()
        with pytest.raises(ValidationError, match="required"):
            order.update_shipping_address("   ")
