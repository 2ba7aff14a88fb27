"""Integration tests for AdvanceOrderStatus and the order queries."""

import pytest

from storeops.application.advance_order_status import AdvanceOrderStatusHandler
from storeops.application.show_order import ListOrdersHandler, ShowOrderHandler
from storeops.domain.exceptions import InvalidTransitionError, OrderNotFoundError, ValidationError
from storeops.domain.model.order import Order, OrderLineItem, OrderStatus
from storeops.domain.model.stock import StockRecord
from storeops.domain.model.value_objects import Money, Quantity
from tests.fakes import FakeUnitOfWork


def _order(customer_id: str = "alice", status: OrderStatus = OrderStatus.PENDING) -> Order:
    item = OrderLineItem("P1", "Widget", Quantity(1), Money.of("3.00"))
    order = Order.create(customer_id, [item], "1 Main St", "Card")
    order.status = status
    return order


def _setup(*orders: Order) -> FakeUnitOfWork:
    uow = FakeUnitOfWork([StockRecord(product_id="P1", quantity_on_hand=10)])
    for order in orders or (_order(),):
        uow.orders.save(order)
    return uow


class TestAdvanceOrderStatus:

    def test_full_forward_path(self):
        uow = _setup()
        handler = AdvanceOrderStatusHandler(lambda: uow)
        for status in ("Processing", "Shipped", "Delivered"):
            dto = handler.handle(1, status)
            assert dto.status == status
        assert uow.stock.get_by_product_id("P1").quantity_on_hand == 10

    @pytest.mark.parametrize("start", [OrderStatus.DELIVERED, OrderStatus.CANCELLED])
    @pytest.mark.parametrize("target", list(OrderStatus))
    def test_terminal_orders_never_move(self, start, target):
        uow = _setup(_order(status=start))
        with pytest.raises(InvalidTransitionError):
            AdvanceOrderStatusHandler(lambda: uow).handle(1, target)
        assert uow.orders.get_by_id(1).status is start
        assert uow.stock.get_by_product_id("P1").quantity_on_hand == 10

    def test_skipping_a_step_rejected(self):
        uow = _setup()
        with pytest.raises(InvalidTransitionError):
            AdvanceOrderStatusHandler(lambda: uow).handle(1, OrderStatus.DELIVERED)

    def test_unknown_status_name(self):
        uow = _setup()
        with pytest.raises(ValidationError):
            AdvanceOrderStatusHandler(lambda: uow).handle(1, "Lost")

    def test_cancel_through_advance_restocks(self):
        uow = _setup()
        AdvanceOrderStatusHandler(lambda: uow).handle(1, "cancelled")
        assert uow.stock.get_by_product_id("P1").quantity_on_hand == 11


class TestOrderQueries:

    def test_show_order(self):
        uow = _setup()
        dto = ShowOrderHandler(lambda: uow).handle(1)
        assert dto.customer_id == "alice"
        assert dto.items[0].line_subtotal == "$3.00"

    def test_show_missing_order(self):
        uow = _setup()
        with pytest.raises(OrderNotFoundError):
            ShowOrderHandler(lambda: uow).handle(42)

    def test_list_filters_and_orders_newest_first(self):
        uow = _setup(
            _order("alice"),
            _order("bob"),
            _order("alice", OrderStatus.SHIPPED),
        )
        handler = ListOrdersHandler(lambda: uow)
        assert [o.id for o in handler.handle()] == [3, 2, 1]
        assert [o.id for o in handler.handle(customer_id="alice")] == [3, 1]
        assert [o.id for o in handler.handle(status="shipped")] == [3]
