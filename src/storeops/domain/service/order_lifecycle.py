"""Domain service: Order Lifecycle.

Drives status changes on the Order aggregate and the stock movements that
belong to them. Cancelling restocks every line; the release and the status
change happen together or not at all.
"""

from __future__ import annotations

import structlog

from storeops.domain.model.order import Order, OrderStatus
from storeops.domain.service.stock_ledger import StockLedger

logger = structlog.get_logger(__name__)


class OrderLifecycle:

    def __init__(self, ledger: StockLedger) -> None:
        self._ledger = ledger

    def advance(self, order: Order, target: OrderStatus) -> None:
        """Move *order* to *target*; cancellation restocks."""
        if target is OrderStatus.CANCELLED:
            self.cancel(order)
            return
        previous = order.status
        order.transition_to(target)
        logger.info(
            "Order status changed",
            order_id=order.id,
            previous=previous.value,
            status=target.value,
        )

    def cancel(self, order: Order) -> None:
        """Transition Pending|Processing -> Cancelled and restock every line.

        The transition is checked first so a rejected cancel moves no stock.
        ``release_all`` undoes its own partial work if a release fails.
        """
        order.ensure_can_transition_to(OrderStatus.CANCELLED)
        self._ledger.release_all(order.quantities_by_product())
        order.transition_to(OrderStatus.CANCELLED)
        logger.info("Order cancelled", order_id=order.id, restocked=order.quantities_by_product())

    def undo_cancel(self, order: Order, previous: OrderStatus) -> None:
        """Take the restocked units back and restore *previous* status.

        Used when the cancelled order could not be persisted.
        """
        self._ledger.reserve_all(order.quantities_by_product())
        order.status = previous
        logger.warning("Order cancellation reverted", order_id=order.id, status=previous.value)

    def update_shipping_address(self, order: Order, new_address: str) -> None:
        order.update_shipping_address(new_address)
