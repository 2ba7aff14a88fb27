"""Application service: Advance Order Status use case.

Moves an order along Pending -> Processing -> Shipped -> Delivered.
Asking for Cancelled takes the same path as CancelOrder, so stock always
comes back with a cancellation.
"""

from __future__ import annotations

from storeops.application.dto import OrderDTO
from storeops.application.order_access import OrderAccess
from storeops.domain.model.order import OrderStatus


class AdvanceOrderStatusHandler(OrderAccess):

    def handle(self, order_id: int, new_status: str | OrderStatus) -> OrderDTO:
        if not isinstance(new_status, OrderStatus):
            new_status = OrderStatus.parse(new_status)
        return self._change(order_id, new_status)
