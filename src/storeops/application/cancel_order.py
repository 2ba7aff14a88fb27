"""Application service: Cancel Order use case.

Cancelling restocks every line of the order. The status change and the
stock releases are committed in one unit of work; if the commit fails the
lifecycle puts both back before the error propagates.
"""

from __future__ import annotations

from storeops.application.dto import OrderDTO
from storeops.application.order_access import OrderAccess
from storeops.domain.model.order import OrderStatus


class CancelOrderHandler(OrderAccess):

    def handle(self, order_id: int) -> OrderDTO:
        return self._change(order_id, OrderStatus.CANCELLED)
