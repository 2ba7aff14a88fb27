"""Application service: Update Shipping Address use case.

Only allowed while the order is Pending or Processing.
"""

from __future__ import annotations

import structlog

from storeops.application.dto import OrderDTO
from storeops.application.order_access import OrderAccess
from storeops.domain.service.order_lifecycle import OrderLifecycle
from storeops.domain.service.stock_ledger import StockLedger

logger = structlog.get_logger(__name__)


class UpdateShippingAddressHandler(OrderAccess):

    def handle(self, order_id: int, new_address: str) -> OrderDTO:
        with self._order_locks.hold([order_id]), self._uow_factory() as uow:
            order = self._load(uow, order_id)
            lifecycle = OrderLifecycle(StockLedger(uow.stock, self._product_locks))
            lifecycle.update_shipping_address(order, new_address)
            uow.orders.save(order)
            uow.commit()

        logger.info("Shipping address updated", order_id=order_id)
        return OrderDTO.from_order(order)
