"""Shared plumbing for the use cases that change an existing order.

Every change takes the order's lock first and, when stock moves, the
locks of the order's products second. Nothing takes an order lock while
holding a product lock, so the two registries cannot deadlock.
"""

from __future__ import annotations

import structlog

from storeops.application.dto import OrderDTO
from storeops.domain.exceptions import DomainException, OrderNotFoundError, PersistenceError
from storeops.domain.model.order import Order, OrderStatus
from storeops.domain.repository.unit_of_work import UnitOfWork, UnitOfWorkFactory
from storeops.domain.service.lock_registry import LockRegistry
from storeops.domain.service.order_lifecycle import OrderLifecycle
from storeops.domain.service.stock_ledger import StockLedger

logger = structlog.get_logger(__name__)


class OrderAccess:

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        product_locks: LockRegistry | None = None,
        order_locks: LockRegistry | None = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._product_locks = product_locks or LockRegistry()
        self._order_locks = order_locks or LockRegistry()

    @staticmethod
    def _load(uow: UnitOfWork, order_id: int) -> Order:
        order = uow.orders.get_by_id(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        return order

    def _change(self, order_id: int, target: OrderStatus) -> OrderDTO:
        with self._order_locks.hold([order_id]), self._uow_factory() as uow:
            order = self._load(uow, order_id)
            moves_stock = target is OrderStatus.CANCELLED
            product_ids = order.quantities_by_product() if moves_stock else {}

            with self._product_locks.hold(product_ids):
                lifecycle = OrderLifecycle(StockLedger(uow.stock, self._product_locks))
                previous = order.status
                lifecycle.advance(order, target)
                try:
                    uow.orders.save(order)
                    uow.commit()
                except Exception as exc:
                    if moves_stock:
                        lifecycle.undo_cancel(order, previous)
                    else:
                        order.status = previous
                    logger.warning(
                        "Order status change rolled back",
                        order_id=order_id,
                        status=target.value,
                        error=str(exc),
                    )
                    if isinstance(exc, DomainException):
                        raise
                    raise PersistenceError(f"Could not store order #{order_id}: {exc}") from exc

        return OrderDTO.from_order(order)
