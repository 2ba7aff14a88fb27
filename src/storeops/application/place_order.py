"""Application service: Place Order use case.

Turns the requested lines into a persisted order whose stock has been
taken, or fails with nothing changed. Steps:

1. Validate the request: non-empty, active customer, active products.
2. Lock every product involved, lowest product ID first.
3. Check availability for the whole order, then reserve (StockLedger).
4. Build the Order with price snapshots and commit it together with the
   stock changes in one unit of work.

Any failure after stock was taken releases it again before the error
propagates, and the unit of work discards whatever it had staged.
"""

from __future__ import annotations

import structlog

from storeops.application.dto import OrderDTO, OrderLineRequest
from storeops.domain.exceptions import (
    DomainException,
    EmptyOrderError,
    InvalidCustomerError,
    PersistenceError,
    ProductUnavailableError,
)
from storeops.domain.model.order import Order, OrderLineItem
from storeops.domain.model.value_objects import Quantity
from storeops.domain.repository.catalog_lookup import CatalogLookup, CustomerDirectory
from storeops.domain.repository.unit_of_work import UnitOfWorkFactory
from storeops.domain.service.lock_registry import LockRegistry
from storeops.domain.service.stock_ledger import StockLedger

logger = structlog.get_logger(__name__)


class PlaceOrderHandler:

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        catalog: CatalogLookup,
        customers: CustomerDirectory,
        product_locks: LockRegistry | None = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._catalog = catalog
        self._customers = customers
        self._product_locks = product_locks or LockRegistry()

    def handle(
        self,
        customer_id: str,
        lines: list[OrderLineRequest],
        shipping_address: str,
        payment_method: str,
    ) -> OrderDTO:
        if not lines:
            raise EmptyOrderError()
        self._check_customer(customer_id)
        line_items = [self._price_line(line) for line in lines]

        order = Order.create(
            customer_id=customer_id,
            items=line_items,
            shipping_address=shipping_address,
            payment_method=payment_method,
        )
        requested = order.quantities_by_product()

        with self._product_locks.hold(requested), self._uow_factory() as uow:
            ledger = StockLedger(uow.stock, self._product_locks)
            ledger.reserve_all(requested)
            try:
                uow.orders.save(order)
                uow.commit()
            except Exception as exc:
                ledger.release_all(requested)
                order.id = None
                logger.warning(
                    "Order placement rolled back",
                    customer_id=customer_id,
                    products=list(requested),
                    error=str(exc),
                )
                if isinstance(exc, DomainException):
                    raise
                raise PersistenceError(f"Could not store order: {exc}") from exc

        logger.info(
            "Order placed",
            order_id=order.id,
            customer_id=customer_id,
            lines=len(order.items),
            total=str(order.total_amount),
        )
        return OrderDTO.from_order(order)

    # --- Validation -------------------------------------------------------------

    def _check_customer(self, customer_id: str) -> None:
        customer = self._customers.get_customer(customer_id)
        if customer is None:
            raise InvalidCustomerError(customer_id)
        if not customer.is_active:
            raise InvalidCustomerError(customer_id, "is inactive")

    def _price_line(self, line: OrderLineRequest) -> OrderLineItem:
        product = self._catalog.get_product(line.product_id)
        if product is None:
            raise ProductUnavailableError(line.product_id)
        if not product.is_active:
            raise ProductUnavailableError(line.product_id, "inactive")
        return OrderLineItem(
            product_id=product.id,
            product_name=product.name,
            quantity=Quantity(line.quantity),
            unit_price=product.price,  # <-- price snapshot
        )
