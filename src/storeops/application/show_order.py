"""Application service: Show / List Orders use cases (queries)."""

from __future__ import annotations

from storeops.application.dto import OrderDTO
from storeops.domain.exceptions import OrderNotFoundError
from storeops.domain.model.order import OrderStatus
from storeops.domain.repository.unit_of_work import UnitOfWorkFactory


class ShowOrderHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(self, order_id: int) -> OrderDTO:
        with self._uow_factory() as uow:
            order = uow.orders.get_by_id(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        return OrderDTO.from_order(order)


class ListOrdersHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(
        self,
        customer_id: str | None = None,
        status: str | None = None,
    ) -> list[OrderDTO]:
        wanted = OrderStatus.parse(status) if status else None
        with self._uow_factory() as uow:
            orders = uow.orders.list_all(customer_id=customer_id, status=wanted)
        return [OrderDTO.from_order(order) for order in orders]
