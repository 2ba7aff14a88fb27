"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storeops.domain.model.order import Order, OrderStatus


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def list_all(
        self,
        customer_id: str | None = None,
        status: OrderStatus | None = None,
    ) -> list[Order]:
        """Return orders, newest first, optionally filtered."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist a new or updated order.

        New orders (``id is None``) receive their ID no later than the
        commit of the surrounding unit of work.
        """
