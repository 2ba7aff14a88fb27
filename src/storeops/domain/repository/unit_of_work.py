"""Abstract unit of work: one transaction over stock and orders.

Usage::

    with uow:
        record = uow.stock.get_by_product_id("1")
        ...
        uow.commit()

Leaving the block without ``commit()`` (including through an exception)
discards every staged change.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

from storeops.domain.repository.order_repository import OrderRepository
from storeops.domain.repository.stock_repository import StockRepository


class UnitOfWork(ABC):

    stock: StockRepository
    orders: OrderRepository

    def __enter__(self) -> UnitOfWork:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.rollback()

    @abstractmethod
    def commit(self) -> None:
        """Apply all staged changes at once or raise PersistenceError."""

    @abstractmethod
    def rollback(self) -> None:
        """Drop staged changes. A no-op after a successful commit."""


UnitOfWorkFactory = Callable[[], UnitOfWork]
