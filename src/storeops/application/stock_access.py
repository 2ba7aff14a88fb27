"""Shared plumbing for the use cases that write stock.

The product locks stay held until the unit of work has committed, so a
concurrent writer of the same product never reads a value that is about
to be overwritten.
"""

from __future__ import annotations

from typing import Callable, Iterable, TypeVar

from storeops.domain.repository.unit_of_work import UnitOfWorkFactory
from storeops.domain.service.lock_registry import LockRegistry
from storeops.domain.service.stock_ledger import StockLedger

T = TypeVar("T")


class StockAccess:

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        product_locks: LockRegistry | None = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._product_locks = product_locks or LockRegistry()

    def _write(self, product_ids: Iterable[str], action: Callable[[StockLedger], T]) -> T:
        with self._product_locks.hold(product_ids), self._uow_factory() as uow:
            result = action(StockLedger(uow.stock, self._product_locks))
            uow.commit()
        return result
