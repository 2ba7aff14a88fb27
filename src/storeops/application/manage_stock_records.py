"""Application service: Open / Close Stock Record use cases.

A stock record follows its product: it is opened when the catalog adds a
product and closed when the catalog removes it.
"""

from __future__ import annotations

from storeops.application.dto import StockLineDTO
from storeops.application.stock_access import StockAccess
from storeops.domain.exceptions import EntityNotFoundError
from storeops.domain.model.stock import DEFAULT_MINIMUM_THRESHOLD
from storeops.domain.repository.catalog_lookup import CatalogLookup
from storeops.domain.repository.unit_of_work import UnitOfWorkFactory
from storeops.domain.service.lock_registry import LockRegistry


class OpenStockRecordHandler(StockAccess):

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        catalog: CatalogLookup,
        product_locks: LockRegistry | None = None,
    ) -> None:
        super().__init__(uow_factory, product_locks)
        self._catalog = catalog

    def handle(
        self,
        product_id: str,
        quantity: int = 0,
        minimum_threshold: int = DEFAULT_MINIMUM_THRESHOLD,
    ) -> StockLineDTO:
        if self._catalog.get_product(product_id) is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        record = self._write(
            [product_id],
            lambda ledger: ledger.open_record(product_id, quantity, minimum_threshold),
        )
        return StockLineDTO.from_record(record)


class CloseStockRecordHandler(StockAccess):

    def handle(self, product_id: str) -> None:
        self._write([product_id], lambda ledger: ledger.close_record(product_id))
