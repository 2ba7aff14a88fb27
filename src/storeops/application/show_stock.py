"""Application service: stock queries (levels and low-stock report)."""

from __future__ import annotations

from storeops.application.dto import LowStockLineDTO, StockLineDTO
from storeops.domain.repository.catalog_lookup import CatalogLookup
from storeops.domain.repository.unit_of_work import UnitOfWorkFactory
from storeops.domain.service.low_stock_monitor import LowStockMonitor
from storeops.domain.service.stock_ledger import StockLedger


class ShowStockHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(self) -> list[StockLineDTO]:
        with self._uow_factory() as uow:
            records = StockLedger(uow.stock).records()
        return [StockLineDTO.from_record(record) for record in records]


class GetLowStockReportHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory, catalog: CatalogLookup) -> None:
        self._uow_factory = uow_factory
        self._catalog = catalog

    def handle(self) -> list[LowStockLineDTO]:
        with self._uow_factory() as uow:
            entries = LowStockMonitor(uow.stock).report()

        lines: list[LowStockLineDTO] = []
        for entry in entries:
            product = self._catalog.get_product(entry.product_id)
            name = product.name if product is not None else "(unknown)"
            lines.append(LowStockLineDTO.from_entry(entry, name))
        return lines


class GetOutOfStockHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory, catalog: CatalogLookup) -> None:
        self._uow_factory = uow_factory
        self._catalog = catalog

    def handle(self) -> list[tuple[str, str]]:
        """(product_id, product name) of every product with nothing on hand."""
        with self._uow_factory() as uow:
            product_ids = LowStockMonitor(uow.stock).out_of_stock()

        result: list[tuple[str, str]] = []
        for product_id in product_ids:
            product = self._catalog.get_product(product_id)
            result.append((product_id, product.name if product is not None else "(unknown)"))
        return result
