"""Application service: Set Stock use cases (absolute corrections)."""

from __future__ import annotations

import structlog

from storeops.application.dto import StockLineDTO
from storeops.application.stock_access import StockAccess
from storeops.domain.model.stock import check_stock_level
from storeops.domain.service.stock_ledger import StockLedger

logger = structlog.get_logger(__name__)


class SetStockHandler(StockAccess):

    def handle(self, product_id: str, quantity: int) -> StockLineDTO:
        """Overwrite the on-hand quantity (manual count, import)."""
        record = self._write(
            [product_id], lambda ledger: ledger.set_quantity(product_id, quantity)
        )
        logger.info("Stock set", product_id=product_id, on_hand=quantity)
        return StockLineDTO.from_record(record)


class SetMinimumStockHandler(StockAccess):

    def handle(self, product_id: str, minimum: int) -> StockLineDTO:
        record = self._write(
            [product_id], lambda ledger: ledger.set_minimum_threshold(product_id, minimum)
        )
        logger.info("Minimum stock set", product_id=product_id, minimum=minimum)
        return StockLineDTO.from_record(record)


class BulkSetStockHandler(StockAccess):

    def handle(self, quantities: dict[str, int]) -> int:
        """Set several products at once; returns how many were updated.

        Every entry is checked before anything is written, so one bad
        entry rejects the whole batch.
        """
        if not quantities:
            return 0

        def apply(ledger: StockLedger) -> int:
            for product_id, qty in quantities.items():
                check_stock_level(product_id, qty)
                ledger.get_quantity(product_id)  # raises StockRecordNotFoundError
            for product_id, qty in quantities.items():
                ledger.set_quantity(product_id, qty)
            return len(quantities)

        updated = self._write(quantities, apply)
        logger.info("Bulk stock update applied", updated=updated)
        return updated
