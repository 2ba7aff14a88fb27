"""Application service: Adjust Stock use case.

Relative change to a product's stock: restocking (positive delta) or
taking units out for damage, shrinkage and the like (negative delta).
Stock never goes below zero; a delta that would do so is rejected.
"""

from __future__ import annotations

import structlog

from storeops.application.dto import StockLineDTO
from storeops.application.stock_access import StockAccess

logger = structlog.get_logger(__name__)


class AdjustStockHandler(StockAccess):

    def handle(self, product_id: str, delta: int) -> StockLineDTO:
        record = self._write([product_id], lambda ledger: ledger.adjust(product_id, delta))
        logger.info(
            "Stock adjusted",
            product_id=product_id,
            delta=delta,
            on_hand=record.quantity_on_hand,
        )
        return StockLineDTO.from_record(record)
