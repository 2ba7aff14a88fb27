"""JSON-store-backed implementation of StockRepository."""

from __future__ import annotations

from datetime import datetime

from storeops.domain.model.stock import StockRecord
from storeops.domain.repository.stock_repository import StockRepository
from storeops.infrastructure.persistence.json_store import StoreSession


class JsonStockRepository(StockRepository):

    def __init__(self, session: StoreSession) -> None:
        self._session = session

    # --- StockRepository interface ----------------------------------------------

    def get_by_product_id(self, product_id: str) -> StockRecord | None:
        raw = self._session.stock_row(product_id)
        return self._to_domain(raw) if raw is not None else None

    def list_all(self) -> list[StockRecord]:
        return [self._to_domain(raw) for raw in self._session.stock_rows().values()]

    def save(self, record: StockRecord) -> None:
        self._session.stage_stock(record.product_id, self._to_raw(record))

    def delete(self, product_id: str) -> None:
        self._session.stage_stock(product_id, None)

    # --- Serialization ------------------------------------------------------------

    @staticmethod
    def _to_raw(record: StockRecord) -> dict:
        return {
            "product_id": record.product_id,
            "quantity_on_hand": record.quantity_on_hand,
            "minimum_threshold": record.minimum_threshold,
            "last_updated": record.last_updated.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> StockRecord:
        return StockRecord(
            product_id=raw["product_id"],
            quantity_on_hand=raw["quantity_on_hand"],
            minimum_threshold=raw["minimum_threshold"],
            last_updated=datetime.fromisoformat(raw["last_updated"]),
        )
