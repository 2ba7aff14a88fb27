"""Unit of work over the JSON store."""

from __future__ import annotations

import structlog

from storeops.domain.repository.unit_of_work import UnitOfWork
from storeops.infrastructure.persistence.json_order_repository import JsonOrderRepository
from storeops.infrastructure.persistence.json_stock_repository import JsonStockRepository
from storeops.infrastructure.persistence.json_store import JsonStore, StoreSession

logger = structlog.get_logger(__name__)


class JsonUnitOfWork(UnitOfWork):

    def __init__(self, store: JsonStore) -> None:
        self._store = store
        self._session = StoreSession(store)
        self.stock = JsonStockRepository(self._session)
        self.orders = JsonOrderRepository(self._session)

    def commit(self) -> None:
        if not self._session.has_changes():
            return
        try:
            with self._store.transaction() as document:
                self._session.apply(document, JsonOrderRepository.to_raw)
        except Exception:
            for order in self._session.new_orders:
                order.id = None
            raise
        logger.debug(
            "Store commit",
            path=str(self._store.file_path),
            stock_rows=len(self._session.stock_staged),
            new_orders=len(self._session.new_orders),
        )
        self._session.clear()

    def rollback(self) -> None:
        self._session.clear()
