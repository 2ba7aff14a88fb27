"""Domain service: Stock Ledger.

The single entry point for reading and changing per-product stock. Every
mutation loads the StockRecord, applies the change under the product's
lock and saves it back through the repository of the current unit of work.

Multi-product reservations use a two-phase approach (validate-then-mutate)
so a failing product never leaves earlier products decremented.
"""

from __future__ import annotations

import structlog

from storeops.domain.exceptions import (
    DuplicateStockRecordError,
    InsufficientStockError,
    InvalidQuantityError,
    StockRecordNotFoundError,
)
from storeops.domain.model.stock import DEFAULT_MINIMUM_THRESHOLD, StockRecord
from storeops.domain.repository.stock_repository import StockRepository
from storeops.domain.service.lock_registry import LockRegistry

logger = structlog.get_logger(__name__)


class StockLedger:

    def __init__(
        self,
        stock_repo: StockRepository,
        locks: LockRegistry | None = None,
    ) -> None:
        self._stock_repo = stock_repo
        self._locks = locks or LockRegistry()

    # --- Queries ----------------------------------------------------------------

    def get_quantity(self, product_id: str) -> int:
        return self._require(product_id).quantity_on_hand

    def can_reserve(self, product_id: str, quantity: int) -> bool:
        if quantity <= 0:
            return False
        record = self._stock_repo.get_by_product_id(product_id)
        return record is not None and record.can_reserve(quantity)

    def is_low_stock(self, product_id: str) -> bool:
        return self._require(product_id).is_low_stock

    def is_out_of_stock(self, product_id: str) -> bool:
        return self._require(product_id).is_out_of_stock

    def records(self) -> list[StockRecord]:
        return sorted(self._stock_repo.list_all(), key=lambda r: r.product_id)

    # --- Single-product mutations -------------------------------------------------

    def reserve(self, product_id: str, quantity: int) -> StockRecord:
        """Take *quantity* units; fails with InsufficientStockError otherwise.

        A product without a stock record has nothing to reserve, so it is
        reported as insufficient stock with zero available.
        """
        if quantity <= 0:
            raise InvalidQuantityError(
                f"Reservation quantity must be positive, got {quantity}"
            )
        with self._locks.hold([product_id]):
            record = self._stock_repo.get_by_product_id(product_id)
            if record is None:
                raise InsufficientStockError(product_id, quantity, 0)
            record.reserve(quantity)
            self._stock_repo.save(record)
        logger.debug(
            "Stock reserved",
            product_id=product_id,
            quantity=quantity,
            on_hand=record.quantity_on_hand,
        )
        return record

    def release(self, product_id: str, quantity: int) -> StockRecord:
        with self._locks.hold([product_id]):
            record = self._require(product_id)
            record.release(quantity)
            self._stock_repo.save(record)
        logger.debug(
            "Stock released",
            product_id=product_id,
            quantity=quantity,
            on_hand=record.quantity_on_hand,
        )
        return record

    def set_quantity(self, product_id: str, new_quantity: int) -> StockRecord:
        with self._locks.hold([product_id]):
            record = self._require(product_id)
            record.set_quantity(new_quantity)
            self._stock_repo.save(record)
        return record

    def adjust(self, product_id: str, delta: int) -> StockRecord:
        """Relative change: positive restocks, negative takes units out."""
        if delta == 0:
            raise InvalidQuantityError("Stock adjustment must be non-zero")
        if delta > 0:
            return self.release(product_id, delta)
        return self.reserve(product_id, -delta)

    def set_minimum_threshold(self, product_id: str, new_threshold: int) -> StockRecord:
        with self._locks.hold([product_id]):
            record = self._require(product_id)
            record.set_minimum_threshold(new_threshold)
            self._stock_repo.save(record)
        return record

    # --- Record lifecycle (follows the product) ------------------------------------

    def open_record(
        self,
        product_id: str,
        quantity: int = 0,
        minimum_threshold: int = DEFAULT_MINIMUM_THRESHOLD,
    ) -> StockRecord:
        """Create the stock record of a newly created product."""
        with self._locks.hold([product_id]):
            if self._stock_repo.get_by_product_id(product_id) is not None:
                raise DuplicateStockRecordError(product_id)
            record = StockRecord(
                product_id=product_id,
                quantity_on_hand=quantity,
                minimum_threshold=minimum_threshold,
            )
            self._stock_repo.save(record)
        logger.info("Stock record opened", product_id=product_id, quantity=quantity)
        return record

    def close_record(self, product_id: str) -> None:
        """Drop the stock record of a deleted product."""
        with self._locks.hold([product_id]):
            self._require(product_id)
            self._stock_repo.delete(product_id)
        logger.info("Stock record closed", product_id=product_id)

    # --- Multi-product mutations -----------------------------------------------

    def reserve_all(self, quantities: dict[str, int]) -> None:
        """Reserve stock for several products as one step.

        Phase 1 — load and validate every product, in the order given.
                  Fails fast before any mutation.
        Phase 2 — reserve each product. Should one still fail, the products
                  already reserved are released before the error propagates.
        """
        with self._locks.hold(quantities):
            for product_id, qty in quantities.items():
                if qty <= 0:
                    raise InvalidQuantityError(
                        f"Reservation quantity for product '{product_id}' must be positive"
                    )
                record = self._stock_repo.get_by_product_id(product_id)
                available = record.quantity_on_hand if record is not None else 0
                if record is None or not record.can_reserve(qty):
                    raise InsufficientStockError(product_id, qty, available)

            reserved: dict[str, int] = {}
            try:
                for product_id, qty in quantities.items():
                    self.reserve(product_id, qty)
                    reserved[product_id] = qty
            except Exception:
                self.release_all(reserved)
                raise

    def release_all(self, quantities: dict[str, int]) -> None:
        """Put stock back for several products; compensates on a midway failure."""
        with self._locks.hold(quantities):
            released: dict[str, int] = {}
            try:
                for product_id, qty in quantities.items():
                    self.release(product_id, qty)
                    released[product_id] = qty
            except Exception:
                for product_id, qty in released.items():
                    self.reserve(product_id, qty)
                raise

    # --- Internal helpers ---------------------------------------------------------

    def _require(self, product_id: str) -> StockRecord:
        record = self._stock_repo.get_by_product_id(product_id)
        if record is None:
            raise StockRecordNotFoundError(product_id)
        return record
