"""Domain service: Low Stock Monitor (read side only)."""

from __future__ import annotations

from dataclasses import dataclass

from storeops.domain.repository.stock_repository import StockRepository


@dataclass(frozen=True)
class LowStockEntry:
    product_id: str
    quantity_on_hand: int
    minimum_threshold: int
    units_needed: int


class LowStockMonitor:
    """Reports products whose stock fell below their minimum threshold.

    Works on whatever the repository returns at call time and never writes,
    so it can run alongside any writer. Chronic items show up on every run.
    """

    def __init__(self, stock_repo: StockRepository) -> None:
        self._stock_repo = stock_repo

    def report(self) -> list[LowStockEntry]:
        """Low-stock products, most units needed first, then by product ID."""
        entries = [
            LowStockEntry(
                product_id=record.product_id,
                quantity_on_hand=record.quantity_on_hand,
                minimum_threshold=record.minimum_threshold,
                units_needed=record.units_needed,
            )
            for record in self._stock_repo.list_all()
            if record.is_low_stock
        ]
        entries.sort(key=lambda e: (-e.units_needed, e.product_id))
        return entries

    def out_of_stock(self) -> list[str]:
        return sorted(
            record.product_id
            for record in self._stock_repo.list_all()
            if record.is_out_of_stock
        )
