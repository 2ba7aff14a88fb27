"""Abstract repository for the StockRecord aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storeops.domain.model.stock import StockRecord


class StockRepository(ABC):

    @abstractmethod
    def get_by_product_id(self, product_id: str) -> StockRecord | None:
        """Return the stock record for a product, or None."""

    @abstractmethod
    def list_all(self) -> list[StockRecord]:
        """Return every stock record."""

    @abstractmethod
    def save(self, record: StockRecord) -> None:
        """Persist a new or updated stock record."""

    @abstractmethod
    def delete(self, product_id: str) -> None:
        """Remove the stock record for a product, if any."""
