"""Read-only ports onto the catalog and the customer accounts.

Both are owned outside the order engine. Defined in the domain layer so
the domain never depends on infrastructure.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storeops.domain.model.product import Customer, Product


class CatalogLookup(ABC):

    @abstractmethod
    def get_product(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog."""


class CustomerDirectory(ABC):

    @abstractmethod
    def get_customer(self, customer_id: str) -> Customer | None:
        """Return a customer by its ID, or None if not found."""
