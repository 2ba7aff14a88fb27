"""Catalog-side entities read by the order engine.

Products and customers are owned by other parts of the store (catalog
management, user accounts). The engine only reads them, so they are kept
as plain dataclasses without behaviour beyond simple state checks.
"""

from __future__ import annotations

from dataclasses import dataclass

from storeops.domain.model.value_objects import Money


@dataclass
class Product:
    """A product as the catalog currently describes it.

    ``price`` is the live catalog price. Orders copy it into their lines
    at placement time, so later price changes never reach existing orders.
    """

    id: str
    name: str
    price: Money
    is_active: bool = True


@dataclass
class Customer:
    id: str
    name: str
    is_active: bool = True
