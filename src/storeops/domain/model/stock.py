"""StockRecord aggregate: on-hand stock and reorder threshold per product.

Each product has exactly one StockRecord. The record is the only place
where ``quantity_on_hand`` changes, so every path that touches stock goes
through ``reserve``, ``release`` or ``set_quantity``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from storeops.domain.exceptions import (
    InsufficientStockError,
    InvalidQuantityError,
    NegativeQuantityError,
)

DEFAULT_MINIMUM_THRESHOLD = 5


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class StockRecord:
    """Aggregate root for stock tracking.

    Invariants:
    - ``quantity_on_hand`` is never negative
    - ``minimum_threshold`` is never negative
    """

    product_id: str
    quantity_on_hand: int
    minimum_threshold: int = DEFAULT_MINIMUM_THRESHOLD
    last_updated: datetime = field(default_factory=_now)

    def __post_init__(self) -> None:
        check_stock_level(self.product_id, self.quantity_on_hand)
        check_stock_level(self.product_id, self.minimum_threshold, "minimum threshold")

    # --- Derived state ----------------------------------------------------------

    @property
    def is_low_stock(self) -> bool:
        return self.quantity_on_hand < self.minimum_threshold

    @property
    def is_out_of_stock(self) -> bool:
        return self.quantity_on_hand == 0

    @property
    def units_needed(self) -> int:
        """Units required to climb back to the threshold (0 when not low)."""
        return max(0, self.minimum_threshold - self.quantity_on_hand)

    @property
    def status_label(self) -> str:
        if self.is_out_of_stock:
            return "Out of Stock"
        if self.is_low_stock:
            return f"Low Stock ({self.quantity_on_hand})"
        return f"In Stock ({self.quantity_on_hand})"

    def can_reserve(self, quantity: int) -> bool:
        return quantity > 0 and self.quantity_on_hand >= quantity

    # --- Mutations --------------------------------------------------------------

    def reserve(self, quantity: int) -> None:
        """Take *quantity* units out of stock.

        Raises InsufficientStockError if fewer units are on hand.
        """
        _require_positive(quantity, "Reservation")
        if quantity > self.quantity_on_hand:
            raise InsufficientStockError(self.product_id, quantity, self.quantity_on_hand)
        self.quantity_on_hand -= quantity
        self._touch()

    def release(self, quantity: int) -> None:
        """Put *quantity* units back (cancellation, restock, corrections).

        There is no upper bound: stock may legitimately end above any
        earlier level.
        """
        _require_positive(quantity, "Release")
        self.quantity_on_hand += quantity
        self._touch()

    def set_quantity(self, new_quantity: int) -> None:
        check_stock_level(self.product_id, new_quantity)
        self.quantity_on_hand = new_quantity
        self._touch()

    def set_minimum_threshold(self, new_threshold: int) -> None:
        check_stock_level(self.product_id, new_threshold, "minimum threshold")
        self.minimum_threshold = new_threshold
        self._touch()

    def _touch(self) -> None:
        self.last_updated = _now()


def _require_positive(quantity: int, action: str) -> None:
    if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity <= 0:
        raise InvalidQuantityError(f"{action} quantity must be a positive integer, got {quantity!r}")


def check_stock_level(product_id: str, value: int, what: str = "stock") -> None:
    """Absolute levels must be whole numbers of units, zero or more."""
    if not isinstance(value, int) or isinstance(value, bool):
        raise InvalidQuantityError(
            f"Cannot set {what} for product '{product_id}' to {value!r}: must be an integer"
        )
    if value < 0:
        raise NegativeQuantityError(f"Cannot set {what} for product '{product_id}' to {value}")
