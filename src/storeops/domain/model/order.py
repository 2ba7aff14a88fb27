"""Order aggregate — the record of a placed order.

The Order is an aggregate root that owns its line items.
All business invariants are enforced here; stock movements that go with
status changes are coordinated by the OrderLifecycle domain service.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from storeops.domain.exceptions import (
    InvalidTransitionError,
    ValidationError,
)
from storeops.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    PENDING = "Pending"
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (OrderStatus.DELIVERED, OrderStatus.CANCELLED)

    @staticmethod
    def parse(raw: str) -> OrderStatus:
        """Look a status up by value or name, case-insensitively."""
        for status in OrderStatus:
            if raw.strip().lower() in (status.value.lower(), status.name.lower()):
                return status
        valid = ", ".join(s.value for s in OrderStatus)
        raise ValidationError(f"Unknown order status '{raw}' (expected one of {valid})")


ALLOWED_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.PROCESSING, OrderStatus.CANCELLED}),
    OrderStatus.PROCESSING: frozenset({OrderStatus.SHIPPED, OrderStatus.CANCELLED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}

# Statuses in which the parcel has not left the store yet.
EDITABLE_STATUSES = frozenset({OrderStatus.PENDING, OrderStatus.PROCESSING})


@dataclass(frozen=True)
class OrderLineItem:
    """Captures the price snapshot of a product at order-placement time."""

    product_id: str
    product_name: str
    quantity: Quantity
    unit_price: Money  # locked at placement time

    @property
    def line_subtotal(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass
class Order:
    """Aggregate root for placed orders.

    Use the ``Order.create()`` factory for new orders — it enforces all
    business rules and computes ``total_amount``. The ``__init__`` is kept
    simple so the repository can reconstitute persisted orders as stored.
    """

    id: int | None
    customer_id: str
    items: list[OrderLineItem]
    shipping_address: str
    payment_method: str
    total_amount: Money
    status: OrderStatus = OrderStatus.PENDING
    order_date: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW orders only) -------------------------------------

    @staticmethod
    def create(
        customer_id: str,
        items: list[OrderLineItem],
        shipping_address: str,
        payment_method: str,
    ) -> Order:
        if not customer_id:
            raise ValidationError("Customer is required")
        if not items:
            raise ValidationError("Order must contain at least one item")

        return Order(
            id=None,
            customer_id=customer_id,
            items=list(items),
            shipping_address=shipping_address.strip(),
            payment_method=payment_method.strip(),
            total_amount=Money.total(item.line_subtotal for item in items),
        )

    # --- State transitions ------------------------------------------------------

    def can_transition_to(self, target: OrderStatus) -> bool:
        return target in ALLOWED_TRANSITIONS[self.status]

    def ensure_can_transition_to(self, target: OrderStatus) -> None:
        if self.can_transition_to(target):
            return
        detail = ""
        if self.status.is_terminal:
            detail = f"{self.status.value} is a final status"
        elif target is OrderStatus.CANCELLED:
            detail = "orders can only be cancelled before they ship"
        raise InvalidTransitionError(self.status.value, target.value, detail)

    def transition_to(self, target: OrderStatus) -> None:
        """Move to *target* if the state machine allows it.

        Cancellation must go through OrderLifecycle so the stock comes back.
        """
        self.ensure_can_transition_to(target)
        self.status = target

    def update_shipping_address(self, new_address: str) -> None:
        if self.status not in EDITABLE_STATUSES:
            raise InvalidTransitionError(
                self.status.value,
                self.status.value,
                "shipping address can only change before shipment",
            )
        if not new_address or not new_address.strip():
            raise ValidationError("Shipping address is required")
        self.shipping_address = new_address.strip()

    # --- Computed properties ----------------------------------------------------

    @property
    def line_total(self) -> Money:
        """Sum of line subtotals, recomputed from the items."""
        return Money.total(item.line_subtotal for item in self.items)

    def quantities_by_product(self) -> dict[str, int]:
        """Units per product, summed across lines, in first-seen order."""
        result: dict[str, int] = {}
        for item in self.items:
            result[item.product_id] = result.get(item.product_id, 0) + item.quantity.value
        return result
