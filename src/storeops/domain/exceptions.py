"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
Errors that the UI needs to explain (which product, which transition) carry
the relevant values as attributes as well as in the message.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class PersistenceError(DomainException):
    """The store failed to apply a unit of work; nothing was written."""


# --- Order placement -----------------------------------------------------------


class EmptyOrderError(ValidationError):
    def __init__(self) -> None:
        super().__init__("Order must contain at least one line")


class InvalidCustomerError(ValidationError):
    def __init__(self, customer_id: str, reason: str = "does not exist") -> None:
        self.customer_id = customer_id
        super().__init__(f"Customer '{customer_id}' {reason}")


class ProductUnavailableError(ValidationError):
    def __init__(self, product_id: str, reason: str = "does not exist") -> None:
        self.product_id = product_id
        super().__init__(f"Product '{product_id}' is unavailable ({reason})")


class InsufficientStockError(ValidationError):
    def __init__(self, product_id: str, requested: int, available: int) -> None:
        self.product_id = product_id
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient stock for product '{product_id}' "
            f"(need {requested}, have {available} available)"
        )


# --- Order lifecycle -----------------------------------------------------------


class InvalidTransitionError(ValidationError):
    def __init__(self, current: str, target: str, detail: str = "") -> None:
        self.current = current
        self.target = target
        message = f"Cannot move order from {current} to {target}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class OrderNotFoundError(EntityNotFoundError):
    def __init__(self, order_id: int) -> None:
        self.order_id = order_id
        super().__init__(f"Order #{order_id} not found")


# --- Stock ---------------------------------------------------------------------


class NegativeQuantityError(ValidationError):
    """A stock level or threshold would be set below zero."""


class InvalidQuantityError(ValidationError):
    """A reserve/release/adjust amount was not a positive integer."""


class DuplicateStockRecordError(ValidationError):
    def __init__(self, product_id: str) -> None:
        self.product_id = product_id
        super().__init__(f"Product '{product_id}' already has a stock record")


class StockRecordNotFoundError(EntityNotFoundError):
    def __init__(self, product_id: str) -> None:
        self.product_id = product_id
        super().__init__(f"No stock record for product '{product_id}'")


class ConcurrentUpdateError(PersistenceError):
    """A row changed in the store after this unit of work read it."""
