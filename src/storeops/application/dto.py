"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from storeops.domain.model.order import Order
from storeops.domain.model.stock import StockRecord
from storeops.domain.service.low_stock_monitor import LowStockEntry


@dataclass(frozen=True)
class OrderLineRequest:
    """Input: what the customer asked for (product ID + quantity)."""

    product_id: str
    quantity: int


@dataclass(frozen=True)
class OrderLineItemDTO:
    product_id: str
    product_name: str
    quantity: int
    unit_price: str  # formatted, e.g. "$15.00"
    line_subtotal: str


@dataclass(frozen=True)
class OrderDTO:
    id: int
    customer_id: str
    status: str
    shipping_address: str
    payment_method: str
    items: list[OrderLineItemDTO]
    total: str
    order_date: str

    @staticmethod
    def from_order(order: Order) -> OrderDTO:
        return OrderDTO(
            id=order.id,  # type: ignore[arg-type]
            customer_id=order.customer_id,
            status=order.status.value,
            shipping_address=order.shipping_address,
            payment_method=order.payment_method,
            items=[
                OrderLineItemDTO(
                    product_id=item.product_id,
                    product_name=item.product_name,
                    quantity=item.quantity.value,
                    unit_price=str(item.unit_price),
                    line_subtotal=str(item.line_subtotal),
                )
                for item in order.items
            ],
            total=str(order.total_amount),
            order_date=order.order_date.strftime("%Y-%m-%d %H:%M UTC"),
        )


@dataclass(frozen=True)
class StockLineDTO:
    product_id: str
    quantity_on_hand: int
    minimum_threshold: int
    status: str
    last_updated: str

    @staticmethod
    def from_record(record: StockRecord) -> StockLineDTO:
        return StockLineDTO(
            product_id=record.product_id,
            quantity_on_hand=record.quantity_on_hand,
            minimum_threshold=record.minimum_threshold,
            status=record.status_label,
            last_updated=record.last_updated.strftime("%Y-%m-%d %H:%M UTC"),
        )


@dataclass(frozen=True)
class LowStockLineDTO:
    product_id: str
    product_name: str
    quantity_on_hand: int
    minimum_threshold: int
    units_needed: int

    @staticmethod
    def from_entry(entry: LowStockEntry, product_name: str) -> LowStockLineDTO:
        return LowStockLineDTO(
            product_id=entry.product_id,
            product_name=product_name,
            quantity_on_hand=entry.quantity_on_hand,
            minimum_threshold=entry.minimum_threshold,
            units_needed=entry.units_needed,
        )
