"""JSON-store-backed implementation of OrderRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from storeops.domain.model.order import Order, OrderLineItem, OrderStatus
from storeops.domain.model.value_objects import Money, Quantity
from storeops.domain.repository.order_repository import OrderRepository
from storeops.infrastructure.persistence.json_store import StoreSession


class JsonOrderRepository(OrderRepository):

    def __init__(self, session: StoreSession) -> None:
        self._session = session

    # --- OrderRepository interface ------------------------------------------------

    def get_by_id(self, order_id: int) -> Order | None:
        raw = self._session.order_row(order_id)
        return self.to_domain(raw) if raw is not None else None

    def list_all(
        self,
        customer_id: str | None = None,
        status: OrderStatus | None = None,
    ) -> list[Order]:
        orders = [self.to_domain(raw) for raw in self._session.order_rows()]
        if customer_id is not None:
            orders = [o for o in orders if o.customer_id == customer_id]
        if status is not None:
            orders = [o for o in orders if o.status is status]
        return sorted(orders, key=lambda o: (o.order_date, o.id), reverse=True)

    def save(self, order: Order) -> None:
        # IDs of new orders are handed out by the store at commit time.
        if order.id is None:
            if not any(pending is order for pending in self._session.new_orders):
                self._session.new_orders.append(order)
            return
        self._session.orders_staged[order.id] = self.to_raw(order)

    # --- Serialization ------------------------------------------------------------

    @staticmethod
    def to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "customer_id": order.customer_id,
            "status": order.status.value,
            "order_date": order.order_date.isoformat(),
            "shipping_address": order.shipping_address,
            "payment_method": order.payment_method,
            "total_amount": str(order.total_amount.amount),
            "currency": order.total_amount.currency,
            "items": [
                {
                    "product_id": item.product_id,
                    "product_name": item.product_name,
                    "quantity": item.quantity.value,
                    "unit_price": str(item.unit_price.amount),
                    "currency": item.unit_price.currency,
                }
                for item in order.items
            ],
        }

    @staticmethod
    def to_domain(raw: dict) -> Order:
        items = [
            OrderLineItem(
                product_id=i["product_id"],
                product_name=i["product_name"],
                quantity=Quantity(i["quantity"]),
                unit_price=Money(Decimal(i["unit_price"]), i.get("currency", "USD")),
            )
            for i in raw["items"]
        ]
        return Order(
            id=raw["id"],
            customer_id=raw["customer_id"],
            items=items,
            shipping_address=raw["shipping_address"],
            payment_method=raw["payment_method"],
            total_amount=Money(Decimal(raw["total_amount"]), raw.get("currency", "USD")),
            status=OrderStatus(raw["status"]),
            order_date=datetime.fromisoformat(raw["order_date"]),
        )
