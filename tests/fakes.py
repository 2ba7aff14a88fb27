"""In-memory fakes for testing.

These implement the same abstract interfaces as the JSON-backed classes
but keep everything in dicts. No file I/O, no side effects.
"""

from __future__ import annotations

import copy

from storeops.domain.exceptions import PersistenceError
from storeops.domain.model.order import Order, OrderStatus
from storeops.domain.model.product import Customer, Product
from storeops.domain.model.stock import StockRecord
from storeops.domain.repository.catalog_lookup import CatalogLookup, CustomerDirectory
from storeops.domain.repository.order_repository import OrderRepository
from storeops.domain.repository.stock_repository import StockRepository
from storeops.domain.repository.unit_of_work import UnitOfWork


class FakeStockRepository(StockRepository):

    def __init__(self, records: list[StockRecord] | None = None) -> None:
        self._store: dict[str, StockRecord] = {}
        for record in records or []:
            self._store[record.product_id] = record

    def get_by_product_id(self, product_id: str) -> StockRecord | None:
        return self._store.get(product_id)

    def list_all(self) -> list[StockRecord]:
        return list(self._store.values())

    def save(self, record: StockRecord) -> None:
        self._store[record.product_id] = record

    def delete(self, product_id: str) -> None:
        self._store.pop(product_id, None)


class FakeOrderRepository(OrderRepository):

    def __init__(self) -> None:
        self._store: dict[int, Order] = {}
        self._next_id = 1

    def get_by_id(self, order_id: int) -> Order | None:
        return self._store.get(order_id)

    def list_all(
        self,
        customer_id: str | None = None,
        status: OrderStatus | None = None,
    ) -> list[Order]:
        orders = [
            o for o in self._store.values()
            if (customer_id is None or o.customer_id == customer_id)
            and (status is None or o.status is status)
        ]
        return sorted(orders, key=lambda o: o.id, reverse=True)

    def save(self, order: Order) -> None:
        if order.id is None:
            order.id = self._next_id
            self._next_id += 1
        self._store[order.id] = order


class FakeCatalog(CatalogLookup):

    def __init__(self, products: list[Product] | None = None) -> None:
        self._store: dict[str, Product] = {p.id: p for p in products or []}

    def get_product(self, product_id: str) -> Product | None:
        return self._store.get(product_id)

    def list_all(self) -> list[Product]:
        return list(self._store.values())


class FakeCustomerDirectory(CustomerDirectory):

    def __init__(self, customers: list[Customer] | None = None) -> None:
        self._store: dict[str, Customer] = {c.id: c for c in customers or []}

    def get_customer(self, customer_id: str) -> Customer | None:
        return self._store.get(customer_id)


class FakeUnitOfWork(UnitOfWork):
    """Unit of work over the fake repositories.

    With ``transactional=True`` entering takes a snapshot that rollback
    restores. With ``transactional=False`` the repositories behave like a
    write-through store: whatever a handler changed stays changed unless
    the handler undoes it itself.
    """

    def __init__(
        self,
        stock: list[StockRecord] | None = None,
        transactional: bool = True,
    ) -> None:
        self.stock = FakeStockRepository(stock)
        self.orders = FakeOrderRepository()
        self.transactional = transactional
        self.fail_commit = False
        self.commits = 0
        self._snapshot: tuple | None = None

    def __enter__(self) -> FakeUnitOfWork:
        if self.transactional:
            self._snapshot = (
                copy.deepcopy(self.stock._store),
                copy.deepcopy(self.orders._store),
                self.orders._next_id,
            )
        return self

    def commit(self) -> None:
        if self.fail_commit:
            raise PersistenceError("Simulated write failure")
        self.commits += 1
        self._snapshot = None

    def rollback(self) -> None:
        if self._snapshot is None:
            return
        stock, orders, next_id = self._snapshot
        self.stock._store = stock
        self.orders._store = orders
        self.orders._next_id = next_id
        self._snapshot = None
