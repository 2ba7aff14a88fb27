"""Concurrent placements and cancellations against a real JSON store."""

import threading

from storeops.application.cancel_order import CancelOrderHandler
from storeops.application.dto import OrderLineRequest
from storeops.application.place_order import PlaceOrderHandler
from storeops.domain.exceptions import ConcurrentUpdateError, InsufficientStockError
from storeops.domain.model.product import Customer, Product
from storeops.domain.model.value_objects import Money
from storeops.domain.service.lock_registry import LockRegistry
from storeops.domain.service.stock_ledger import StockLedger
from storeops.infrastructure.persistence.json_store import JsonStore
from storeops.infrastructure.persistence.json_unit_of_work import JsonUnitOfWork
from tests.fakes import FakeCatalog, FakeCustomerDirectory


def _setup(tmp_path, **stock: int):
    store = JsonStore(tmp_path / "store.json")
    with JsonUnitOfWork(store) as uow:
        ledger = StockLedger(uow.stock)
        for product_id, qty in stock.items():
            ledger.open_record(product_id, qty)
        uow.commit()

    catalog = FakeCatalog([
        Product(id=pid, name=f"Product {pid}", price=Money.of("1.00")) for pid in stock
    ])
    customers = FakeCustomerDirectory([Customer(id="alice", name="Alice")])
    handler = PlaceOrderHandler(
        lambda: JsonUnitOfWork(store), catalog, customers, product_locks=LockRegistry()
    )
    return store, handler


def _run(workers: int, target) -> None:
    threads = [threading.Thread(target=target, args=(i,)) for i in range(workers)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=30)


class TestConcurrentPlacement:

    def test_last_unit_sold_once(self, tmp_path):
        store, handler = _setup(tmp_path, P1=1)
        placed, rejected = [], []

        def buy(_):
            try:
                placed.append(handler.handle("alice", [OrderLineRequest("P1", 1)], "addr", "Card"))
            except InsufficientStockError:
                rejected.append(True)

        _run(8, buy)
        assert len(placed) == 1
        assert len(rejected) == 7
        assert store.read()["stock"]["P1"]["quantity_on_hand"] == 0

    def test_overlapping_orders_do_not_deadlock_or_oversell(self, tmp_path):
        store, handler = _setup(tmp_path, A=50, B=50)
        placed = []

        def buy(i):
            # half the threads list the products in reverse order
            lines = [OrderLineRequest("A", 1), OrderLineRequest("B", 2)]
            if i % 2:
                lines.reverse()
            for _ in range(5):
                placed.append(handler.handle("alice", lines, "addr", "Card"))

        _run(4, buy)
        document = store.read()
        assert len(placed) == 20
        assert document["stock"]["A"]["quantity_on_hand"] == 30
        assert document["stock"]["B"]["quantity_on_hand"] == 10
        assert sorted(int(k) for k in document["orders"]) == list(range(1, 21))

    def test_placement_and_cancellation_conserve_stock(self, tmp_path):
        store, handler = _setup(tmp_path, A=40)
        locks = handler._product_locks
        cancel = CancelOrderHandler(lambda: JsonUnitOfWork(store), product_locks=locks)
        remaining = []

        def churn(i):
            for n in range(5):
                dto = handler.handle("alice", [OrderLineRequest("A", 2)], "addr", "Card")
                if n % 2 == 0:
                    cancel.handle(dto.id)
                else:
                    remaining.append(dto.id)

        _run(4, churn)
        document = store.read()
        cancelled = [o for o in document["orders"].values() if o["status"] == "Cancelled"]
        assert len(cancelled) == 12
        assert len(remaining) == 8
        assert document["stock"]["A"]["quantity_on_hand"] == 40 - 2 * len(remaining)


class TestSeparateStoresOnOneFile:
    """Each store stands in for another CLI process with its own locks."""

    def test_no_placed_order_is_lost(self, tmp_path):
        _setup(tmp_path, P1=1000)
        catalog = FakeCatalog([Product(id="P1", name="Widget", price=Money.of("1.00"))])
        customers = FakeCustomerDirectory([Customer(id="alice", name="Alice")])
        placed, conflicts = [], []

        def buy(_):
            store = JsonStore(tmp_path / "store.json")
            handler = PlaceOrderHandler(
                lambda: JsonUnitOfWork(store), catalog, customers, product_locks=LockRegistry()
            )
            for _ in range(25):
                try:
                    placed.append(
                        handler.handle("alice", [OrderLineRequest("P1", 1)], "addr", "Card").id
                    )
                except ConcurrentUpdateError:
                    conflicts.append(True)

        _run(4, buy)
        document = JsonStore(tmp_path / "store.json").read()
        assert len(placed) + len(conflicts) == 100
        assert len(set(placed)) == len(placed)
        assert sorted(int(k) for k in document["orders"]) == sorted(placed)
        assert document["stock"]["P1"]["quantity_on_hand"] == 1000 - len(placed)
