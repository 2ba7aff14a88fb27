"""JSON document store shared by the stock and order repositories.

Stock records and orders live in one document so a single file replace
commits both. Layout::

    {
      "next_order_id": 3,
      "stock":  {"<product_id>": {...}},
      "orders": {"<order_id>": {...}}
    }

Units of work never write the document they read. They stage changed rows
in a ``StoreSession`` and, on commit, merge just those rows into the latest
document under the store locks: a thread lock for this process and a
sidecar file lock (``<name>.lock``) for every other process using the file.
A stock row that changed on disk since the session first read it aborts
the commit with ConcurrentUpdateError.
"""

from __future__ import annotations

import json
import os
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from filelock import FileLock, Timeout

from storeops.domain.exceptions import ConcurrentUpdateError, PersistenceError

LOCK_TIMEOUT_SECONDS = 10


def _empty_document() -> dict:
    return {"next_order_id": 1, "stock": {}, "orders": {}}


class JsonStore:

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._lock = threading.Lock()
        self._file_lock = FileLock(
            str(file_path.with_suffix(".lock")), timeout=LOCK_TIMEOUT_SECONDS
        )
        self._ensure_file()

    @property
    def file_path(self) -> Path:
        return self._file_path

    def read(self) -> dict:
        """Return a private copy of the current document."""
        with self._lock:
            return self._load()

    @contextmanager
    def transaction(self) -> Iterator[dict]:
        """Yield the latest document; write it back if the block succeeds.

        Both the thread lock and the file lock are held until the new
        document has replaced the old one.
        """
        with self._lock, self._locked_file():
            document = self._load()
            yield document
            self._persist(document)

    # --- File helpers ---------------------------------------------------------

    @contextmanager
    def _locked_file(self) -> Iterator[None]:
        try:
            self._file_lock.acquire()
        except Timeout as exc:
            raise PersistenceError(
                f"Timed out waiting for the lock on {self._file_path}"
            ) from exc
        try:
            yield
        finally:
            self._file_lock.release()

    def _load(self) -> dict:
        try:
            raw = self._file_path.read_text(encoding="utf-8")
        except OSError as exc:
            raise PersistenceError(f"Cannot read {self._file_path}: {exc}") from exc
        try:
            document = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise PersistenceError(f"Corrupt store file {self._file_path}: {exc}") from exc
        for key, value in _empty_document().items():
            document.setdefault(key, value)
        return document

    def _persist(self, document: dict) -> None:
        # Readers only ever see the old or the new document.
        tmp_name = None
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=self._file_path.parent, prefix=".store-", suffix=".json"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(json.dumps(document, indent=2, sort_keys=True) + "\n")
            os.replace(tmp_name, self._file_path)
        except OSError as exc:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise PersistenceError(f"Cannot write {self._file_path}: {exc}") from exc

    def _ensure_file(self) -> None:
        if self._file_path.exists():
            return
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        with self._lock, self._locked_file():
            if not self._file_path.exists():
                self._persist(_empty_document())


class StoreSession:
    """Rows read and staged by one unit of work."""

    def __init__(self, store: JsonStore) -> None:
        self.store = store
        self.stock_seen: dict[str, dict | None] = {}
        self.stock_staged: dict[str, dict | None] = {}
        self.orders_staged: dict[int, dict] = {}
        self.new_orders: list = []

    # --- Stock rows -----------------------------------------------------------

    def stock_row(self, product_id: str) -> dict | None:
        if product_id in self.stock_staged:
            return self.stock_staged[product_id]
        row = self.store.read()["stock"].get(product_id)
        self.stock_seen.setdefault(product_id, row)
        return row

    def stock_rows(self) -> dict[str, dict]:
        rows = dict(self.store.read()["stock"])
        for product_id, row in self.stock_staged.items():
            if row is None:
                rows.pop(product_id, None)
            else:
                rows[product_id] = row
        return rows

    def stage_stock(self, product_id: str, row: dict | None) -> None:
        if product_id not in self.stock_seen:
            self.stock_seen[product_id] = self.store.read()["stock"].get(product_id)
        self.stock_staged[product_id] = row

    # --- Order rows -----------------------------------------------------------

    def order_row(self, order_id: int) -> dict | None:
        if order_id in self.orders_staged:
            return self.orders_staged[order_id]
        return self.store.read()["orders"].get(str(order_id))

    def order_rows(self) -> list[dict]:
        rows = {int(key): row for key, row in self.store.read()["orders"].items()}
        rows.update(self.orders_staged)
        return list(rows.values())

    # --- Commit ---------------------------------------------------------------

    def has_changes(self) -> bool:
        return bool(self.stock_staged or self.orders_staged or self.new_orders)

    def apply(self, document: dict, serialize_order) -> None:
        """Merge staged rows into *document*; assigns IDs to new orders."""
        stock = document["stock"]
        for product_id in self.stock_staged:
            if stock.get(product_id) != self.stock_seen.get(product_id):
                raise ConcurrentUpdateError(
                    f"Stock for product '{product_id}' changed while this update was in progress"
                )
        for product_id, row in self.stock_staged.items():
            if row is None:
                stock.pop(product_id, None)
            else:
                stock[product_id] = row

        for order_id, row in self.orders_staged.items():
            document["orders"][str(order_id)] = row
        for order in self.new_orders:
            order.id = document["next_order_id"]
            document["next_order_id"] += 1
            document["orders"][str(order.id)] = serialize_order(order)

    def clear(self) -> None:
        self.stock_seen.clear()
        self.stock_staged.clear()
        self.orders_staged.clear()
        self.new_orders.clear()
