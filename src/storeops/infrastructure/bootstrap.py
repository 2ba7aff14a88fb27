"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.

Configuration comes from the environment:

- ``STOREOPS_DATA_DIR``: directory holding ``store.json``,
  ``products.json`` and ``customers.json`` (default: ``<repo>/data``).
"""

from __future__ import annotations

import os
import threading
from pathlib import Path

from storeops.domain.repository.unit_of_work import UnitOfWork
from storeops.domain.service.lock_registry import LockRegistry
from storeops.infrastructure.persistence.json_catalog import JsonCatalog, JsonCustomerDirectory
from storeops.infrastructure.persistence.json_store import JsonStore
from storeops.infrastructure.persistence.json_unit_of_work import JsonUnitOfWork

# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"

# Shared by every handler in the process so writers of the same product
# or order queue behind one another.
PRODUCT_LOCKS = LockRegistry()
ORDER_LOCKS = LockRegistry()

_stores: dict[Path, JsonStore] = {}
_stores_guard = threading.Lock()


def data_dir() -> Path:
    return Path(os.getenv("STOREOPS_DATA_DIR") or _DEFAULT_DATA_DIR)


def store() -> JsonStore:
    """One JsonStore per file, so its lock covers every unit of work."""
    path = data_dir() / "store.json"
    with _stores_guard:
        if path not in _stores:
            _stores[path] = JsonStore(path)
        return _stores[path]


def unit_of_work() -> UnitOfWork:
    return JsonUnitOfWork(store())


def catalog() -> JsonCatalog:
    return JsonCatalog(data_dir() / "products.json")


def customer_directory() -> JsonCustomerDirectory:
    return JsonCustomerDirectory(data_dir() / "customers.json")
