"""JSON-file-backed catalog and customer lookups (read-only).

The files are maintained by the catalog and account parts of the store;
the order engine only reads them.
"""

from __future__ import annotations

import json
from decimal import Decimal
from pathlib import Path

from storeops.domain.exceptions import PersistenceError
from storeops.domain.model.product import Customer, Product
from storeops.domain.model.value_objects import Money
from storeops.domain.repository.catalog_lookup import CatalogLookup, CustomerDirectory


def _load_list(file_path: Path) -> list[dict]:
    if not file_path.exists():
        return []
    try:
        return json.loads(file_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise PersistenceError(f"Cannot read {file_path}: {exc}") from exc


class JsonCatalog(CatalogLookup):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path

    def get_product(self, product_id: str) -> Product | None:
        return self._load().get(product_id)

    def list_all(self) -> list[Product]:
        return list(self._load().values())

    def _load(self) -> dict[str, Product]:
        return {
            str(item["id"]): Product(
                id=str(item["id"]),
                name=item["name"],
                price=Money(Decimal(str(item["price"])), item.get("currency", "USD")),
                is_active=item.get("is_active", True),
            )
            for item in _load_list(self._file_path)
        }


class JsonCustomerDirectory(CustomerDirectory):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path

    def get_customer(self, customer_id: str) -> Customer | None:
        for item in _load_list(self._file_path):
            if str(item["id"]) == customer_id:
                return Customer(
                    id=str(item["id"]),
                    name=item.get("name", ""),
                    is_active=item.get("is_active", True),
                )
        return None
