"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from decimal import Decimal

from orderdesk.domain.exceptions import EntityNotFoundError
from orderdesk.domain.model.product import Product
from orderdesk.domain.model.value_objects import Money
from orderdesk.domain.repository.product_repository import ProductRepository
from orderdesk.infrastructure.persistence.json_file import JsonFileStore


class JsonProductRepository(JsonFileStore, ProductRepository):

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        return self._load().get(product_id)

    def get_by_ids(self, product_ids: Iterable[str]) -> dict[str, Product]:
        wanted = set(product_ids)
        return {pid: p for pid, p in self._load().items() if pid in wanted}

    def get_by_sku(self, sku: str) -> Product | None:
        needle = sku.strip().upper()
        for product in self._load().values():
            if product.sku.upper() == needle:
                return product
        return None

    def list_all(self) -> list[Product]:
        return list(self._load().values())

    def save(self, product: Product) -> None:
        self._upsert_raw([self._to_raw(product)], key="id", merge=_keep_stored_stock)

    def update_stock(self, products: list[Product]) -> None:
        with self._lock:
            stored = {raw["id"]: raw for raw in self._load_raw()}
            for product in products:
                raw = stored.get(product.id)
                if raw is None:
                    raise EntityNotFoundError("Product", product.id)
                raw["stock_quantity"] = product.stock_quantity
                raw["updated_at"] = product.updated_at.isoformat()
            self._persist_raw(list(stored.values()))

    # --- Serialization helpers ------------------------------------------------

    def _load(self) -> dict[str, Product]:
        return {raw["id"]: self._to_domain(raw) for raw in self._load_raw()}

    @staticmethod
    def _to_raw(p: Product) -> dict:
        return {
            "id": p.id,
            "name": p.name,
            "sku": p.sku,
            "description": p.description,
            "price": str(p.price.amount),
            "currency": p.price.currency,
            "stock_quantity": p.stock_quantity,
            "is_active": p.is_active,
            "created_at": p.created_at.isoformat(),
            "updated_at": p.updated_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=raw["id"],
            name=raw["name"],
            sku=raw["sku"],
            description=raw.get("description"),
            price=Money(Decimal(raw["price"]), raw.get("currency", "USD")),
            stock_quantity=raw.get("stock_quantity", 0),
            is_active=raw.get("is_active", True),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
        )


def _keep_stored_stock(stored: dict, new: dict) -> dict:
    return {**new, "stock_quantity": stored.get("stock_quantity", 0)}
