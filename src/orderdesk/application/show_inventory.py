"""Application service: Show Inventory use case (query)."""

from __future__ import annotations

from dataclasses import dataclass

from orderdesk.domain.repository.product_repository import ProductRepository
from orderdesk.domain.service.inventory_ledger import InventoryLedger


@dataclass(frozen=True)
class InventoryLineDTO:
    product_id: str
    product_name: str
    sku: str
    stock: int
    in_stock: bool


class ShowInventoryHandler:

    def __init__(self, product_repo: ProductRepository, ledger: InventoryLedger) -> None:
        self._product_repo = product_repo
        self._ledger = ledger

    def handle(self, include_inactive: bool = False) -> list[InventoryLineDTO]:
        products = [
            p for p in self._product_repo.list_all()
            if include_inactive or p.is_active
        ]
        return [
            InventoryLineDTO(
                product_id=p.id,
                product_name=p.name,
                sku=p.sku,
                stock=p.stock_quantity,
                in_stock=self._ledger.check_availability(p.id, 1),
            )
            for p in products
        ]
