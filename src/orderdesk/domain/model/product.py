"""Product aggregate.

Products live independently of orders. They have their own lifecycle:
prices change, products are added and removed from the catalog.

``stock_quantity`` is stored on the product but only the InventoryLedger
domain service may change it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from orderdesk.domain.exceptions import ValidationError
from orderdesk.domain.model.value_objects import Money


@dataclass
class Product:
    """A product in the catalog.

    Invariant: ``stock_quantity`` is never negative.
    """

    id: str
    name: str
    sku: str
    price: Money
    stock_quantity: int = 0
    description: str | None = None
    is_active: bool = True
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def create(
        product_id: str,
        name: str,
        sku: str,
        price: Money,
        stock_quantity: int = 0,
        description: str | None = None,
    ) -> Product:
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        if not sku or not sku.strip():
            raise ValidationError("Product SKU is required")
        if price <= Money.zero(price.currency):
            raise ValidationError("Product price must be greater than zero")
        if stock_quantity < 0:
            raise ValidationError("Stock quantity cannot be negative")

        return Product(
            id=product_id,
            name=name.strip(),
            sku=sku.strip().upper(),
            price=price,
            stock_quantity=stock_quantity,
            description=description,
        )

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        This does NOT affect any existing orders because orders
        capture a price snapshot at creation time.
        """
        if new_price <= Money.zero(new_price.currency):
            raise ValidationError("Product price must be greater than zero")
        self.price = new_price
        self.updated_at = datetime.now(timezone.utc)

    def deactivate(self) -> None:
        """Soft-delete: the product disappears from search and ordering."""
        self.is_active = False
        self.updated_at = datetime.now(timezone.utc)

    # --- Stock mutation (InventoryLedger only) --------------------------------

    def decrease_stock(self, quantity: int) -> None:
        if quantity > self.stock_quantity:
            raise ValidationError(
                f"Stock of {self.name} cannot go below zero "
                f"(have {self.stock_quantity}, removing {quantity})"
            )
        self.stock_quantity -= quantity
        self.updated_at = datetime.now(timezone.utc)

    def increase_stock(self, quantity: int) -> None:
        self.stock_quantity += quantity
        self.updated_at = datetime.now(timezone.utc)
