"""Application service: Add Product use case."""

from __future__ import annotations

from orderdesk.application.dto import ProductDTO
from orderdesk.application.instrumentation import log_use_case
from orderdesk.application.mapping import product_to_dto
from orderdesk.domain.exceptions import ValidationError
from orderdesk.domain.model.product import Product
from orderdesk.domain.model.value_objects import Money
from orderdesk.domain.repository.product_repository import ProductRepository


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    @log_use_case("add_product")
    def handle(
        self,
        name: str,
        sku: str,
        price: str,
        stock_quantity: int = 0,
        description: str | None = None,
    ) -> ProductDTO:
        """Add a new product to the catalog with its opening stock."""
        if sku and self._product_repo.get_by_sku(sku) is not None:
            raise ValidationError(f"Product with SKU '{sku.strip().upper()}' already exists")

        # Auto-assign ID based on existing products
        all_products = self._product_repo.list_all()
        if all_products:
            next_id = str(max(int(p.id) for p in all_products) + 1)
        else:
            next_id = "1"

        product = Product.create(
            product_id=next_id,
            name=name,
            sku=sku,
            price=Money.of(price),
            stock_quantity=stock_quantity,
            description=description,
        )
        self._product_repo.save(product)
        return product_to_dto(product)
