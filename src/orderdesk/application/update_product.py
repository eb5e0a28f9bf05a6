"""Application service: Update Product use cases (price change, deactivation)."""

from __future__ import annotations

from orderdesk.application.dto import ProductDTO
from orderdesk.application.instrumentation import log_use_case
from orderdesk.application.mapping import product_to_dto
from orderdesk.domain.exceptions import EntityNotFoundError
from orderdesk.domain.model.product import Product
from orderdesk.domain.model.value_objects import Money
from orderdesk.domain.repository.product_repository import ProductRepository


class UpdateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    @log_use_case("update_product_price")
    def handle(self, product_id: str, new_price: str) -> ProductDTO:
        """Update a product's price.

        This does NOT affect any existing orders — they captured a
        price snapshot at creation time.
        """
        product = self._get(product_id)
        product.update_price(Money.of(new_price))
        self._product_repo.save(product)
        return product_to_dto(product)

    @log_use_case("deactivate_product")
    def deactivate(self, product_id: str) -> ProductDTO:
        """Hide a product from search and from new orders.

        Existing orders keep referencing it, and cancelling them still
        returns stock to it.
        """
        product = self._get(product_id)
        product.deactivate()
        self._product_repo.save(product)
        return product_to_dto(product)

    def _get(self, product_id: str) -> Product:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError("Product", product_id)
        return product
