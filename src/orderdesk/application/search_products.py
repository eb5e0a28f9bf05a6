"""Application service: Product queries (show one, search the catalog)."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from orderdesk.application.dto import PageDTO, ProductDTO
from orderdesk.application.mapping import page_to_dto, product_to_dto
from orderdesk.domain.exceptions import EntityNotFoundError, ValidationError
from orderdesk.domain.model.pagination import DEFAULT_PAGE_SIZE, Page, PageRequest
from orderdesk.domain.model.product import Product
from orderdesk.domain.repository.product_repository import ProductRepository

SORT_KEYS: dict[str, Callable[[Product], Any]] = {
    "name": lambda p: p.name.lower(),
    "price": lambda p: p.price,
    "stock": lambda p: p.stock_quantity,
    "created": lambda p: p.created_at,
}


class ShowProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: str) -> ProductDTO:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError("Product", product_id)
        return product_to_dto(product)

    def by_sku(self, sku: str) -> ProductDTO:
        product = self._product_repo.get_by_sku(sku)
        if product is None:
            raise EntityNotFoundError(
                "Product", sku, f"Product with SKU '{sku.strip().upper()}' not found"
            )
        return product_to_dto(product)


class SearchProductsHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        query: str | None = None,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
        description: str | None = None,
        sort_by: str = "name",
        descending: bool = False,
    ) -> PageDTO[ProductDTO]:
        """Search active products.

        *query* matches name or SKU, *description* matches the description;
        both are case-insensitive substrings.  Results are ordered by
        *sort_by* (name, price, stock or created), ties broken by id.
        """
        request = PageRequest(page, page_size)
        key = SORT_KEYS.get(sort_by.lower())
        if key is None:
            raise ValidationError(
                f"Cannot sort products by '{sort_by}' "
                f"(expected one of: {', '.join(SORT_KEYS)})"
            )

        needle = (query or "").strip().lower()
        about = (description or "").strip().lower()
        matches = [
            p for p in self._product_repo.list_all()
            if p.is_active
            and (not needle or needle in p.name.lower() or needle in p.sku.lower())
            and (not about or about in (p.description or "").lower())
        ]
        matches.sort(key=lambda p: p.id)
        matches.sort(key=key, reverse=descending)
        return page_to_dto(Page.of(matches, request), product_to_dto)
