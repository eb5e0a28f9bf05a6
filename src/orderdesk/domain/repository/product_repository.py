"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, SQL, in-memory)
live in the infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

from orderdesk.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def get_by_ids(self, product_ids: Iterable[str]) -> dict[str, Product]:
        """Return the products that exist among *product_ids*, keyed by ID.

        Missing IDs are simply absent from the result.
        """

    @abstractmethod
    def get_by_sku(self, sku: str) -> Product | None:
        """Return a product by its SKU (case-insensitive), or None."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog, including inactive ones."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new product, or the catalog fields of an existing one.

        The stored stock quantity of an existing product is left untouched;
        stock only changes through ``update_stock``.
        """

    @abstractmethod
    def update_stock(self, products: list[Product]) -> None:
        """Write the stock quantity of several products as one unit.

        Either every product's new stock is stored or none is.
        """
