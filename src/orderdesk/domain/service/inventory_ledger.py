"""Domain service: Inventory Ledger.

The ledger is the only component allowed to change a product's
``stock_quantity``.  Every operation takes a mapping of
product id -> quantity so that one order with several line items is
handled as a single batch.

Concurrency: ``reserve_bulk`` and ``release_bulk`` hold a per-product lock
for every product in the batch while they re-read stock, check it, and
write the new values.  Locks are taken in sorted id order so two batches
that overlap can never deadlock.  A check-then-decrement can therefore
never interleave with another one on the same product, and stock never
goes below zero.  The locks are process-wide; every ledger that shares a
``KeyedLocks`` instance shares the guarantee.

The batch is written with a single ``ProductRepository.update_stock`` call,
so a failure leaves no partial decrement behind.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from contextlib import contextmanager

from orderdesk.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    ValidationError,
)
from orderdesk.domain.model.product import Product
from orderdesk.domain.repository.product_repository import ProductRepository
from orderdesk.domain.service.locking import KeyedLocks

logger = logging.getLogger(__name__)


class InventoryLedger:

    def __init__(
        self,
        product_repo: ProductRepository,
        locks: KeyedLocks | None = None,
    ) -> None:
        self._product_repo = product_repo
        self._locks = locks or KeyedLocks()

    # --- Validation (side-effect free) ----------------------------------------

    def validate_bulk_availability(self, quantities: Mapping[str, int]) -> None:
        """Ensure every product exists and has at least the requested stock.

        Raises EntityNotFoundError or InsufficientStockError on the first
        violation found.
        """
        self._check_quantities(quantities)
        logger.debug("Validating stock for %d products", len(quantities))

        products = self._load_all(quantities)
        self._check_stock(products, quantities)

    def validate_availability(self, product_id: str, quantity: int) -> None:
        self.validate_bulk_availability({product_id: quantity})

    def check_availability(self, product_id: str, quantity: int) -> bool:
        """Non-raising variant: False for unknown products or short stock."""
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            logger.warning("Product not found: %s", product_id)
            return False
        return product.stock_quantity >= quantity

    # --- Mutation -------------------------------------------------------------

    def reserve_bulk(self, quantities: Mapping[str, int]) -> None:
        """Decrement stock for every product in the batch, or for none.

        Stock is re-read and re-checked under the product locks; a prior
        ``validate_bulk_availability`` is never trusted.
        """
        self._check_quantities(quantities)

        with self._locks.hold(list(quantities)):
            products = self._load_all(quantities)
            self._check_stock(products, quantities)

            for product_id, qty in quantities.items():
                products[product_id].decrease_stock(qty)

            self._product_repo.update_stock(list(products.values()))

        for product_id, qty in quantities.items():
            logger.info(
                "Reserved %d of %s, stock now %d",
                qty, products[product_id].name, products[product_id].stock_quantity,
            )

    def reserve(self, product_id: str, quantity: int) -> None:
        self.reserve_bulk({product_id: quantity})

    def release_bulk(self, quantities: Mapping[str, int]) -> None:
        """Return stock for every product in the batch.

        No upper bound is enforced: callers release exactly what a matching
        reservation removed.
        """
        with self.releasing(quantities):
            pass

    @contextmanager
    def releasing(self, quantities: Mapping[str, int]) -> Iterator[None]:
        """Return stock for the batch and keep it locked while the caller commits.

        The stock is written back before the body runs.  If the body raises,
        the same quantities are taken out again before the product locks are
        released, so nobody can have bought the returned units in between.
        The body must not move stock of these products itself.
        """
        self._check_quantities(quantities)

        with self._locks.hold(list(quantities)):
            products = self._load_all(quantities)

            for product_id, qty in quantities.items():
                products[product_id].increase_stock(qty)
            self._product_repo.update_stock(list(products.values()))

            try:
                yield
            except BaseException:
                logger.warning(
                    "Commit after release failed; taking back stock for %d products",
                    len(quantities),
                )
                for product_id, qty in quantities.items():
                    products[product_id].decrease_stock(qty)
                self._product_repo.update_stock(list(products.values()))
                raise

        for product_id, qty in quantities.items():
            logger.info(
                "Released %d of %s, stock now %d",
                qty, products[product_id].name, products[product_id].stock_quantity,
            )

    # --- Internal helpers -----------------------------------------------------

    @staticmethod
    def _check_quantities(quantities: Mapping[str, int]) -> None:
        if not quantities:
            raise ValidationError("At least one product quantity is required")
        for product_id, qty in quantities.items():
            if qty <= 0:
                raise ValidationError(
                    f"Quantity for product '{product_id}' must be positive"
                )

    def _load_all(self, quantities: Mapping[str, int]) -> dict[str, Product]:
        products = self._product_repo.get_by_ids(quantities.keys())
        for product_id in quantities:
            if product_id not in products:
                logger.warning("Product not found: %s", product_id)
                raise EntityNotFoundError("Product", product_id)
        return products

    @staticmethod
    def _check_stock(
        products: Mapping[str, Product],
        quantities: Mapping[str, int],
    ) -> None:
        for product_id, requested in quantities.items():
            product = products[product_id]
            if product.stock_quantity < requested:
                logger.warning(
                    "Insufficient stock for %s: available %d, requested %d",
                    product.name, product.stock_quantity, requested,
                )
                raise InsufficientStockError(
                    product.name, product.stock_quantity, requested
                )
