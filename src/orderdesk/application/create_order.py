"""Application service: Create Order use case.

Orchestrates the flow between the customer and product stores, the
InventoryLedger and the PricingPolicy.  One failing line item aborts the
whole order before any stock is touched.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from orderdesk.application.dto import OrderDTO, OrderItemSpec
from orderdesk.application.instrumentation import log_use_case
from orderdesk.application.mapping import order_to_dto
from orderdesk.domain.exceptions import (
    EntityNotFoundError,
    OrderPersistenceError,
    ValidationError,
)
from orderdesk.domain.model.order import (
    Order,
    OrderLineItem,
    collapse_quantities,
    generate_order_number,
    subtotal_of,
)
from orderdesk.domain.model.product import Product
from orderdesk.domain.model.value_objects import Quantity
from orderdesk.domain.repository.customer_repository import CustomerRepository
from orderdesk.domain.repository.order_repository import OrderRepository
from orderdesk.domain.repository.product_repository import ProductRepository
from orderdesk.domain.service.inventory_ledger import InventoryLedger
from orderdesk.domain.service.pricing import PricingPolicy

logger = logging.getLogger(__name__)


class CreateOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        customer_repo: CustomerRepository,
        product_repo: ProductRepository,
        ledger: InventoryLedger,
        pricing: PricingPolicy | None = None,
        order_number_factory: Callable[[], str] = generate_order_number,
    ) -> None:
        self._order_repo = order_repo
        self._customer_repo = customer_repo
        self._product_repo = product_repo
        self._ledger = ledger
        self._pricing = pricing or PricingPolicy()
        self._order_number_factory = order_number_factory

    @log_use_case("create_order")
    def handle(self, customer_id: str, item_specs: list[OrderItemSpec]) -> OrderDTO:
        """Place a new order.

        Steps:
        1. Validate the request shape.
        2. Resolve the customer (tier drives the discount).
        3. Collapse line items into one quantity per product.
        4. Fetch every referenced product in one batch.
        5. Validate stock for the whole batch.
        6. Build line items with *current* prices (snapshot) and a subtotal.
        7. Price the order for the customer's tier.
        8. Reserve stock for the whole batch.
        9. Persist the PENDING order; release the reservation if that fails.
        10. Return the stored order as a DTO.
        """
        self._validate_request(customer_id, item_specs)

        customer = self._customer_repo.get_by_id(customer_id)
        if customer is None:
            raise EntityNotFoundError("Customer", customer_id)

        quantities = collapse_quantities(
            (spec.product_id, spec.quantity) for spec in item_specs
        )
        products = self._load_products(quantities)

        self._ledger.validate_bulk_availability(quantities)

        line_items = [
            OrderLineItem(
                product_id=spec.product_id,
                product_name=products[spec.product_id].name,
                sku=products[spec.product_id].sku,
                quantity=Quantity(spec.quantity),
                unit_price=products[spec.product_id].price,  # <-- price snapshot
            )
            for spec in item_specs
        ]
        subtotal = subtotal_of(line_items)
        discount = self._pricing.calculate_discount(subtotal, customer.tier)
        total = self._pricing.calculate_total(subtotal, discount)

        order = Order.place(
            order_number=self._order_number_factory(),
            customer_id=customer.id,
            items=line_items,
            discount=discount,
            total=total,
        )

        self._ledger.reserve_bulk(quantities)
        self._persist(order, quantities)

        stored = self._order_repo.get_by_id(order.id)  # type: ignore[arg-type]
        return order_to_dto(stored or order, customer)

    # --- Internal helpers -----------------------------------------------------

    @staticmethod
    def _validate_request(customer_id: str, item_specs: list[OrderItemSpec]) -> None:
        if not customer_id or not str(customer_id).strip():
            raise ValidationError("Customer ID is required")
        if not item_specs:
            raise ValidationError("Order must contain at least one item")
        for spec in item_specs:
            if not spec.product_id or not str(spec.product_id).strip():
                raise ValidationError("Product ID is required for all order items")
            if isinstance(spec.quantity, bool) or not isinstance(spec.quantity, int):
                raise ValidationError("Quantity must be a whole number")
            if spec.quantity <= 0:
                raise ValidationError("Quantity must be greater than zero")

    def _load_products(self, quantities: dict[str, int]) -> dict[str, Product]:
        products = self._product_repo.get_by_ids(quantities.keys())
        for product_id in quantities:
            product = products.get(product_id)
            if product is None or not product.is_active:
                raise EntityNotFoundError("Product", product_id)
        return products

    def _persist(self, order: Order, quantities: dict[str, int]) -> None:
        """Store the order, or undo the reservation and fail loudly."""
        try:
            self._order_repo.save(order)
        except Exception as exc:
            logger.error(
                "Saving order %s failed after stock was reserved; releasing %d products",
                order.order_number, len(quantities),
            )
            try:
                self._ledger.release_bulk(quantities)
            except Exception:
                logger.exception(
                    "Releasing stock for unsaved order %s failed", order.order_number
                )
                raise OrderPersistenceError(
                    f"Order {order.order_number} could not be saved, "
                    f"and its reserved stock could not be released"
                ) from exc
            raise OrderPersistenceError(
                f"Order {order.order_number} could not be saved; "
                f"reserved stock has been released"
            ) from exc
