"""Order aggregate — the core of the domain.

The Order is an aggregate root that owns its line items.  Its money
figures are fixed when the order is placed and are never recomputed from
live product prices.
"""

from __future__ import annotations

import random
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum

from orderdesk.domain.exceptions import InvalidStatusTransitionError, ValidationError
from orderdesk.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    PENDING = "Pending"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"

    @classmethod
    def parse(cls, raw: str) -> OrderStatus:
        for status in cls:
            if status.value.lower() == raw.strip().lower():
                return status
        raise ValidationError(
            f"Unknown order status '{raw}' "
            f"(expected one of: {', '.join(s.value for s in cls)})"
        )


@dataclass(frozen=True)
class OrderLineItem:
    """Captures the price snapshot of a product at order-creation time.

    Immutable: no partial-quantity edits and no re-pricing.
    """

    product_id: str
    product_name: str
    sku: str
    quantity: Quantity
    unit_price: Money  # locked at order-creation time

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


def collapse_quantities(pairs: Iterable[tuple[str, int]]) -> dict[str, int]:
    """Sum quantities per product id, keeping first-seen order.

    A request may list the same product twice; it is reserved once.
    """
    result: dict[str, int] = {}
    for product_id, qty in pairs:
        result[product_id] = result.get(product_id, 0) + qty
    return result


def generate_order_number(
    now: datetime | None = None,
    rng: random.Random | None = None,
) -> str:
    """Human-readable order number: ``ORD-yyyyMMddHHmmss-NNNN`` (UTC)."""
    now = now or datetime.now(timezone.utc)
    rng = rng or random.Random()
    return f"ORD-{now.astimezone(timezone.utc):%Y%m%d%H%M%S}-{rng.randint(1000, 9999)}"


@dataclass
class Order:
    """Aggregate root for customer orders.

    Use the ``Order.place()`` factory for new orders — it enforces all
    business rules.  The ``__init__`` is intentionally simple so the
    repository can reconstitute persisted orders without re-validating.
    """

    id: int | None
    order_number: str
    customer_id: str
    items: list[OrderLineItem]
    subtotal: Decimal
    discount: Decimal
    total: Decimal
    status: OrderStatus = OrderStatus.PENDING
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def place(
        order_number: str,
        customer_id: str,
        items: list[OrderLineItem],
        discount: Decimal,
        total: Decimal,
    ) -> Order:
        """Create a new PENDING order.

        Stock for ``items`` must already be reserved by the caller.
        """
        if not customer_id:
            raise ValidationError("Customer ID is required")
        if not items:
            raise ValidationError("Order must contain at least one item")

        subtotal = subtotal_of(items)
        if total != subtotal - discount:
            raise ValidationError(
                f"Order total {total} does not equal subtotal {subtotal} "
                f"minus discount {discount}"
            )

        now = datetime.now(timezone.utc)
        return Order(
            id=None,
            order_number=order_number,
            customer_id=customer_id,
            items=list(items),
            subtotal=subtotal,
            discount=discount,
            total=total,
            created_at=now,
            updated_at=now,
        )

    # --- State transitions ----------------------------------------------------

    def complete(self) -> None:
        """Transition PENDING -> COMPLETED."""
        if self.status == OrderStatus.COMPLETED:
            raise InvalidStatusTransitionError(
                self.status.value, "complete", "Order is already completed"
            )
        self._require_pending("complete")
        self._transition(OrderStatus.COMPLETED)

    def cancel(self) -> None:
        """Transition PENDING -> CANCELLED.

        Reserved stock must be released *before* calling this
        (coordinated by the application handler via the InventoryLedger).
        """
        self.ensure_cancellable()
        self._transition(OrderStatus.CANCELLED)

    def ensure_cancellable(self) -> None:
        """Raise unless ``cancel()`` would succeed; no state change."""
        if self.status == OrderStatus.CANCELLED:
            raise InvalidStatusTransitionError(
                self.status.value, "cancel", "Order is already cancelled"
            )
        self._require_pending("cancel")

    # --- Computed properties --------------------------------------------------

    def quantities_by_product(self) -> dict[str, int]:
        return collapse_quantities(
            (item.product_id, item.quantity.value) for item in self.items
        )

    # --- Internal helpers -----------------------------------------------------

    def _require_pending(self, action: str) -> None:
        if self.status != OrderStatus.PENDING:
            raise InvalidStatusTransitionError(self.status.value, action)

    def _transition(self, status: OrderStatus) -> None:
        self.status = status
        self.updated_at = datetime.now(timezone.utc)


def subtotal_of(items: Iterable[OrderLineItem]) -> Decimal:
    result = Money.zero()
    for item in items:
        result = result + item.line_total
    return result.amount
