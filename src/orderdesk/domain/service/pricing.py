"""Domain service: Pricing Policy.

Pure functions from (subtotal, tier) to a discount, and from
(subtotal, discount) to a total.  No state, no I/O, no failure modes.
"""

from __future__ import annotations

from decimal import Decimal

from orderdesk.domain.model.customer import CustomerTier

DISCOUNT_RATES: dict[CustomerTier, Decimal] = {
    CustomerTier.REGULAR: Decimal("0"),
    CustomerTier.PREMIUM: Decimal("0.05"),
    CustomerTier.VIP: Decimal("0.10"),
}


def discount_rate(tier: CustomerTier) -> Decimal:
    return DISCOUNT_RATES.get(tier, Decimal("0"))


def calculate_discount(subtotal: Decimal, tier: CustomerTier) -> Decimal:
    """Discount owed on *subtotal* for a customer of *tier*.

    No rounding is applied beyond Decimal's own precision.
    """
    return subtotal * discount_rate(tier)


def calculate_total(subtotal: Decimal, discount: Decimal) -> Decimal:
    """``subtotal - discount``.

    Not floored at zero: a discount larger than the subtotal yields a
    negative total.
    """
    return subtotal - discount


class PricingPolicy:
    """Injectable wrapper around the module-level pricing functions."""

    def calculate_discount(self, subtotal: Decimal, tier: CustomerTier) -> Decimal:
        return calculate_discount(subtotal, tier)

    def calculate_total(self, subtotal: Decimal, discount: Decimal) -> Decimal:
        return calculate_total(subtotal, discount)
