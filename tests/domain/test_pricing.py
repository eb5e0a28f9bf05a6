"""Unit tests for the pricing policy."""

from decimal import Decimal

import pytest

from orderdesk.domain.model.customer import CustomerTier
from orderdesk.domain.service.pricing import (
    PricingPolicy,
    calculate_discount,
    calculate_total,
)


class TestCalculateDiscount:

    @pytest.mark.parametrize("subtotal", ["0", "1", "99.99", "200", "12345.67"])
    def test_regular_gets_nothing(self, subtotal):
        assert calculate_discount(Decimal(subtotal), CustomerTier.REGULAR) == 0

    @pytest.mark.parametrize("subtotal", ["1", "99.99", "200", "12345.67"])
    def test_premium_gets_five_percent(self, subtotal):
        s = Decimal(subtotal)
        assert calculate_discount(s, CustomerTier.PREMIUM) == s * Decimal("0.05")

    @pytest.mark.parametrize("subtotal", ["1", "99.99", "200", "12345.67"])
    def test_vip_gets_ten_percent(self, subtotal):
        s = Decimal(subtotal)
        assert calculate_discount(s, CustomerTier.VIP) == s * Decimal("0.10")

    @pytest.mark.parametrize("tier", list(CustomerTier))
    def test_zero_subtotal_means_zero_discount(self, tier):
        assert calculate_discount(Decimal("0"), tier) == 0

    def test_no_rounding_applied(self):
        assert calculate_discount(Decimal("0.01"), CustomerTier.PREMIUM) == Decimal("0.0005")

    def test_vip_scenario(self):
        assert calculate_discount(Decimal("200"), CustomerTier.VIP) == Decimal("20")


class TestCalculateTotal:

    def test_subtracts_discount(self):
        assert calculate_total(Decimal("200"), Decimal("20")) == Decimal("180")

    def test_discount_larger_than_subtotal_goes_negative(self):
        assert calculate_total(Decimal("10"), Decimal("15")) == Decimal("-5")


class TestPricingPolicy:

    def test_delegates_to_module_functions(self):
        policy = PricingPolicy()
        discount = policy.calculate_discount(Decimal("100"), CustomerTier.PREMIUM)
        assert discount == Decimal("5.00")
        assert policy.calculate_total(Decimal("100"), discount) == Decimal("95.00")
