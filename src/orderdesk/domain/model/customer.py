"""Customer aggregate.

Customers are read-only from the ordering workflow's point of view; the
only thing an order cares about is the customer's tier, which drives the
discount rate.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from orderdesk.domain.exceptions import ValidationError

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class CustomerTier(Enum):
    REGULAR = "Regular"
    PREMIUM = "Premium"
    VIP = "VIP"

    @classmethod
    def parse(cls, raw: str) -> CustomerTier:
        for tier in cls:
            if tier.value.lower() == raw.strip().lower():
                return tier
        raise ValidationError(
            f"Unknown customer tier '{raw}' "
            f"(expected one of: {', '.join(t.value for t in cls)})"
        )


@dataclass
class Customer:
    """A customer record.

    Use ``Customer.register()`` for new customers; ``__init__`` is left
    plain so repositories can reconstitute stored records.
    """

    id: str
    first_name: str
    last_name: str
    email: str
    tier: CustomerTier = CustomerTier.REGULAR
    phone_number: str | None = None
    is_active: bool = True
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def register(
        customer_id: str,
        first_name: str,
        last_name: str,
        email: str,
        tier: CustomerTier = CustomerTier.REGULAR,
        phone_number: str | None = None,
    ) -> Customer:
        return Customer(
            id=customer_id,
            first_name=_required_name(first_name, "First name"),
            last_name=_required_name(last_name, "Last name"),
            email=_normalised_email(email),
            tier=tier,
            phone_number=_optional_phone(phone_number),
        )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def update_details(
        self,
        first_name: str | None = None,
        last_name: str | None = None,
        email: str | None = None,
        phone_number: str | None = None,
        tier: CustomerTier | None = None,
    ) -> None:
        """Change the given fields; ``None`` leaves a field as it is.

        An empty *phone_number* clears the phone.  A new tier only prices
        orders placed from now on.
        """
        # Validate everything before touching any field
        if first_name is not None:
            first_name = _required_name(first_name, "First name")
        if last_name is not None:
            last_name = _required_name(last_name, "Last name")
        if email is not None:
            email = _normalised_email(email)

        self.first_name = first_name or self.first_name
        self.last_name = last_name or self.last_name
        self.email = email or self.email
        if phone_number is not None:
            self.phone_number = _optional_phone(phone_number)
        if tier is not None:
            self.tier = tier
        self.updated_at = datetime.now(timezone.utc)

    def deactivate(self) -> None:
        """Soft-delete: hidden from listings, still resolvable by id."""
        self.is_active = False
        self.updated_at = datetime.now(timezone.utc)


def _required_name(value: str | None, label: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{label} is required")
    return value.strip()


def _normalised_email(email: str | None) -> str:
    if not email or not _EMAIL_PATTERN.match(email.strip()):
        raise ValidationError(f"Invalid email address: {email!r}")
    return email.strip().lower()


def _optional_phone(phone_number: str | None) -> str | None:
    if phone_number is None:
        return None
    return phone_number.strip() or None
