"""JSON-file-backed implementation of CustomerRepository."""

from __future__ import annotations

from datetime import datetime

from orderdesk.domain.model.customer import Customer, CustomerTier
from orderdesk.domain.repository.customer_repository import CustomerRepository
from orderdesk.infrastructure.persistence.json_file import JsonFileStore


class JsonCustomerRepository(JsonFileStore, CustomerRepository):

    # --- CustomerRepository interface -----------------------------------------

    def get_by_id(self, customer_id: str) -> Customer | None:
        for raw in self._load_raw():
            if raw["id"] == customer_id:
                return self._to_domain(raw)
        return None

    def get_by_email(self, email: str) -> Customer | None:
        needle = email.strip().lower()
        for raw in self._load_raw():
            if raw["email"].lower() == needle:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Customer]:
        return [self._to_domain(raw) for raw in self._load_raw()]

    def save(self, customer: Customer) -> None:
        self._upsert_raw([self._to_raw(customer)], key="id")

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(customer: Customer) -> dict:
        return {
            "id": customer.id,
            "first_name": customer.first_name,
            "last_name": customer.last_name,
            "email": customer.email,
            "phone_number": customer.phone_number,
            "tier": customer.tier.value,
            "is_active": customer.is_active,
            "created_at": customer.created_at.isoformat(),
            "updated_at": customer.updated_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Customer:
        return Customer(
            id=raw["id"],
            first_name=raw["first_name"],
            last_name=raw["last_name"],
            email=raw["email"],
            phone_number=raw.get("phone_number"),
            tier=CustomerTier(raw.get("tier", CustomerTier.REGULAR.value)),
            is_active=raw.get("is_active", True),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
        )
