"""Application service: Add Customer use case."""

from __future__ import annotations

from orderdesk.application.dto import CustomerDTO
from orderdesk.application.instrumentation import log_use_case
from orderdesk.application.mapping import customer_to_dto
from orderdesk.domain.exceptions import ValidationError
from orderdesk.domain.model.customer import Customer, CustomerTier
from orderdesk.domain.repository.customer_repository import CustomerRepository


class AddCustomerHandler:

    def __init__(self, customer_repo: CustomerRepository) -> None:
        self._customer_repo = customer_repo

    @log_use_case("add_customer")
    def handle(
        self,
        first_name: str,
        last_name: str,
        email: str,
        tier: str = CustomerTier.REGULAR.value,
        phone_number: str | None = None,
    ) -> CustomerDTO:
        """Register a customer; emails are unique (case-insensitive)."""
        if email and self._customer_repo.get_by_email(email) is not None:
            raise ValidationError(f"Customer with email '{email}' already exists")

        all_customers = self._customer_repo.list_all()
        if all_customers:
            next_id = str(max(int(c.id) for c in all_customers) + 1)
        else:
            next_id = "1"

        customer = Customer.register(
            customer_id=next_id,
            first_name=first_name,
            last_name=last_name,
            email=email,
            tier=CustomerTier.parse(tier),
            phone_number=phone_number,
        )
        self._customer_repo.save(customer)
        return customer_to_dto(customer)
