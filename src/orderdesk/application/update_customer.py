"""Application service: Update Customer use cases (details, deactivation)."""

from __future__ import annotations

from orderdesk.application.dto import CustomerDTO
from orderdesk.application.instrumentation import log_use_case
from orderdesk.application.mapping import customer_to_dto
from orderdesk.domain.exceptions import EntityNotFoundError, ValidationError
from orderdesk.domain.model.customer import Customer, CustomerTier
from orderdesk.domain.repository.customer_repository import CustomerRepository


class UpdateCustomerHandler:

    def __init__(self, customer_repo: CustomerRepository) -> None:
        self._customer_repo = customer_repo

    @log_use_case("update_customer")
    def handle(
        self,
        customer_id: str,
        first_name: str | None = None,
        last_name: str | None = None,
        email: str | None = None,
        phone_number: str | None = None,
        tier: str | None = None,
    ) -> CustomerDTO:
        """Edit a customer's details; fields left as None keep their value.

        The email must stay unique across customers.  A tier change does
        not reprice existing orders.
        """
        customer = _get(self._customer_repo, customer_id)

        if email is not None:
            owner = self._customer_repo.get_by_email(email)
            if owner is not None and owner.id != customer.id:
                raise ValidationError(
                    f"Email '{email.strip()}' is already used by another customer"
                )

        customer.update_details(
            first_name=first_name,
            last_name=last_name,
            email=email,
            phone_number=phone_number,
            tier=CustomerTier.parse(tier) if tier is not None else None,
        )
        self._customer_repo.save(customer)
        return customer_to_dto(customer)


class DeactivateCustomerHandler:

    def __init__(self, customer_repo: CustomerRepository) -> None:
        self._customer_repo = customer_repo

    @log_use_case("deactivate_customer")
    def handle(self, customer_id: str) -> CustomerDTO:
        customer = _get(self._customer_repo, customer_id)
        customer.deactivate()
        self._customer_repo.save(customer)
        return customer_to_dto(customer)


def _get(customer_repo: CustomerRepository, customer_id: str) -> Customer:
    customer = customer_repo.get_by_id(customer_id)
    if customer is None:
        raise EntityNotFoundError("Customer", customer_id)
    return customer
