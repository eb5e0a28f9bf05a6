"""Application service: Customer queries.

Inactive customers can still be looked up by id (their orders must stay
readable) but are left out of listings.
"""

from __future__ import annotations

from orderdesk.application.dto import CustomerDTO
from orderdesk.application.mapping import customer_to_dto
from orderdesk.domain.exceptions import EntityNotFoundError
from orderdesk.domain.repository.customer_repository import CustomerRepository


class ShowCustomerHandler:

    def __init__(self, customer_repo: CustomerRepository) -> None:
        self._customer_repo = customer_repo

    def handle(self, customer_id: str) -> CustomerDTO:
        customer = self._customer_repo.get_by_id(customer_id)
        if customer is None:
            raise EntityNotFoundError("Customer", customer_id)
        return customer_to_dto(customer)


class ListCustomersHandler:

    def __init__(self, customer_repo: CustomerRepository) -> None:
        self._customer_repo = customer_repo

    def handle(self) -> list[CustomerDTO]:
        customers = [c for c in self._customer_repo.list_all() if c.is_active]
        customers.sort(key=lambda c: (c.last_name.lower(), c.first_name.lower()))
        return [customer_to_dto(c) for c in customers]
