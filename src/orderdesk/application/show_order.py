"""Application service: Show Order use case (query)."""

from __future__ import annotations

from orderdesk.application.dto import OrderDTO
from orderdesk.application.mapping import order_to_dto
from orderdesk.domain.exceptions import EntityNotFoundError
from orderdesk.domain.model.order import Order
from orderdesk.domain.repository.customer_repository import CustomerRepository
from orderdesk.domain.repository.order_repository import OrderRepository


class ShowOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        customer_repo: CustomerRepository,
    ) -> None:
        self._order_repo = order_repo
        self._customer_repo = customer_repo

    def handle(self, order_id: int) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError("Order", order_id)
        return self._to_dto(order)

    def by_number(self, order_number: str) -> OrderDTO:
        order = self._order_repo.get_by_order_number(order_number.strip())
        if order is None:
            raise EntityNotFoundError(
                "Order", order_number, f"Order '{order_number}' not found"
            )
        return self._to_dto(order)

    def _to_dto(self, order: Order) -> OrderDTO:
        return order_to_dto(order, self._customer_repo.get_by_id(order.customer_id))
