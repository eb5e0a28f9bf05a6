"""Application service: order listings (all orders, one customer's history)."""

from __future__ import annotations

from orderdesk.application.dto import OrderDTO, PageDTO
from orderdesk.application.mapping import order_to_dto, page_to_dto
from orderdesk.domain.exceptions import EntityNotFoundError
from orderdesk.domain.model.order import Order, OrderStatus
from orderdesk.domain.model.pagination import DEFAULT_PAGE_SIZE, PageRequest
from orderdesk.domain.repository.customer_repository import CustomerRepository
from orderdesk.domain.repository.order_repository import OrderRepository


class ListOrdersHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        customer_repo: CustomerRepository,
    ) -> None:
        self._order_repo = order_repo
        self._customer_repo = customer_repo

    def handle(
        self,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
        status: OrderStatus | None = None,
    ) -> PageDTO[OrderDTO]:
        """Return one page of orders, newest first."""
        result = self._order_repo.list_page(PageRequest(page, page_size), status)
        return page_to_dto(result, self._to_dto)

    def _to_dto(self, order: Order) -> OrderDTO:
        return order_to_dto(order, self._customer_repo.get_by_id(order.customer_id))


class ListCustomerOrdersHandler:
    """Order history of one customer, newest first."""

    def __init__(
        self,
        order_repo: OrderRepository,
        customer_repo: CustomerRepository,
    ) -> None:
        self._order_repo = order_repo
        self._customer_repo = customer_repo

    def handle(
        self,
        customer_id: str,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> PageDTO[OrderDTO]:
        customer = self._customer_repo.get_by_id(customer_id)
        if customer is None:
            raise EntityNotFoundError("Customer", customer_id)

        result = self._order_repo.list_page(
            PageRequest(page, page_size), customer_id=customer.id
        )
        return page_to_dto(result, lambda order: order_to_dto(order, customer))
