"""Application service: Complete Order use case.

Moves a PENDING order to COMPLETED.  Stock was already reserved when the
order was placed, so completion touches nothing but the order itself.
"""

from __future__ import annotations

from orderdesk.application.dto import OrderDTO
from orderdesk.application.instrumentation import log_use_case
from orderdesk.application.mapping import order_to_dto
from orderdesk.domain.exceptions import EntityNotFoundError
from orderdesk.domain.repository.customer_repository import CustomerRepository
from orderdesk.domain.repository.order_repository import OrderRepository
from orderdesk.domain.service.locking import KeyedLocks


class CompleteOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        customer_repo: CustomerRepository,
        order_locks: KeyedLocks | None = None,
    ) -> None:
        self._order_repo = order_repo
        self._customer_repo = customer_repo
        self._order_locks = order_locks or KeyedLocks()

    @log_use_case("complete_order")
    def handle(self, order_id: int) -> OrderDTO:
        with self._order_locks.hold([str(order_id)]):
            order = self._order_repo.get_by_id(order_id)
            if order is None:
                raise EntityNotFoundError("Order", order_id)

            order.complete()
            self._order_repo.save(order)

        customer = self._customer_repo.get_by_id(order.customer_id)
        return order_to_dto(order, customer)
