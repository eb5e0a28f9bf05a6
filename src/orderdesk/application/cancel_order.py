"""Application service: Cancel Order use case.

Only PENDING orders can be cancelled.  Cancelling gives the order's
reserved stock back through the InventoryLedger, then marks the order
CANCELLED.  Both steps run under the order's lock so a concurrent
cancel or complete of the same order sees the final status.  The
products stay locked until the order is saved; if the save fails the
stock is taken back before any other order can claim it.
"""

from __future__ import annotations

import logging

from orderdesk.application.dto import OrderDTO
from orderdesk.application.instrumentation import log_use_case
from orderdesk.application.mapping import order_to_dto
from orderdesk.domain.exceptions import EntityNotFoundError, OrderPersistenceError
from orderdesk.domain.model.order import Order
from orderdesk.domain.repository.customer_repository import CustomerRepository
from orderdesk.domain.repository.order_repository import OrderRepository
from orderdesk.domain.service.inventory_ledger import InventoryLedger
from orderdesk.domain.service.locking import KeyedLocks

logger = logging.getLogger(__name__)


class CancelOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        customer_repo: CustomerRepository,
        ledger: InventoryLedger,
        order_locks: KeyedLocks | None = None,
    ) -> None:
        self._order_repo = order_repo
        self._customer_repo = customer_repo
        self._ledger = ledger
        self._order_locks = order_locks or KeyedLocks()

    @log_use_case("cancel_order")
    def handle(self, order_id: int) -> OrderDTO:
        with self._order_locks.hold([str(order_id)]):
            order = self._order_repo.get_by_id(order_id)
            if order is None:
                raise EntityNotFoundError("Order", order_id)

            # Check the transition before giving any stock back
            order.ensure_cancellable()

            with self._ledger.releasing(order.quantities_by_product()):
                order.cancel()
                self._save(order)

        customer = self._customer_repo.get_by_id(order.customer_id)
        return order_to_dto(order, customer)

    def _save(self, order: Order) -> None:
        try:
            self._order_repo.save(order)
        except Exception as exc:
            logger.error(
                "Saving cancelled order %s failed; its stock is being taken back",
                order.order_number,
            )
            raise OrderPersistenceError(
                f"Order {order.order_number} could not be cancelled; "
                f"its stock reservation was restored"
            ) from exc
