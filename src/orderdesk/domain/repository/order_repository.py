"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from orderdesk.domain.model.order import Order, OrderStatus
from orderdesk.domain.model.pagination import Page, PageRequest


class OrderRepository(ABC):

    @abstractmethod
    def next_id(self) -> int:
        """Generate the next unique order ID."""

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def get_by_order_number(self, order_number: str) -> Order | None:
        """Return an order by its human-readable number, or None."""

    @abstractmethod
    def list_page(
        self,
        request: PageRequest,
        status: OrderStatus | None = None,
        customer_id: str | None = None,
    ) -> Page[Order]:
        """Return one page of orders, newest first.

        *status* and *customer_id* narrow the listing when given.
        """

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist a new or updated order.

        Assigns ``order.id`` when it is None.  A subsequent ``get_by_id``
        must observe the write.
        """
