"""In-memory fake repositories for testing.

These implement the same abstract interfaces as the JSON repositories
but keep everything in a dict. No file I/O, no side effects.

Like a real store they hand out copies, so a caller mutating an entity
changes nothing until it saves it.
"""

from __future__ import annotations

import copy
import threading
from collections.abc import Iterable

from orderdesk.domain.exceptions import EntityNotFoundError
from orderdesk.domain.model.customer import Customer
from orderdesk.domain.model.order import Order, OrderStatus
from orderdesk.domain.model.pagination import Page, PageRequest
from orderdesk.domain.model.product import Product
from orderdesk.domain.repository.customer_repository import CustomerRepository
from orderdesk.domain.repository.order_repository import OrderRepository
from orderdesk.domain.repository.product_repository import ProductRepository


class FakeOrderRepository(OrderRepository):

    def __init__(self) -> None:
        self._store: dict[int, Order] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def next_id(self) -> int:
        return self._next_id

    def get_by_id(self, order_id: int) -> Order | None:
        return copy.deepcopy(self._store.get(order_id))

    def get_by_order_number(self, order_number: str) -> Order | None:
        for order in self._store.values():
            if order.order_number == order_number:
                return copy.deepcopy(order)
        return None

    def list_page(
        self,
        request: PageRequest,
        status: OrderStatus | None = None,
        customer_id: str | None = None,
    ) -> Page[Order]:
        orders = [
            copy.deepcopy(o) for o in self._store.values()
            if (status is None or o.status == status)
            and (customer_id is None or o.customer_id == customer_id)
        ]
        orders.sort(key=lambda o: (o.created_at, o.id or 0), reverse=True)
        return Page.of(orders, request)

    def save(self, order: Order) -> None:
        with self._lock:
            if order.id is None:
                order.id = self._next_id
                self._next_id += 1
            self._store[order.id] = copy.deepcopy(order)

    # --- Test helpers ---------------------------------------------------------

    def all_orders(self) -> list[Order]:
        return [copy.deepcopy(o) for o in self._store.values()]


class FailingOrderRepository(FakeOrderRepository):
    """Stores nothing: every save blows up like a lost database connection."""

    def save(self, order: Order) -> None:
        raise ConnectionError("order store unavailable")


class FakeCustomerRepository(CustomerRepository):

    def __init__(self, customers: list[Customer] | None = None) -> None:
        self._store: dict[str, Customer] = {}
        for c in customers or []:
            self._store[c.id] = c

    def get_by_id(self, customer_id: str) -> Customer | None:
        return copy.deepcopy(self._store.get(customer_id))

    def get_by_email(self, email: str) -> Customer | None:
        for c in self._store.values():
            if c.email.lower() == email.strip().lower():
                return copy.deepcopy(c)
        return None

    def list_all(self) -> list[Customer]:
        return [copy.deepcopy(c) for c in self._store.values()]

    def save(self, customer: Customer) -> None:
        self._store[customer.id] = copy.deepcopy(customer)


class FakeProductRepository(ProductRepository):

    def __init__(self, products: list[Product] | None = None) -> None:
        self._store: dict[str, Product] = {}
        self._lock = threading.Lock()
        for p in products or []:
            self._store[p.id] = p

    def get_by_id(self, product_id: str) -> Product | None:
        return copy.deepcopy(self._store.get(product_id))

    def get_by_ids(self, product_ids: Iterable[str]) -> dict[str, Product]:
        with self._lock:
            return {
                pid: copy.deepcopy(self._store[pid])
                for pid in product_ids
                if pid in self._store
            }

    def get_by_sku(self, sku: str) -> Product | None:
        for p in self._store.values():
            if p.sku.upper() == sku.strip().upper():
                return copy.deepcopy(p)
        return None

    def list_all(self) -> list[Product]:
        return [copy.deepcopy(p) for p in self._store.values()]

    def save(self, product: Product) -> None:
        with self._lock:
            stored = self._store.get(product.id)
            saved = copy.deepcopy(product)
            if stored is not None:
                saved.stock_quantity = stored.stock_quantity
            self._store[product.id] = saved

    def update_stock(self, products: list[Product]) -> None:
        with self._lock:
            for p in products:
                if p.id not in self._store:
                    raise EntityNotFoundError("Product", p.id)
            for p in products:
                self._store[p.id].stock_quantity = p.stock_quantity

    # --- Test helpers ---------------------------------------------------------

    def stock_of(self, product_id: str) -> int:
        return self._store[product_id].stock_quantity
