"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from orderdesk.domain.model.order import Order, OrderLineItem, OrderStatus
from orderdesk.domain.model.pagination import Page, PageRequest
from orderdesk.domain.model.value_objects import Money, Quantity
from orderdesk.domain.repository.order_repository import OrderRepository
from orderdesk.infrastructure.persistence.json_file import JsonFileStore


class JsonOrderRepository(JsonFileStore, OrderRepository):

    # --- OrderRepository interface --------------------------------------------

    def next_id(self) -> int:
        orders = self._load_raw()
        if not orders:
            return 1
        return max(o["id"] for o in orders) + 1

    def get_by_id(self, order_id: int) -> Order | None:
        for raw in self._load_raw():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def get_by_order_number(self, order_number: str) -> Order | None:
        for raw in self._load_raw():
            if raw["order_number"] == order_number:
                return self._to_domain(raw)
        return None

    def list_page(
        self,
        request: PageRequest,
        status: OrderStatus | None = None,
        customer_id: str | None = None,
    ) -> Page[Order]:
        orders = [
            self._to_domain(raw)
            for raw in self._load_raw()
            if (status is None or raw["status"] == status.value)
            and (customer_id is None or raw["customer_id"] == customer_id)
        ]
        orders.sort(key=lambda o: (o.created_at, o.id or 0), reverse=True)
        return Page.of(orders, request)

    def save(self, order: Order) -> None:
        with self._lock:
            if order.id is None:
                order.id = self.next_id()
            self._upsert_raw([self._to_raw(order)], key="id")

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "order_number": order.order_number,
            "customer_id": order.customer_id,
            "status": order.status.value,
            "subtotal": str(order.subtotal),
            "discount": str(order.discount),
            "total": str(order.total),
            "created_at": order.created_at.isoformat(),
            "updated_at": order.updated_at.isoformat(),
            "items": [
                {
                    "product_id": item.product_id,
                    "product_name": item.product_name,
                    "sku": item.sku,
                    "quantity": item.quantity.value,
                    "unit_price": str(item.unit_price.amount),
                    "currency": item.unit_price.currency,
                }
                for item in order.items
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        items = [
            OrderLineItem(
                product_id=i["product_id"],
                product_name=i["product_name"],
                sku=i.get("sku", ""),
                quantity=Quantity(i["quantity"]),
                unit_price=Money(Decimal(i["unit_price"]), i.get("currency", "USD")),
            )
            for i in raw["items"]
        ]
        return Order(
            id=raw["id"],
            order_number=raw["order_number"],
            customer_id=raw["customer_id"],
            items=items,
            subtotal=Decimal(raw["subtotal"]),
            discount=Decimal(raw["discount"]),
            total=Decimal(raw["total"]),
            status=OrderStatus(raw["status"]),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
        )
