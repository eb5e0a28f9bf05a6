"""Domain -> DTO mapping shared by the use-case handlers."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import TypeVar

from orderdesk.application.dto import (
    CustomerDTO,
    OrderDTO,
    OrderLineItemDTO,
    PageDTO,
    ProductDTO,
)
from orderdesk.domain.model.customer import Customer
from orderdesk.domain.model.order import Order
from orderdesk.domain.model.pagination import Page
from orderdesk.domain.model.product import Product
from orderdesk.domain.model.value_objects import format_amount

S = TypeVar("S")
T = TypeVar("T")


def _timestamp(value: datetime) -> str:
    return value.strftime("%Y-%m-%d %H:%M UTC")


def order_to_dto(order: Order, customer: Customer | None) -> OrderDTO:
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        order_number=order.order_number,
        customer_id=order.customer_id,
        customer_name=customer.full_name if customer else "",
        customer_email=customer.email if customer else "",
        customer_tier=customer.tier.value if customer else "",
        status=order.status.value,
        subtotal=format_amount(order.subtotal),
        discount=format_amount(order.discount),
        total=format_amount(order.total),
        items=[
            OrderLineItemDTO(
                product_id=item.product_id,
                product_name=item.product_name,
                sku=item.sku,
                quantity=item.quantity.value,
                unit_price=str(item.unit_price),
                line_total=str(item.line_total),
            )
            for item in order.items
        ],
        created_at=_timestamp(order.created_at),
        updated_at=_timestamp(order.updated_at),
    )


def customer_to_dto(customer: Customer) -> CustomerDTO:
    return CustomerDTO(
        id=customer.id,
        name=customer.full_name,
        email=customer.email,
        phone_number=customer.phone_number,
        tier=customer.tier.value,
        is_active=customer.is_active,
        created_at=_timestamp(customer.created_at),
    )


def product_to_dto(product: Product) -> ProductDTO:
    return ProductDTO(
        id=product.id,
        name=product.name,
        sku=product.sku,
        description=product.description,
        price=str(product.price),
        stock_quantity=product.stock_quantity,
        is_active=product.is_active,
    )


def page_to_dto(page: Page[S], convert: Callable[[S], T]) -> PageDTO[T]:
    return PageDTO(
        items=[convert(item) for item in page.items],
        total_count=page.total_count,
        page=page.page,
        page_size=page.page_size,
        total_pages=page.total_pages,
        has_next_page=page.has_next_page,
        has_previous_page=page.has_previous_page,
    )
