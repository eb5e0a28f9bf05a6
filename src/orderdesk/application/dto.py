"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI (or any other adapter) and the
application layer without exposing domain internals to the outside world.
Money is pre-formatted for display, e.g. ``"$15.00"``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: what the customer asked for (product id + quantity)."""

    product_id: str
    quantity: int


@dataclass(frozen=True)
class OrderLineItemDTO:
    """Output: a single line item as displayed to the user."""

    product_id: str
    product_name: str
    sku: str
    quantity: int
    unit_price: str
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order with its customer resolved."""

    id: int
    order_number: str
    customer_id: str
    customer_name: str
    customer_email: str
    customer_tier: str
    status: str
    subtotal: str
    discount: str
    total: str
    items: list[OrderLineItemDTO]
    created_at: str
    updated_at: str


@dataclass(frozen=True)
class CustomerDTO:
    id: str
    name: str
    email: str
    phone_number: str | None
    tier: str
    is_active: bool
    created_at: str


@dataclass(frozen=True)
class ProductDTO:
    id: str
    name: str
    sku: str
    description: str | None
    price: str
    stock_quantity: int
    is_active: bool


@dataclass(frozen=True)
class PageDTO(Generic[T]):
    """Output: one page of a listing plus navigation metadata."""

    items: list[T]
    total_count: int
    page: int
    page_size: int
    total_pages: int
    has_next_page: bool
    has_previous_page: bool
