"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.

The lock registries are module-level so that every handler built in this
process shares them: that is what makes stock reservation and order
status changes safe across threads.
"""

from __future__ import annotations

from orderdesk.domain.service.inventory_ledger import InventoryLedger
from orderdesk.domain.service.locking import KeyedLocks
from orderdesk.infrastructure.persistence.json_customer_repository import (
    JsonCustomerRepository,
)
from orderdesk.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from orderdesk.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from orderdesk.infrastructure.settings import Settings

STOCK_LOCKS = KeyedLocks()
ORDER_LOCKS = KeyedLocks()


def settings() -> Settings:
    return Settings.from_env()


def customer_repository() -> JsonCustomerRepository:
    return JsonCustomerRepository(settings().customers_file)


def product_repository() -> JsonProductRepository:
    return JsonProductRepository(settings().products_file)


def order_repository() -> JsonOrderRepository:
    return JsonOrderRepository(settings().orders_file)


def inventory_ledger(product_repo: JsonProductRepository | None = None) -> InventoryLedger:
    return InventoryLedger(product_repo or product_repository(), STOCK_LOCKS)
