"""Integration tests for the CreateOrder use case.

Uses in-memory fake repositories, no file I/O.
"""

import threading

import pytest

from orderdesk.application.create_order import CreateOrderHandler
from orderdesk.application.dto import OrderItemSpec
from orderdesk.application.update_customer import UpdateCustomerHandler
from orderdesk.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    OrderPersistenceError,
    ValidationError,
)
from orderdesk.domain.model.customer import Customer, CustomerTier
from orderdesk.domain.model.order import Order
from orderdesk.domain.model.product import Product
from orderdesk.domain.model.value_objects import Money
from orderdesk.domain.service.inventory_ledger import InventoryLedger
from orderdesk.domain.service.locking import KeyedLocks
from tests.fakes import (
    FailingOrderRepository,
    FakeCustomerRepository,
    FakeOrderRepository,
    FakeProductRepository,
)


def _customers() -> list[Customer]:
    return [
        Customer(id="1", first_name="Rita", last_name="Regular", email="rita@example.com"),
        Customer(id="2", first_name="Pete", last_name="Premium", email="pete@example.com",
                 tier=CustomerTier.PREMIUM),
        Customer(id="3", first_name="Vera", last_name="Vip", email="vera@example.com",
                 tier=CustomerTier.VIP),
    ]


def _products() -> list[Product]:
    return [
        Product(id="1", name="Widget", sku="WID-1", price=Money.of("100.00"), stock_quantity=5),
        Product(id="2", name="Gadget", sku="GAD-1", price=Money.of("25.00"), stock_quantity=50),
        Product(id="3", name="Retired", sku="RET-1", price=Money.of("5.00"), stock_quantity=10,
                is_active=False),
    ]


def _setup(order_repo: FakeOrderRepository | None = None):
    order_repo = order_repo or FakeOrderRepository()
    product_repo = FakeProductRepository(_products())
    ledger = InventoryLedger(product_repo, KeyedLocks())
    handler = CreateOrderHandler(
        order_repo,
        FakeCustomerRepository(_customers()),
        product_repo,
        ledger,
        order_number_factory=lambda: "ORD-20260101120000-1234",
    )
    return handler, order_repo, product_repo


class TestCreateOrderHappyPath:

    def test_vip_discount_applied(self):
        handler, _, _ = _setup()
        dto = handler.handle("3", [OrderItemSpec("1", 2)])
        assert dto.subtotal == "$200.00"
        assert dto.discount == "$20.00"
        assert dto.total == "$180.00"
        assert dto.status == "Pending"
        assert dto.customer_name == "Vera Vip"
        assert dto.customer_tier == "VIP"

    def test_regular_customer_pays_full_price(self):
        handler, _, _ = _setup()
        dto = handler.handle("1", [OrderItemSpec("2", 4)])
        assert dto.discount == "$0.00"
        assert dto.total == "$100.00"

    def test_reserves_stock(self):
        handler, _, product_repo = _setup()
        handler.handle("1", [OrderItemSpec("1", 3)])
        assert product_repo.stock_of("1") == 2

    def test_persists_pending_order(self):
        handler, order_repo, _ = _setup()
        dto = handler.handle("1", [OrderItemSpec("1", 1), OrderItemSpec("2", 2)])
        saved = order_repo.get_by_id(dto.id)
        assert saved is not None
        assert saved.order_number == "ORD-20260101120000-1234"
        assert saved.customer_id == "1"
        assert len(saved.items) == 2

    def test_sequential_ids(self):
        handler, _, _ = _setup()
        first = handler.handle("1", [OrderItemSpec("2", 1)])
        second = handler.handle("2", [OrderItemSpec("2", 1)])
        assert second.id == first.id + 1

    def test_line_items_snapshot_product_details(self):
        handler, _, _ = _setup()
        dto = handler.handle("1", [OrderItemSpec("2", 3)])
        item = dto.items[0]
        assert item.product_name == "Gadget"
        assert item.sku == "GAD-1"
        assert item.unit_price == "$25.00"
        assert item.line_total == "$75.00"

    def test_later_price_change_does_not_touch_order(self):
        handler, order_repo, product_repo = _setup()
        dto = handler.handle("1", [OrderItemSpec("2", 1)])
        product = product_repo.get_by_id("2")
        product.update_price(Money.of("99.00"))
        product_repo.save(product)
        assert order_repo.get_by_id(dto.id).items[0].unit_price == Money.of("25.00")

    def test_repeated_product_reserved_once_for_the_sum(self):
        handler, _, product_repo = _setup()
        dto = handler.handle("1", [OrderItemSpec("1", 2), OrderItemSpec("1", 3)])
        assert product_repo.stock_of("1") == 0
        assert dto.subtotal == "$500.00"

    def test_repeated_product_checked_against_the_sum(self):
        handler, order_repo, product_repo = _setup()
        with pytest.raises(InsufficientStockError):
            handler.handle("1", [OrderItemSpec("1", 3), OrderItemSpec("1", 3)])
        assert product_repo.stock_of("1") == 5
        assert order_repo.all_orders() == []


    def test_tier_upgrade_prices_later_orders_only(self):
        customers = FakeCustomerRepository(_customers())
        orders = FakeOrderRepository()
        product_repo = FakeProductRepository(_products())
        handler = CreateOrderHandler(
            orders, customers, product_repo, InventoryLedger(product_repo, KeyedLocks())
        )
        before = handler.handle("1", [OrderItemSpec("2", 4)])
        UpdateCustomerHandler(customers).handle("1", tier="Premium")
        after = handler.handle("1", [OrderItemSpec("2", 4)])
        assert after.discount == "$5.00"
        assert after.total == "$95.00"
        assert orders.get_by_id(before.id).total == 100


class TestCreateOrderRejections:

    def test_unknown_customer(self):
        handler, _, product_repo = _setup()
        with pytest.raises(EntityNotFoundError, match="Customer"):
            handler.handle("99", [OrderItemSpec("1", 1)])
        assert product_repo.stock_of("1") == 5

    def test_unknown_product_leaves_stock_untouched(self):
        handler, order_repo, product_repo = _setup()
        with pytest.raises(EntityNotFoundError) as excinfo:
            handler.handle("1", [OrderItemSpec("1", 1), OrderItemSpec("42", 1)])
        assert excinfo.value.entity == "Product"
        assert excinfo.value.entity_id == "42"
        assert product_repo.stock_of("1") == 5
        assert order_repo.all_orders() == []

    def test_inactive_product_is_not_orderable(self):
        handler, _, product_repo = _setup()
        with pytest.raises(EntityNotFoundError):
            handler.handle("1", [OrderItemSpec("3", 1)])
        assert product_repo.stock_of("3") == 10

    def test_insufficient_stock(self):
        handler, _, product_repo = _setup()
        with pytest.raises(InsufficientStockError) as excinfo:
            handler.handle("1", [OrderItemSpec("2", 1), OrderItemSpec("1", 6)])
        assert excinfo.value.available == 5
        assert excinfo.value.requested == 6
        assert product_repo.stock_of("1") == 5
        assert product_repo.stock_of("2") == 50

    def test_empty_order(self):
        handler, _, _ = _setup()
        with pytest.raises(ValidationError, match="at least one item"):
            handler.handle("1", [])

    def test_missing_customer_id(self):
        handler, _, _ = _setup()
        with pytest.raises(ValidationError, match="Customer ID is required"):
            handler.handle("  ", [OrderItemSpec("1", 1)])

    def test_missing_product_id(self):
        handler, _, _ = _setup()
        with pytest.raises(ValidationError, match="Product ID is required"):
            handler.handle("1", [OrderItemSpec("", 1)])

    @pytest.mark.parametrize("quantity", [0, -2])
    def test_non_positive_quantity(self, quantity):
        handler, _, _ = _setup()
        with pytest.raises(ValidationError, match="greater than zero"):
            handler.handle("1", [OrderItemSpec("1", quantity)])


class TestCreateOrderPersistenceFailure:

    def test_reservation_released_when_save_fails(self):
        handler, _, product_repo = _setup(FailingOrderRepository())
        with pytest.raises(OrderPersistenceError, match="released") as excinfo:
            handler.handle("1", [OrderItemSpec("1", 3), OrderItemSpec("2", 10)])
        assert isinstance(excinfo.value.__cause__, ConnectionError)
        assert product_repo.stock_of("1") == 5
        assert product_repo.stock_of("2") == 50


    def test_failed_release_still_reports_unsaved_order(self):
        product_repo = _StockStoreThatBreaks(_products())
        handler = CreateOrderHandler(
            _OrderStoreThatBreaksStock(product_repo),
            FakeCustomerRepository(_customers()),
            product_repo,
            InventoryLedger(product_repo),
        )
        with pytest.raises(OrderPersistenceError, match="could not be released") as excinfo:
            handler.handle("1", [OrderItemSpec("2", 1)])
        assert isinstance(excinfo.value.__cause__, ConnectionError)


class _StockStoreThatBreaks(FakeProductRepository):

    def __init__(self, products: list[Product]) -> None:
        super().__init__(products)
        self.broken = False

    def update_stock(self, products: list[Product]) -> None:
        if self.broken:
            raise OSError("stock file locked")
        super().update_stock(products)


class _OrderStoreThatBreaksStock(FakeOrderRepository):

    def __init__(self, product_repo: _StockStoreThatBreaks) -> None:
        super().__init__()
        self._product_repo = product_repo

    def save(self, order: Order) -> None:
        self._product_repo.broken = True
        raise ConnectionError("order store unavailable")


class TestConcurrentCreateOrder:

    def test_only_available_stock_is_sold(self):
        """Stock 5: of 12 concurrent single-unit orders exactly 5 succeed."""
        handler, order_repo, product_repo = _setup()
        start = threading.Barrier(12)
        failures: list[Exception] = []
        failures_lock = threading.Lock()

        def place() -> None:
            start.wait()
            try:
                handler.handle("1", [OrderItemSpec("1", 1)])
            except InsufficientStockError as exc:
                with failures_lock:
                    failures.append(exc)

        threads = [threading.Thread(target=place) for _ in range(12)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(failures) == 7
        assert product_repo.stock_of("1") == 0
        assert len(order_repo.all_orders()) == 5
