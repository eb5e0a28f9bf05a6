"""Integration tests for product and inventory use cases."""

import pytest

from orderdesk.application.add_product import AddProductHandler
from orderdesk.application.search_products import SearchProductsHandler, ShowProductHandler
from orderdesk.application.show_inventory import ShowInventoryHandler
from orderdesk.application.update_product import UpdateProductHandler
from orderdesk.domain.exceptions import EntityNotFoundError, ValidationError
from orderdesk.domain.service.inventory_ledger import InventoryLedger
from tests.fakes import FakeProductRepository


def _seeded() -> FakeProductRepository:
    repo = FakeProductRepository()
    add = AddProductHandler(repo)
    add.handle("Widget", "wid-1", "15.00", stock_quantity=10)
    add.handle("Gadget", "gad-1", "25.00", stock_quantity=0)
    add.handle("Gizmo", "giz-1", "7.50", stock_quantity=3, description="Small gizmo")
    return repo


class TestAddProduct:

    def test_assigns_sequential_ids(self):
        repo = _seeded()
        assert sorted(p.id for p in repo.list_all()) == ["1", "2", "3"]

    def test_returns_dto(self):
        dto = AddProductHandler(FakeProductRepository()).handle("Widget", "w-1", "15", 4)
        assert dto.id == "1"
        assert dto.sku == "W-1"
        assert dto.price == "$15.00"
        assert dto.stock_quantity == 4

    def test_duplicate_sku_rejected(self):
        repo = _seeded()
        with pytest.raises(ValidationError, match="already exists"):
            AddProductHandler(repo).handle("Other", "WID-1", "1.00")

    def test_bad_price_rejected(self):
        with pytest.raises(ValidationError):
            AddProductHandler(FakeProductRepository()).handle("Widget", "W", "abc")


class TestUpdateProduct:

    def test_price_change(self):
        repo = _seeded()
        dto = UpdateProductHandler(repo).handle("1", "18.00")
        assert dto.price == "$18.00"
        assert repo.get_by_id("1").price.amount == 18

    def test_price_change_keeps_stock(self):
        repo = _seeded()
        UpdateProductHandler(repo).handle("1", "18.00")
        assert repo.stock_of("1") == 10

    def test_deactivate(self):
        repo = _seeded()
        dto = UpdateProductHandler(repo).deactivate("2")
        assert not dto.is_active

    def test_unknown_product(self):
        with pytest.raises(EntityNotFoundError):
            UpdateProductHandler(FakeProductRepository()).handle("9", "1.00")


class TestProductQueries:

    def test_show(self):
        dto = ShowProductHandler(_seeded()).handle("3")
        assert dto.description == "Small gizmo"

    def test_show_unknown(self):
        with pytest.raises(EntityNotFoundError):
            ShowProductHandler(_seeded()).handle("99")

    def test_search_sorted_by_name(self):
        page = SearchProductsHandler(_seeded()).handle()
        assert [p.name for p in page.items] == ["Gadget", "Gizmo", "Widget"]

    def test_search_matches_name_or_sku(self):
        handler = SearchProductsHandler(_seeded())
        assert [p.name for p in handler.handle("gi").items] == ["Gizmo"]
        assert [p.name for p in handler.handle("WID").items] == ["Widget"]

    def test_search_hides_inactive(self):
        repo = _seeded()
        UpdateProductHandler(repo).deactivate("1")
        page = SearchProductsHandler(repo).handle()
        assert "Widget" not in [p.name for p in page.items]

    def test_search_pages(self):
        page = SearchProductsHandler(_seeded()).handle(page=2, page_size=2)
        assert [p.name for p in page.items] == ["Widget"]
        assert page.total_pages == 2


class TestShowInventory:

    def test_lists_stock_levels(self):
        repo = _seeded()
        lines = ShowInventoryHandler(repo, InventoryLedger(repo)).handle()
        by_name = {line.product_name: line for line in lines}
        assert by_name["Widget"].stock == 10
        assert by_name["Widget"].in_stock
        assert not by_name["Gadget"].in_stock

    def test_inactive_only_on_request(self):
        repo = _seeded()
        UpdateProductHandler(repo).deactivate("3")
        handler = ShowInventoryHandler(repo, InventoryLedger(repo))
        assert len(handler.handle()) == 2
        assert len(handler.handle(include_inactive=True)) == 3


class TestProductLookupAndSorting:

    def test_show_by_sku_ignores_case_and_spaces(self):
        assert ShowProductHandler(_seeded()).by_sku(" giz-1 ").name == "Gizmo"

    def test_show_by_unknown_sku(self):
        with pytest.raises(EntityNotFoundError, match="SKU 'NOPE-1' not found"):
            ShowProductHandler(_seeded()).by_sku("nope-1")

    def test_search_by_description(self):
        handler = SearchProductsHandler(_seeded())
        assert [p.name for p in handler.handle(description="SMALL").items] == ["Gizmo"]
        assert handler.handle(description="large").items == []

    def test_sort_by_price(self):
        handler = SearchProductsHandler(_seeded())
        assert [p.name for p in handler.handle(sort_by="price").items] == [
            "Gizmo", "Widget", "Gadget",
        ]
        assert [p.name for p in handler.handle(sort_by="Price", descending=True).items] == [
            "Gadget", "Widget", "Gizmo",
        ]

    def test_sort_by_stock_descending(self):
        page = SearchProductsHandler(_seeded()).handle(sort_by="stock", descending=True)
        assert [p.stock_quantity for p in page.items] == [10, 3, 0]

    def test_sort_is_applied_before_paging(self):
        page = SearchProductsHandler(_seeded()).handle(sort_by="price", page=2, page_size=2)
        assert [p.name for p in page.items] == ["Gadget"]

    def test_unknown_sort_key(self):
        with pytest.raises(ValidationError, match="Cannot sort products by 'colour'"):
            SearchProductsHandler(_seeded()).handle(sort_by="colour")
