"""Tests for the item admin use cases: show, scan, edit, set stock, delete."""

import pytest

from ims.application.delete_item import DeleteItemHandler
from ims.application.edit_item import EditItemHandler
from ims.application.scan_item import ScanBarcodeHandler
from ims.application.set_stock import SetStockHandler
from ims.application.show_inventory import ShowInventoryHandler
from ims.domain.exceptions import DuplicateSkuError, EntityNotFoundError, ValidationError
from ims.domain.model.inventory import Category
from ims.domain.service.stock_ledger import StockLedgerService
from tests.factories import make_item
from tests.fakes import FakeDeliveryRepository, FakeInventoryRepository, interleave


def _catalog() -> FakeInventoryRepository:
    return FakeInventoryRepository([
        make_item(quantity=20, item_name="Polo", barcode="000000000001"),
        make_item(quantity=3, item_name="Parka", category=Category.JACKET, barcode="000000000002"),
        make_item(quantity=0, item_name="Beanie", category=Category.CAP, barcode="000000000003"),
    ])


class TestShowInventory:

    def test_filter_by_category(self):
        page = ShowInventoryHandler(_catalog()).handle(category="cap")
        assert [dto.item_name for dto in page.items] == ["Beanie"]
        assert page.items[0].status == "Out of Stock"

    def test_search_by_name_or_barcode(self):
        handler = ShowInventoryHandler(_catalog())
        assert [d.item_name for d in handler.handle(search="PAR").items] == ["Parka"]
        assert [d.item_name for d in handler.handle(search="0001").items] == ["Polo"]

    def test_pagination(self):
        page = ShowInventoryHandler(_catalog(), per_page=2).handle(page=2)
        assert len(page.items) == 1
        assert page.total == 3
        assert page.total_pages == 2

    def test_price_is_formatted(self):
        page = ShowInventoryHandler(_catalog()).handle(search="Polo")
        assert page.items[0].price == "Rs 250.00"


class TestScan:

    def test_strips_scanner_newline(self):
        dto = ScanBarcodeHandler(_catalog()).handle("000000000002\r\n")
        assert dto.item_name == "Parka"
        assert dto.status == "Low Stock"

    def test_unknown_barcode(self):
        with pytest.raises(EntityNotFoundError, match="Item not found with this barcode"):
            ScanBarcodeHandler(_catalog()).handle("999999999999")

    def test_missing_barcode(self):
        with pytest.raises(ValidationError, match="Missing barcode"):
            ScanBarcodeHandler(_catalog()).handle("\n")

    def test_out_of_stock_only_blocks_delivery(self):
        handler = ScanBarcodeHandler(_catalog())
        assert handler.handle("000000000003").quantity == 0
        with pytest.raises(ValidationError, match="out of stock"):
            handler.handle("000000000003", for_delivery=True)


class TestEditAndStock:

    def test_edit_overwrites_details(self):
        repo = _catalog()
        item = repo.get_by_barcode("000000000001")

        EditItemHandler(repo).handle(
            item_id=item.id,
            item_name="Polo Shirt",
            category="T-Shirt",
            size="L",
            color="White",
            quantity="15",
            price="300",
            description="new cut",
        )

        stored = repo.get_by_id(item.id)
        assert stored.item_name == "Polo Shirt"
        assert stored.size == "L"
        assert stored.quantity == 15
        assert str(stored.price) == "Rs 300.00"
        assert stored.barcode == "000000000001"

    def test_edit_keeps_deliveries_recorded_meanwhile(self):
        repo = _catalog()
        item = repo.get_by_barcode("000000000001")
        ledger = StockLedgerService(repo, FakeDeliveryRepository())
        interleave(repo, "save", lambda: ledger.record(item.id, 4, "Acme", "", "staff"))

        updated = EditItemHandler(repo).handle(
            item.id, "Polo", "T-Shirt", "M", "Navy", "20", "275", "restyled"
        )

        assert updated.quantity == 16
        assert repo.get_by_id(item.id).quantity == 16
        assert repo.get_by_id(item.id).description == "restyled"

    def test_edit_onto_existing_sku_rejected(self):
        repo = _catalog()
        parka = repo.get_by_barcode("000000000002")

        with pytest.raises(DuplicateSkuError, match="Polo in size M \(Navy\) already exists"):
            EditItemHandler(repo).handle(
                parka.id, "Polo", "T-Shirt", "M", "Navy", "3", "250", ""
            )

        assert repo.get_by_id(parka.id).item_name == "Parka"

    def test_edit_unknown_item(self):
        with pytest.raises(EntityNotFoundError, match="Item not found"):
            EditItemHandler(_catalog()).handle("x", "A", "Cap", "M", "", 1, "1", "")

    def test_set_stock(self):
        repo = _catalog()
        item = repo.get_by_barcode("000000000003")
        SetStockHandler(repo).handle(item.id, "12")
        assert repo.get_by_id(item.id).quantity == 12

    def test_set_stock_rejects_negative(self):
        repo = _catalog()
        item = repo.get_by_barcode("000000000003")
        with pytest.raises(ValidationError):
            SetStockHandler(repo).handle(item.id, -1)


class TestDeleteItem:

    def test_delete(self):
        repo = _catalog()
        item = repo.get_by_barcode("000000000001")
        DeleteItemHandler(repo).handle(item.id)
        assert repo.get_by_id(item.id) is None

    def test_delete_unknown(self):
        with pytest.raises(EntityNotFoundError):
            DeleteItemHandler(_catalog()).handle("missing")
