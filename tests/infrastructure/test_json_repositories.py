"""Tests for the JSON-file repositories against a temporary directory."""

import json
import threading

import pytest

from ims.domain.exceptions import DuplicateBarcodeError, DuplicateSkuError, EntityNotFoundError
from ims.domain.model.inventory import Category, SkuKey
from ims.domain.model.value_objects import Money
from ims.infrastructure.persistence.json_delivery_repository import JsonDeliveryRepository
from ims.infrastructure.persistence.json_inventory_repository import JsonInventoryRepository
from tests.factories import make_delivery, make_item


@pytest.fixture
def inventory(tmp_path):
    return JsonInventoryRepository(tmp_path / "inventory.json")


@pytest.fixture
def deliveries(tmp_path):
    return JsonDeliveryRepository(tmp_path / "deliveries.json")


class TestJsonInventoryRepository:

    def test_creates_empty_file(self, tmp_path, inventory):
        assert json.loads((tmp_path / "inventory.json").read_text()) == []

    def test_round_trip(self, inventory):
        item = make_item(quantity=7, price="1234.50")
        inventory.add(item)

        loaded = inventory.get_by_id(item.id)
        assert loaded == item
        assert loaded.price == Money.of("1234.50")
        assert inventory.get_by_barcode(item.barcode).id == item.id
        assert inventory.find_by_sku(SkuKey("Polo", Category.T_SHIRT, "M", "Navy")).id == item.id
        assert inventory.find_by_sku(SkuKey("Polo", Category.T_SHIRT, "M", "Red")) is None

    def test_duplicate_barcode_rejected(self, inventory):
        inventory.add(make_item())
        with pytest.raises(DuplicateBarcodeError, match="123456789012"):
            inventory.add(make_item(size="L"))
        assert len(inventory.list_all()) == 1

    def test_duplicate_sku_rejected(self, inventory):
        inventory.add(make_item())
        with pytest.raises(DuplicateSkuError, match="Polo in size M \(Navy\) already exists"):
            inventory.add(make_item(barcode="000000000009"))
        assert len(inventory.list_all()) == 1

    def test_save_keeps_stored_quantity(self, inventory):
        item = make_item(quantity=5)
        inventory.add(item)
        inventory.adjust_quantity(item.id, -2)

        item.description = "heavier cotton"
        inventory.save(item)

        stored = inventory.get_by_id(item.id)
        assert stored.description == "heavier cotton"
        assert stored.quantity == 3

    def test_save_onto_other_sku_rejected(self, inventory):
        polo = make_item()
        large = make_item(size="L", barcode="000000000009")
        inventory.add(polo)
        inventory.add(large)

        large.size = "M"
        with pytest.raises(DuplicateSkuError):
            inventory.save(large)
        assert inventory.get_by_id(large.id).size == "L"

    def test_set_quantity(self, inventory):
        item = make_item(quantity=5)
        inventory.add(item)

        assert inventory.set_quantity(item.id, 12).quantity == 12
        assert inventory.get_by_id(item.id).quantity == 12
        assert inventory.set_quantity("missing", 1) is None

    def test_save_unknown_item(self, inventory):
        with pytest.raises(EntityNotFoundError):
            inventory.save(make_item())

    def test_delete(self, inventory):
        item = make_item()
        inventory.add(item)
        assert inventory.delete(item.id) is True
        assert inventory.delete(item.id) is False

    def test_adjust_quantity_is_conditional(self, inventory):
        item = make_item(quantity=3)
        inventory.add(item)

        assert inventory.adjust_quantity(item.id, -2).quantity == 1
        assert inventory.adjust_quantity(item.id, -2) is None
        assert inventory.get_by_id(item.id).quantity == 1
        assert inventory.adjust_quantity("missing", 1) is None

    def test_concurrent_decrements_never_overdraw(self, inventory):
        item = make_item(quantity=10)
        inventory.add(item)
        results = []

        def take_one():
            results.append(inventory.adjust_quantity(item.id, -1))

        threads = [threading.Thread(target=take_one) for _ in range(20)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sum(1 for r in results if r is not None) == 10
        assert inventory.get_by_id(item.id).quantity == 0


class TestJsonDeliveryRepository:

    def test_round_trip(self, deliveries):
        record = make_delivery(make_item(), quantity=4, customer="Acme")
        deliveries.add(record)
        assert deliveries.get_by_id(record.id) == record

    def test_conditional_save_and_delete(self, deliveries):
        record = make_delivery(make_item(), quantity=2)
        deliveries.add(record)
        record.notes = "gate 3"

        assert deliveries.save_if(record, expected_quantity=5) is False
        assert deliveries.get_by_id(record.id).notes == ""
        assert deliveries.save_if(record, expected_quantity=2) is True
        assert deliveries.get_by_id(record.id).notes == "gate 3"

        assert deliveries.delete(record.id) is True
        assert deliveries.delete(record.id) is False
        assert deliveries.list_all() == []

    def test_conditional_save_of_unknown_record(self, deliveries):
        record = make_delivery(make_item())
        assert deliveries.save_if(record, record.quantity_delivered) is False
        assert deliveries.list_all() == []
