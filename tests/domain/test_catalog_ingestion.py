"""Unit tests for CatalogIngestionService (add-or-increment)."""

import random
from collections import Counter

import pytest

from ims.domain.exceptions import ValidationError
from ims.domain.model.inventory import Category, SkuKey
from ims.domain.model.value_objects import Money
from ims.domain.service.barcode_allocator import BarcodeAllocator
from ims.domain.service.catalog_ingestion import CatalogIngestionService
from tests.fakes import FakeInventoryRepository


def _setup() -> tuple[CatalogIngestionService, FakeInventoryRepository]:
    repo = FakeInventoryRepository()
    allocator = BarcodeAllocator(repo, rng=random.Random(11))
    return CatalogIngestionService(repo, allocator), repo


def _ingest(service, sizes, name="Polo", price="250", description="cotton"):
    return service.ingest(
        item_name=name,
        category=Category.T_SHIRT,
        color="Navy",
        price=Money.of(price),
        description=description,
        sizes=sizes,
    )


class TestCreate:

    def test_new_sizes_get_their_own_barcode(self):
        service, repo = _setup()
        result = _ingest(service, [("S", 5), ("M", 3)])

        items = repo.list_all()
        assert result.created == 2
        assert result.incremented == 0
        assert len({i.barcode for i in items}) == 2
        assert sorted(i.quantity for i in items) == [3, 5]

    def test_zero_and_missing_quantities_skipped(self):
        service, repo = _setup()
        result = _ingest(service, [("S", 0), ("M", None), ("L", 2)])

        assert result.created == 1
        assert [i.size for i in repo.list_all()] == ["L"]

    def test_all_zero_is_empty(self):
        service, repo = _setup()
        result = _ingest(service, [("S", 0)])

        assert result.is_empty
        assert result.summary == "No items were added (all quantities were 0)"
        assert repo.list_all() == []


class TestIncrement:

    def test_existing_sku_topped_up_in_place(self):
        service, repo = _setup()
        _ingest(service, [("M", 3)])
        before = repo.list_all()[0]

        result = _ingest(service, [("M", 4)], price="999", description="changed")

        after = repo.get_by_id(before.id)
        assert result.incremented == 1
        assert result.created == 0
        assert after.quantity == 7
        assert after.barcode == before.barcode
        assert after.price == Money.of("250")
        assert after.description == "cotton"

    def test_mixed_summary(self):
        service, _ = _setup()
        _ingest(service, [("M", 3)])
        result = _ingest(service, [("M", 1), ("L", 1)])

        assert result.summary == (
            "Added 1 new size(s) and updated 1 existing size(s) for Polo"
        )

    def test_different_color_is_a_different_sku(self):
        service, repo = _setup()
        _ingest(service, [("M", 3)])
        service.ingest("Polo", Category.T_SHIRT, "Red", Money.of("250"), "", [("M", 2)])

        assert len(repo.list_all()) == 2


class TestValidation:

    def test_blank_name_rejected(self):
        service, _ = _setup()
        with pytest.raises(ValidationError, match="Item name is required"):
            _ingest(service, [("M", 1)], name="  ")

    def test_negative_rejected_before_any_write(self):
        service, repo = _setup()
        with pytest.raises(ValidationError, match="size L cannot be negative"):
            _ingest(service, [("M", 2), ("L", -1)])
        assert repo.list_all() == []


class TestQuantityConservation:

    def test_sum_per_sku_equals_sum_of_inputs(self):
        service, repo = _setup()
        calls = [
            [("S", 2), ("M", 0), ("L", 5)],
            [("S", 3), ("M", 1)],
            [("L", 0), ("XL", 4), ("S", 1)],
        ]
        expected = Counter()
        for sizes in calls:
            _ingest(service, sizes)
            for size, qty in sizes:
                if qty:
                    expected[size] += qty

        items = repo.list_all()
        skus = [i.sku for i in items]
        assert len(skus) == len(set(skus))
        assert {i.size: i.quantity for i in items} == dict(expected)
        assert all(i.sku == SkuKey("Polo", Category.T_SHIRT, i.size, "Navy") for i in items)
