"""Unit tests for BarcodeAllocator."""

import random

import pytest

from ims.domain.exceptions import AllocationExhaustedError, DuplicateBarcodeError
from ims.domain.model.value_objects import is_valid_barcode
from ims.domain.service.barcode_allocator import MAX_ATTEMPTS, BarcodeAllocator
from tests.factories import make_item
from tests.fakes import FakeInventoryRepository


class CountingRepository(FakeInventoryRepository):
    """Reports every barcode as taken and counts the lookups."""

    def __init__(self) -> None:
        super().__init__()
        self.lookups = 0

    def get_by_barcode(self, barcode):
        self.lookups += 1
        return make_item(barcode=barcode)


class RacingRepository(FakeInventoryRepository):
    """Rejects the first ``losses`` inserts as if another writer won."""

    def __init__(self, losses: int) -> None:
        super().__init__()
        self.losses = losses
        self.add_calls = 0

    def add(self, item):
        self.add_calls += 1
        if self.add_calls <= self.losses:
            raise DuplicateBarcodeError(item.barcode)
        super().add(item)


class TestGenerate:

    def test_twelve_digits(self):
        allocator = BarcodeAllocator(FakeInventoryRepository(), rng=random.Random(1))
        for _ in range(50):
            assert is_valid_barcode(allocator.generate())

    def test_deterministic_with_seed(self):
        a = BarcodeAllocator(FakeInventoryRepository(), rng=random.Random(42))
        b = BarcodeAllocator(FakeInventoryRepository(), rng=random.Random(42))
        assert a.generate() == b.generate()


class TestAllocate:

    def test_skips_existing_barcode(self):
        taken = BarcodeAllocator(FakeInventoryRepository(), rng=random.Random(7)).generate()
        repo = FakeInventoryRepository([make_item(barcode=taken)])

        barcode = BarcodeAllocator(repo, rng=random.Random(7)).allocate()

        assert barcode != taken
        assert is_valid_barcode(barcode)

    def test_exhausts_after_exactly_max_attempts(self):
        repo = CountingRepository()
        allocator = BarcodeAllocator(repo, rng=random.Random(3))

        with pytest.raises(AllocationExhaustedError, match="after 100 attempts"):
            allocator.allocate()

        assert repo.lookups == MAX_ATTEMPTS

    def test_many_allocations_unique(self):
        repo = FakeInventoryRepository()
        allocator = BarcodeAllocator(repo, rng=random.Random(0))
        seen = set()
        for _ in range(200):
            barcode = allocator.allocate()
            assert barcode not in seen
            seen.add(barcode)
            repo.add(make_item(barcode=barcode))


class TestInsertWithUniqueBarcode:

    def test_retries_when_insert_loses_race(self):
        repo = RacingRepository(losses=3)
        allocator = BarcodeAllocator(repo, rng=random.Random(5))

        item = allocator.insert_with_unique_barcode(lambda code: make_item(barcode=code))

        assert repo.add_calls == 4
        assert repo.get_by_barcode(item.barcode) is not None

    def test_gives_up_after_bound(self):
        repo = RacingRepository(losses=10)
        allocator = BarcodeAllocator(repo, rng=random.Random(5), max_attempts=10)

        with pytest.raises(AllocationExhaustedError):
            allocator.insert_with_unique_barcode(lambda code: make_item(barcode=code))

        assert repo.add_calls == 10
        assert repo.list_all() == []
