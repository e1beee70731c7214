"""Domain service: Barcode Allocation.

Produces 12-digit numeric barcodes that no other catalog item carries.
Collisions are astronomically rare (1 in 10^12 per draw); the retry cap
only guards against an infinite loop if the uniqueness check is broken.

Two entry points:

- ``allocate()`` checks the catalog and returns an unused value. The
  caller persists it later, so a concurrent allocation can still race.
- ``insert_with_unique_barcode()`` draws a value and inserts the item in
  one go, retrying when the repository reports a duplicate. This is the
  path the catalog ingestion uses.
"""

from __future__ import annotations

import random
import string
from typing import Callable

from ims.domain.exceptions import AllocationExhaustedError, DuplicateBarcodeError
from ims.domain.model.inventory import InventoryItem
from ims.domain.model.value_objects import BARCODE_LENGTH
from ims.domain.repository.inventory_repository import InventoryRepository
from ims.logging_config import get_logger

MAX_ATTEMPTS = 100

logger = get_logger(__name__)


class BarcodeAllocator:

    def __init__(
        self,
        inventory_repo: InventoryRepository,
        rng: random.Random | None = None,
        max_attempts: int = MAX_ATTEMPTS,
    ) -> None:
        self._inventory_repo = inventory_repo
        self._rng = rng or random.SystemRandom()
        self._max_attempts = max_attempts

    def generate(self) -> str:
        """Draw a random barcode; leading zeros are allowed."""
        return "".join(self._rng.choice(string.digits) for _ in range(BARCODE_LENGTH))

    def allocate(self) -> str:
        for attempt in range(1, self._max_attempts + 1):
            barcode = self.generate()
            if self._inventory_repo.get_by_barcode(barcode) is None:
                return barcode
            logger.warning("Barcode %s already in use (attempt %d)", barcode, attempt)

        logger.error("Barcode allocation exhausted after %d attempts", self._max_attempts)
        raise AllocationExhaustedError(self._max_attempts)

    def insert_with_unique_barcode(
        self,
        build: Callable[[str], InventoryItem],
    ) -> InventoryItem:
        """Build an item around a fresh barcode and insert it.

        ``build`` receives the candidate barcode and returns the item to
        insert. A ``DuplicateBarcodeError`` from the repository (another
        writer got there first) counts as a failed attempt.
        """
        for attempt in range(1, self._max_attempts + 1):
            barcode = self.generate()
            if self._inventory_repo.get_by_barcode(barcode) is not None:
                logger.warning("Barcode %s already in use (attempt %d)", barcode, attempt)
                continue

            item = build(barcode)
            try:
                self._inventory_repo.add(item)
            except DuplicateBarcodeError:
                logger.warning(
                    "Barcode %s taken by a concurrent insert (attempt %d)", barcode, attempt
                )
                continue
            return item

        logger.error("Barcode allocation exhausted after %d attempts", self._max_attempts)
        raise AllocationExhaustedError(self._max_attempts)
