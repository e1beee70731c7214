"""Abstract repository for the InventoryItem aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, in-memory) live
elsewhere and must honour these storage-level guarantees:

- ``add`` rejects a second item with the same SKU (``DuplicateSkuError``)
  or the same barcode (``DuplicateBarcodeError``).
- ``save`` writes descriptive fields only; ``quantity`` changes go
  through ``adjust_quantity`` or ``set_quantity``.
- ``adjust_quantity`` is a single atomic conditional update: it applies
  the delta only if the resulting quantity stays non-negative.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ims.domain.model.inventory import Category, InventoryItem, SkuKey


class InventoryRepository(ABC):

    @abstractmethod
    def get_by_id(self, item_id: str) -> InventoryItem | None:
        """Return an item by its ID, or None if not found."""

    @abstractmethod
    def get_by_barcode(self, barcode: str) -> InventoryItem | None:
        """Return the item carrying this exact barcode, or None."""

    @abstractmethod
    def find_by_sku(self, sku: SkuKey) -> InventoryItem | None:
        """Return the item matching name/category/size/color exactly, or None."""

    @abstractmethod
    def list_all(self) -> list[InventoryItem]:
        """Return every item in the catalog."""

    @abstractmethod
    def add(self, item: InventoryItem) -> None:
        """Insert a new item.

        Raises DuplicateSkuError if another item has the same SKU, and
        DuplicateBarcodeError if the barcode is already taken.
        """

    @abstractmethod
    def save(self, item: InventoryItem) -> None:
        """Persist name, category, size, color, price and description.

        The stored quantity is left as it is. Raises DuplicateSkuError if
        the new SKU belongs to another item.
        """

    @abstractmethod
    def delete(self, item_id: str) -> bool:
        """Remove an item. Returns False if it did not exist."""

    @abstractmethod
    def adjust_quantity(self, item_id: str, delta: int) -> InventoryItem | None:
        """Atomically add ``delta`` to the item's quantity.

        The update is applied only if ``quantity + delta >= 0``. Returns the
        updated item, or None when the item does not exist or the change
        would overdraw stock. Callers re-read to tell the two apart.
        """

    @abstractmethod
    def set_quantity(self, item_id: str, quantity: int) -> InventoryItem | None:
        """Atomically overwrite the item's quantity. None if it does not exist."""

    def search(
        self,
        category: Category | None = None,
        text: str | None = None,
    ) -> list[InventoryItem]:
        """Filter by category and case-insensitive name/barcode substring."""
        needle = (text or "").strip().lower()
        result = []
        for item in self.list_all():
            if category is not None and item.category != category:
                continue
            if needle and needle not in item.item_name.lower() and needle not in item.barcode:
                continue
            result.append(item)
        return result
