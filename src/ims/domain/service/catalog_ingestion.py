"""Domain service: Catalog Ingestion (add-or-increment).

An "add item" request names one product (name, category, color, price)
and a list of sizes with quantities. Every size with a positive quantity
either tops up the existing SKU or becomes a new SKU with its own barcode.
"""

from __future__ import annotations

from dataclasses import dataclass

from ims.domain.exceptions import DuplicateSkuError, ValidationError
from ims.domain.model.inventory import Category, InventoryItem, SkuKey
from ims.domain.model.value_objects import Money
from ims.domain.repository.inventory_repository import InventoryRepository
from ims.domain.service.barcode_allocator import BarcodeAllocator
from ims.logging_config import get_logger

MAX_SKU_RACES = 3

logger = get_logger(__name__)


@dataclass(frozen=True)
class IngestResult:
    item_name: str
    created: int
    incremented: int

    @property
    def is_empty(self) -> bool:
        return self.created == 0 and self.incremented == 0

    @property
    def summary(self) -> str:
        if self.created and self.incremented:
            return (
                f"Added {self.created} new size(s) and updated "
                f"{self.incremented} existing size(s) for {self.item_name}"
            )
        if self.created:
            return f"Successfully added {self.created} size(s) for {self.item_name}"
        if self.incremented:
            return f"Updated quantities for {self.incremented} existing size(s) of {self.item_name}"
        return "No items were added (all quantities were 0)"


class CatalogIngestionService:

    def __init__(
        self,
        inventory_repo: InventoryRepository,
        allocator: BarcodeAllocator | None = None,
    ) -> None:
        self._inventory_repo = inventory_repo
        self._allocator = allocator or BarcodeAllocator(inventory_repo)

    def ingest(
        self,
        item_name: str,
        category: Category,
        color: str,
        price: Money,
        description: str,
        sizes: list[tuple[str, int | None]],
    ) -> IngestResult:
        if not item_name or not item_name.strip():
            raise ValidationError("Item name is required")
        item_name = item_name.strip()

        # Validate every pair before touching stock
        wanted: list[tuple[str, int]] = []
        for size, qty in sizes:
            if not qty:
                continue
            if qty < 0:
                raise ValidationError(f"Quantity for size {size} cannot be negative")
            wanted.append((size, qty))

        created = 0
        incremented = 0

        for size, qty in wanted:
            sku = SkuKey(item_name, category, size, color)
            if self._add_or_increment(sku, qty, price, description):
                created += 1
            else:
                incremented += 1

        return IngestResult(item_name=item_name, created=created, incremented=incremented)

    def _add_or_increment(
        self,
        sku: SkuKey,
        qty: int,
        price: Money,
        description: str,
    ) -> bool:
        """Top up the SKU, or create it. Returns True if an item was created."""
        for _ in range(MAX_SKU_RACES):
            existing = self._inventory_repo.find_by_sku(sku)
            if existing is not None:
                if self._inventory_repo.adjust_quantity(existing.id, qty) is not None:
                    logger.info(
                        "Incremented %s/%s/%s by %d", sku.item_name, sku.size, sku.color, qty
                    )
                    return False

            try:
                item = self._allocator.insert_with_unique_barcode(
                    lambda barcode: InventoryItem.create(
                        sku=sku,
                        barcode=barcode,
                        quantity=qty,
                        price=price,
                        description=description,
                    )
                )
            except DuplicateSkuError:
                # A concurrent ingest created the SKU first; top it up instead
                logger.info(
                    "%s/%s/%s created concurrently, retrying",
                    sku.item_name, sku.size, sku.color,
                )
                continue

            logger.info(
                "Created %s/%s/%s with barcode %s (qty %d)",
                sku.item_name, sku.size, sku.color, item.barcode, qty,
            )
            return True

        raise DuplicateSkuError(sku.item_name, sku.size, sku.color)
