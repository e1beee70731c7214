"""Application service: Add Items use case (create or top up sizes)."""

from __future__ import annotations

from ims.application.dto import SizeSpec
from ims.domain.model.inventory import Category
from ims.domain.model.value_objects import Money, parse_count
from ims.domain.repository.inventory_repository import InventoryRepository
from ims.domain.service.barcode_allocator import BarcodeAllocator
from ims.domain.service.catalog_ingestion import CatalogIngestionService, IngestResult


class AddItemsHandler:

    def __init__(
        self,
        inventory_repo: InventoryRepository,
        allocator: BarcodeAllocator | None = None,
    ) -> None:
        self._service = CatalogIngestionService(inventory_repo, allocator)

    def handle(
        self,
        item_name: str,
        category: str,
        color: str,
        price: str,
        description: str,
        sizes: list[SizeSpec],
    ) -> IngestResult:
        """Add one product in several sizes.

        Quantities arrive as raw form/CLI values; blank or zero sizes are
        skipped, anything non-numeric is rejected before stock changes.
        """
        pairs = [
            (spec.size.strip(), self._quantity(spec))
            for spec in sizes
        ]
        return self._service.ingest(
            item_name=item_name,
            category=Category.parse(category),
            color=(color or "").strip(),
            price=Money.of(price),
            description=description,
            sizes=pairs,
        )

    @staticmethod
    def _quantity(spec: SizeSpec) -> int:
        if spec.quantity is None or str(spec.quantity).strip() == "":
            return 0
        return parse_count(spec.quantity, field=f"Quantity for size {spec.size}")
