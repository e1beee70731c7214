"""Application service: Scan Barcode use case (query)."""

from __future__ import annotations

from ims.application.dto import ItemDTO
from ims.domain.exceptions import EntityNotFoundError, ValidationError
from ims.domain.model.inventory import DEFAULT_LOW_STOCK_THRESHOLD
from ims.domain.model.value_objects import normalize_barcode
from ims.domain.repository.inventory_repository import InventoryRepository


class ScanBarcodeHandler:

    def __init__(
        self,
        inventory_repo: InventoryRepository,
        low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD,
    ) -> None:
        self._inventory_repo = inventory_repo
        self._low_stock_threshold = low_stock_threshold

    def handle(self, raw_barcode: str, for_delivery: bool = False) -> ItemDTO:
        """Resolve scanner input to an item.

        With ``for_delivery`` the item must also have stock left, since a
        delivery against it would be rejected anyway.
        """
        barcode = normalize_barcode(raw_barcode)
        if not barcode:
            raise ValidationError("Missing barcode")

        item = self._inventory_repo.get_by_barcode(barcode)
        if item is None:
            raise EntityNotFoundError("Item not found with this barcode")
        if for_delivery and item.quantity <= 0:
            raise ValidationError("Item is out of stock")

        return ItemDTO.from_item(item, self._low_stock_threshold)
