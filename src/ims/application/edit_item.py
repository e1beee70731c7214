"""Application service: Edit Item use case."""

from __future__ import annotations

from ims.domain.exceptions import EntityNotFoundError
from ims.domain.model.inventory import Category, InventoryItem, SkuKey, check_stock_level
from ims.domain.model.value_objects import Money, parse_count
from ims.domain.repository.inventory_repository import InventoryRepository
from ims.logging_config import get_logger

logger = get_logger(__name__)


class EditItemHandler:

    def __init__(self, inventory_repo: InventoryRepository) -> None:
        self._inventory_repo = inventory_repo

    def handle(
        self,
        item_id: str,
        item_name: str,
        category: str,
        size: str,
        color: str,
        quantity: int | str,
        price: str,
        description: str,
    ) -> InventoryItem:
        """Overwrite an item's details. The barcode is kept as-is.

        Stock is only written when the form's quantity differs from what
        was on screen, so deliveries recorded meanwhile are not undone by
        an edit that left the quantity alone.
        """
        item = self._inventory_repo.get_by_id(item_id)
        if item is None:
            raise EntityNotFoundError("Item not found")

        new_quantity = check_stock_level(parse_count(quantity))
        item.edit(
            sku=SkuKey(
                item_name=(item_name or "").strip(),
                category=Category.parse(category),
                size=(size or "").strip(),
                color=(color or "").strip(),
            ),
            price=Money.of(price),
            description=description,
        )
        self._inventory_repo.save(item)

        if new_quantity != item.quantity:
            updated = self._inventory_repo.set_quantity(item.id, new_quantity)
            if updated is None:
                raise EntityNotFoundError("Item not found")
            logger.info("Stock for %s set to %d by edit", item.id, new_quantity)
            return updated
        return self._inventory_repo.get_by_id(item.id) or item
