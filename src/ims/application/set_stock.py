"""Application service: Set Stock use case."""

from __future__ import annotations

from ims.domain.exceptions import EntityNotFoundError
from ims.domain.model.inventory import InventoryItem, check_stock_level
from ims.domain.model.value_objects import parse_count
from ims.domain.repository.inventory_repository import InventoryRepository
from ims.logging_config import get_logger

logger = get_logger(__name__)


class SetStockHandler:

    def __init__(self, inventory_repo: InventoryRepository) -> None:
        self._inventory_repo = inventory_repo

    def handle(self, item_id: str, quantity: int | str) -> InventoryItem:
        """Set the on-hand quantity after a physical stock count.

        This is an absolute overwrite, not a delta; deliveries are not
        re-reconciled against it.
        """
        count = check_stock_level(parse_count(quantity))
        item = self._inventory_repo.set_quantity(item_id, count)
        if item is None:
            raise EntityNotFoundError("Item not found")
        logger.info("Stock for %s set to %d", item_id, count)
        return item
