"""Application service: Delete Item use case.

Deliveries that referenced the item are left alone; their reference
simply dangles from now on.
"""

from __future__ import annotations

from ims.domain.exceptions import EntityNotFoundError
from ims.domain.repository.inventory_repository import InventoryRepository
from ims.logging_config import get_logger

logger = get_logger(__name__)


class DeleteItemHandler:

    def __init__(self, inventory_repo: InventoryRepository) -> None:
        self._inventory_repo = inventory_repo

    def handle(self, item_id: str) -> None:
        if not self._inventory_repo.delete(item_id):
            raise EntityNotFoundError("Item not found")
        logger.info("Inventory item %s deleted", item_id)
