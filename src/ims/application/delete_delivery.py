"""Application service: Delete Delivery use case (admin).

Returns the delivered quantity to stock when the item still exists.
"""

from __future__ import annotations

from ims.domain.repository.delivery_repository import DeliveryRepository
from ims.domain.repository.inventory_repository import InventoryRepository
from ims.domain.service.stock_ledger import StockLedgerService


class DeleteDeliveryHandler:

    def __init__(
        self,
        inventory_repo: InventoryRepository,
        delivery_repo: DeliveryRepository,
    ) -> None:
        self._ledger = StockLedgerService(inventory_repo, delivery_repo)

    def handle(self, delivery_id: str) -> None:
        self._ledger.delete(delivery_id)
