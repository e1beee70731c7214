"""Application service: Update Delivery use case (admin)."""

from __future__ import annotations

from ims.application.dto import DeliveryDTO
from ims.domain.repository.delivery_repository import DeliveryRepository
from ims.domain.repository.inventory_repository import InventoryRepository
from ims.domain.service.stock_ledger import StockLedgerService


class UpdateDeliveryHandler:

    def __init__(
        self,
        inventory_repo: InventoryRepository,
        delivery_repo: DeliveryRepository,
    ) -> None:
        self._inventory_repo = inventory_repo
        self._ledger = StockLedgerService(inventory_repo, delivery_repo)

    def handle(
        self,
        delivery_id: str,
        customer_name: str,
        quantity: int | str,
        notes: str = "",
    ) -> DeliveryDTO:
        """Correct a delivery; stock moves by the change in quantity."""
        record = self._ledger.update(
            delivery_id=delivery_id,
            customer_name=customer_name,
            quantity_delivered=quantity,
            notes=notes,
        )
        item = self._inventory_repo.get_by_id(record.inventory_item_id)
        return DeliveryDTO.from_record(record, item)
