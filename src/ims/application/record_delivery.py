"""Application service: Record Delivery use case.

Delegates stock reconciliation to the StockLedgerService; this handler
only shapes the result for display.
"""

from __future__ import annotations

from ims.application.dto import DeliveryDTO
from ims.domain.repository.delivery_repository import DeliveryRepository
from ims.domain.repository.inventory_repository import InventoryRepository
from ims.domain.service.stock_ledger import StockLedgerService


class RecordDeliveryHandler:

    def __init__(
        self,
        inventory_repo: InventoryRepository,
        delivery_repo: DeliveryRepository,
    ) -> None:
        self._inventory_repo = inventory_repo
        self._ledger = StockLedgerService(inventory_repo, delivery_repo)

    def handle(
        self,
        inventory_id: str,
        customer_name: str,
        quantity: int | str,
        delivered_by: str,
        notes: str = "",
    ) -> DeliveryDTO:
        record = self._ledger.record(
            inventory_id=inventory_id,
            quantity_delivered=quantity,
            customer_name=customer_name,
            notes=notes,
            delivered_by=delivered_by,
        )
        item = self._inventory_repo.get_by_id(record.inventory_item_id)
        return DeliveryDTO.from_record(record, item)
