"""Domain service: Stock Ledger reconciliation.

Keeps ``InventoryItem.quantity`` consistent with the delivery records
that reference it:

- record: stock goes down by the delivered amount
- update: stock moves by the difference between old and new amounts
- delete: the delivered amount goes back on the shelf

Every stock change is a single ``adjust_quantity`` call, which the
repository applies atomically and only if stock stays non-negative.
Record and update move stock first and then write the delivery (update
only if the stored quantity is still the one the difference was taken
from); a failed or refused write reverses the stock change. Delete
removes the delivery first, so when two deletes race only the one that
removed it restores stock.
"""

from __future__ import annotations

from dataclasses import replace

from ims.domain.exceptions import (
    ConcurrentUpdateError,
    DanglingReferenceError,
    EntityNotFoundError,
    InsufficientStockError,
)
from ims.domain.model.delivery import DeliveryRecord
from ims.domain.model.value_objects import Quantity
from ims.domain.repository.delivery_repository import DeliveryRepository
from ims.domain.repository.inventory_repository import InventoryRepository
from ims.logging_config import get_logger

logger = get_logger(__name__)


class StockLedgerService:

    def __init__(
        self,
        inventory_repo: InventoryRepository,
        delivery_repo: DeliveryRepository,
    ) -> None:
        self._inventory_repo = inventory_repo
        self._delivery_repo = delivery_repo

    # --- Record ---------------------------------------------------------------

    def record(
        self,
        inventory_id: str,
        quantity_delivered: int | str,
        customer_name: str,
        notes: str,
        delivered_by: str,
    ) -> DeliveryRecord:
        qty = Quantity.of(quantity_delivered)

        item = self._inventory_repo.get_by_id(inventory_id)
        if item is None:
            raise EntityNotFoundError("Inventory item not found")

        # Build (and validate) the record before any stock moves
        record = DeliveryRecord.create(
            inventory_item_id=item.id,
            barcode=item.barcode,
            customer_name=customer_name,
            quantity=qty,
            delivered_by=delivered_by,
            notes=notes,
        )

        if self._inventory_repo.adjust_quantity(item.id, -qty.value) is None:
            current = self._inventory_repo.get_by_id(item.id)
            if current is None:
                raise EntityNotFoundError("Inventory item not found")
            raise InsufficientStockError(
                f"Insufficient stock for {current.item_name}. "
                f"Available: {current.quantity}, Requested: {qty.value}",
                item_name=current.item_name,
                available=current.quantity,
                requested=qty.value,
            )

        try:
            self._delivery_repo.add(record)
        except Exception:
            self._compensate(item.id, qty.value, f"recording delivery for {record.customer_name}")
            raise

        logger.info(
            "Delivery %s recorded: %d x %s to %s by %s",
            record.id, qty.value, item.item_name, record.customer_name, delivered_by,
        )
        return record

    # --- Update ---------------------------------------------------------------

    def update(
        self,
        delivery_id: str,
        customer_name: str,
        quantity_delivered: int | str,
        notes: str,
    ) -> DeliveryRecord:
        new_qty = Quantity.of(quantity_delivered)

        delivery = self._delivery_repo.get_by_id(delivery_id)
        if delivery is None:
            raise EntityNotFoundError("Delivery not found")

        # Work on a copy so a rejected update leaves the stored record untouched
        revised = replace(delivery)
        revised.revise(customer_name, new_qty, notes)
        diff = new_qty.value - delivery.quantity_delivered
        item_id = delivery.inventory_item_id

        # The item only matters when stock has to move
        if diff != 0:
            if self._inventory_repo.get_by_id(item_id) is None:
                raise DanglingReferenceError("Associated inventory item no longer exists")
            # diff < 0 returns stock and is always allowed; diff > 0 needs stock
            if self._inventory_repo.adjust_quantity(item_id, -diff) is None:
                current = self._inventory_repo.get_by_id(item_id)
                if current is None:
                    raise DanglingReferenceError("Associated inventory item no longer exists")
                raise InsufficientStockError(
                    f"Insufficient stock for {current.item_name} quantity update. "
                    f"Available: {current.quantity}, Additional needed: {diff}",
                    item_name=current.item_name,
                    available=current.quantity,
                    requested=diff,
                )

        try:
            saved = self._delivery_repo.save_if(revised, delivery.quantity_delivered)
        except Exception:
            if diff != 0:
                self._compensate(item_id, diff, f"updating delivery {delivery_id}")
            raise

        if not saved:
            # Someone else changed or removed the delivery since we read it
            if diff != 0:
                self._compensate(item_id, diff, f"updating delivery {delivery_id}")
            if self._delivery_repo.get_by_id(delivery_id) is None:
                raise EntityNotFoundError("Delivery not found")
            raise ConcurrentUpdateError(
                "Delivery was changed by another request; reload it and try again"
            )

        logger.info(
            "Delivery %s updated: quantity %d -> %d (stock delta %+d)",
            delivery_id, delivery.quantity_delivered, new_qty.value, -diff,
        )
        return revised

    # --- Delete ---------------------------------------------------------------

    def delete(self, delivery_id: str) -> None:
        delivery = self._delivery_repo.get_by_id(delivery_id)
        if delivery is None:
            raise EntityNotFoundError("Delivery not found")

        # Only the request that actually removes the record restores stock
        if not self._delivery_repo.delete(delivery_id):
            raise EntityNotFoundError("Delivery not found")

        try:
            restored = self._inventory_repo.adjust_quantity(
                delivery.inventory_item_id, delivery.quantity_delivered
            )
        except Exception:
            logger.error(
                "Restoring stock for delivery %s failed; putting the record back",
                delivery_id,
            )
            self._delivery_repo.add(delivery)
            raise

        if restored is None:
            logger.info(
                "Delivery %s references a deleted item; no stock restored", delivery_id
            )

        logger.info(
            "Delivery %s deleted; %d unit(s) returned to stock",
            delivery_id, delivery.quantity_delivered if restored is not None else 0,
        )

    # --- Internal helpers -----------------------------------------------------

    def _compensate(self, item_id: str, delta: int, context: str) -> None:
        """Undo a stock change after the delivery write failed."""
        if self._inventory_repo.adjust_quantity(item_id, delta) is None:
            logger.error(
                "Stock for item %s is out of sync with deliveries: could not apply "
                "%+d while %s",
                item_id, delta, context,
            )
