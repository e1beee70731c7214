"""DeliveryRecord: an append-mostly ledger entry against an InventoryItem.

The record holds only a weak reference (``inventory_item_id``) to the item;
the item may be deleted later, leaving the reference dangling.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from ims.domain.exceptions import ValidationError
from ims.domain.model.inventory import new_id, utc_now
from ims.domain.model.value_objects import Quantity


@dataclass
class DeliveryRecord:
    id: str
    inventory_item_id: str
    barcode: str
    customer_name: str
    quantity_delivered: int
    delivered_by: str
    notes: str = ""
    delivery_date: datetime = field(default_factory=utc_now)

    @staticmethod
    def create(
        inventory_item_id: str,
        barcode: str,
        customer_name: str,
        quantity: Quantity,
        delivered_by: str,
        notes: str = "",
    ) -> DeliveryRecord:
        """Create a new delivery, enforcing field-level rules.

        Stock availability is *not* checked here; that is the job of the
        stock ledger service, which owns the quantity reconciliation.
        """
        return DeliveryRecord(
            id=new_id(),
            inventory_item_id=inventory_item_id,
            barcode=barcode,
            customer_name=_clean_customer(customer_name),
            quantity_delivered=quantity.value,
            delivered_by=delivered_by,
            notes=notes or "",
        )

    def revise(self, customer_name: str, quantity: Quantity, notes: str) -> None:
        self.customer_name = _clean_customer(customer_name)
        self.quantity_delivered = quantity.value
        self.notes = notes or ""


def _clean_customer(name: str) -> str:
    if not name or not name.strip():
        raise ValidationError("Customer name is required")
    return name.strip()
