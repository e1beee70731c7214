"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from ims.domain.model.delivery import DeliveryRecord
from ims.domain.model.inventory import InventoryItem

DATE_FORMAT = "%Y-%m-%d"
DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"

DELETED_ITEM = "(deleted item)"


@dataclass(frozen=True)
class SizeSpec:
    """Input: one size line of an "add item" request."""

    size: str
    quantity: int | str | None


@dataclass(frozen=True)
class ItemDTO:
    id: str
    item_name: str
    category: str
    size: str
    color: str
    barcode: str
    quantity: int
    price: str  # formatted, e.g. "Rs 1,250.00"
    description: str
    status: str

    @staticmethod
    def from_item(item: InventoryItem, low_stock_threshold: int) -> ItemDTO:
        return ItemDTO(
            id=item.id,
            item_name=item.item_name,
            category=item.category.value,
            size=item.size,
            color=item.color,
            barcode=item.barcode,
            quantity=item.quantity,
            price=str(item.price),
            description=item.description,
            status=item.stock_status(low_stock_threshold).value,
        )


@dataclass(frozen=True)
class DeliveryDTO:
    id: str
    delivery_date: str
    customer_name: str
    item_name: str
    barcode: str
    quantity_delivered: int
    delivered_by: str
    notes: str

    @staticmethod
    def from_record(record: DeliveryRecord, item: InventoryItem | None) -> DeliveryDTO:
        return DeliveryDTO(
            id=record.id,
            delivery_date=record.delivery_date.strftime(DATETIME_FORMAT),
            customer_name=record.customer_name,
            item_name=item.item_name if item is not None else DELETED_ITEM,
            barcode=record.barcode,
            quantity_delivered=record.quantity_delivered,
            delivered_by=record.delivered_by,
            notes=record.notes,
        )
