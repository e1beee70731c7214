"""InventoryItem aggregate: one stock line per SKU.

A SKU is the (item name, category, size, color) tuple. Each SKU carries
its own barcode and on-hand quantity; the quantity is the source of truth
that delivery records are reconciled against.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from ims.domain.exceptions import ValidationError
from ims.domain.model.value_objects import BARCODE_LENGTH, Money, is_valid_barcode

DEFAULT_LOW_STOCK_THRESHOLD = 10


class Category(Enum):
    T_SHIRT = "T-Shirt"
    JACKET = "Jacket"
    CAP = "Cap"
    TROUSERS = "Trousers"
    UNIFORM = "Uniform"

    @staticmethod
    def parse(raw: str | Category) -> Category:
        if isinstance(raw, Category):
            return raw
        for category in Category:
            if category.value.lower() == (raw or "").strip().lower():
                return category
        allowed = ", ".join(c.value for c in Category)
        raise ValidationError(f"Unknown category '{raw}'. Expected one of: {allowed}")


class StockStatus(Enum):
    OUT_OF_STOCK = "Out of Stock"
    LOW_STOCK = "Low Stock"
    IN_STOCK = "In Stock"


@dataclass(frozen=True)
class SkuKey:
    """Exact-match identity of a stock line."""

    item_name: str
    category: Category
    size: str
    color: str


def new_id() -> str:
    return uuid.uuid4().hex


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class InventoryItem:
    """Aggregate root for a single SKU.

    Invariants:
    - ``quantity`` is never negative
    - ``barcode`` is a 12-digit numeric string (uniqueness is enforced
      by the repository)

    Use ``InventoryItem.create()`` for new items; ``__init__`` stays simple
    so repositories can reconstitute persisted items without re-validating.
    """

    id: str
    item_name: str
    category: Category
    size: str
    color: str
    barcode: str
    quantity: int
    price: Money
    description: str = ""
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    @staticmethod
    def create(
        sku: SkuKey,
        barcode: str,
        quantity: int,
        price: Money,
        description: str = "",
    ) -> InventoryItem:
        if not sku.item_name:
            raise ValidationError("Item name is required")
        if not is_valid_barcode(barcode):
            raise ValidationError(f"Barcode must be {BARCODE_LENGTH} digits, got {barcode!r}")
        check_stock_level(quantity)
        return InventoryItem(
            id=new_id(),
            item_name=sku.item_name,
            category=sku.category,
            size=sku.size,
            color=sku.color,
            barcode=barcode,
            quantity=quantity,
            price=price,
            description=description or "",
        )

    @property
    def sku(self) -> SkuKey:
        return SkuKey(self.item_name, self.category, self.size, self.color)

    @property
    def total_value(self) -> Money:
        return self.price * self.quantity

    def stock_status(self, low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD) -> StockStatus:
        if self.quantity == 0:
            return StockStatus.OUT_OF_STOCK
        if self.quantity <= low_stock_threshold:
            return StockStatus.LOW_STOCK
        return StockStatus.IN_STOCK

    def edit(
        self,
        *,
        sku: SkuKey,
        price: Money,
        description: str,
    ) -> None:
        """Apply an admin edit to the descriptive fields.

        The barcode never changes, and stock is set through the repository.
        """
        if not sku.item_name:
            raise ValidationError("Item name is required")
        self.item_name = sku.item_name
        self.category = sku.category
        self.size = sku.size
        self.color = sku.color
        self.price = price
        self.description = description or ""
        self.touch()

    def touch(self) -> None:
        self.updated_at = utc_now()


def check_stock_level(quantity: int) -> int:
    """Validate an absolute stock count entered by an admin."""
    if quantity < 0:
        raise ValidationError("Quantity cannot be negative")
    return quantity
