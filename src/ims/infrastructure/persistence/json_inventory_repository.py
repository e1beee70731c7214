"""JSON-file-backed implementation of InventoryRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path

from ims.domain.exceptions import (
    DuplicateBarcodeError,
    DuplicateSkuError,
    EntityNotFoundError,
)
from ims.domain.model.inventory import Category, InventoryItem, SkuKey, utc_now
from ims.domain.model.value_objects import Money
from ims.domain.repository.inventory_repository import InventoryRepository
from ims.infrastructure.persistence.json_file import JsonFile


class JsonInventoryRepository(InventoryRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- InventoryRepository interface ----------------------------------------

    def get_by_id(self, item_id: str) -> InventoryItem | None:
        return self._find_one(lambda raw: raw["id"] == item_id)

    def get_by_barcode(self, barcode: str) -> InventoryItem | None:
        return self._find_one(lambda raw: raw["barcode"] == barcode)

    def find_by_sku(self, sku: SkuKey) -> InventoryItem | None:
        return self._find_one(
            lambda raw: raw["item_name"] == sku.item_name
            and raw["category"] == sku.category.value
            and raw["size"] == sku.size
            and raw["color"] == sku.color
        )

    def list_all(self) -> list[InventoryItem]:
        return [self._to_domain(raw) for raw in self._file.load()]

    def add(self, item: InventoryItem) -> None:
        with self._file.lock:
            records = self._file.load()
            if any(self._same_sku(raw, item) for raw in records):
                raise DuplicateSkuError(item.item_name, item.size, item.color)
            if any(raw["barcode"] == item.barcode for raw in records):
                raise DuplicateBarcodeError(item.barcode)
            records.append(self._to_raw(item))
            self._file.persist(records)

    def save(self, item: InventoryItem) -> None:
        with self._file.lock:
            records = self._file.load()
            if any(raw["id"] != item.id and self._same_sku(raw, item) for raw in records):
                raise DuplicateSkuError(item.item_name, item.size, item.color)
            for i, raw in enumerate(records):
                if raw["id"] == item.id:
                    updated = self._to_raw(item)
                    updated["quantity"] = raw["quantity"]
                    records[i] = updated
                    self._file.persist(records)
                    return
        raise EntityNotFoundError(f"Inventory item {item.id} not found")

    def delete(self, item_id: str) -> bool:
        with self._file.lock:
            records = self._file.load()
            kept = [raw for raw in records if raw["id"] != item_id]
            if len(kept) == len(records):
                return False
            self._file.persist(kept)
            return True

    def adjust_quantity(self, item_id: str, delta: int) -> InventoryItem | None:
        with self._file.lock:
            records = self._file.load()
            for raw in records:
                if raw["id"] != item_id:
                    continue
                if raw["quantity"] + delta < 0:
                    return None
                raw["quantity"] += delta
                raw["updated_at"] = utc_now().isoformat()
                self._file.persist(records)
                return self._to_domain(raw)
        return None

    def set_quantity(self, item_id: str, quantity: int) -> InventoryItem | None:
        with self._file.lock:
            records = self._file.load()
            for raw in records:
                if raw["id"] == item_id:
                    raw["quantity"] = quantity
                    raw["updated_at"] = utc_now().isoformat()
                    self._file.persist(records)
                    return self._to_domain(raw)
        return None

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(item: InventoryItem) -> dict:
        return {
            "id": item.id,
            "item_name": item.item_name,
            "category": item.category.value,
            "size": item.size,
            "color": item.color,
            "barcode": item.barcode,
            "quantity": item.quantity,
            "price": str(item.price.amount),
            "description": item.description,
            "created_at": item.created_at.isoformat(),
            "updated_at": item.updated_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> InventoryItem:
        return InventoryItem(
            id=raw["id"],
            item_name=raw["item_name"],
            category=Category(raw["category"]),
            size=raw["size"],
            color=raw["color"],
            barcode=raw["barcode"],
            quantity=raw["quantity"],
            price=Money(Decimal(raw["price"])),
            description=raw.get("description", ""),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
        )

    # --- Helpers --------------------------------------------------------------

    def _find_one(self, predicate) -> InventoryItem | None:
        for raw in self._file.load():
            if predicate(raw):
                return self._to_domain(raw)
        return None

    @staticmethod
    def _same_sku(raw: dict, item: InventoryItem) -> bool:
        return (
            raw["item_name"] == item.item_name
            and raw["category"] == item.category.value
            and raw["size"] == item.size
            and raw["color"] == item.color
        )
