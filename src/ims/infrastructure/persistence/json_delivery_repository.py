"""JSON-file-backed implementation of DeliveryRepository."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from ims.domain.model.delivery import DeliveryRecord
from ims.domain.repository.delivery_repository import DeliveryRepository
from ims.infrastructure.persistence.json_file import JsonFile


class JsonDeliveryRepository(DeliveryRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- DeliveryRepository interface -----------------------------------------

    def get_by_id(self, delivery_id: str) -> DeliveryRecord | None:
        for raw in self._file.load():
            if raw["id"] == delivery_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[DeliveryRecord]:
        return [self._to_domain(raw) for raw in self._file.load()]

    def add(self, record: DeliveryRecord) -> None:
        with self._file.lock:
            records = self._file.load()
            records.append(self._to_raw(record))
            self._file.persist(records)

    def save_if(self, record: DeliveryRecord, expected_quantity: int) -> bool:
        with self._file.lock:
            records = self._file.load()
            for i, raw in enumerate(records):
                if raw["id"] == record.id:
                    if raw["quantity_delivered"] != expected_quantity:
                        return False
                    records[i] = self._to_raw(record)
                    self._file.persist(records)
                    return True
        return False

    def delete(self, delivery_id: str) -> bool:
        with self._file.lock:
            records = self._file.load()
            kept = [raw for raw in records if raw["id"] != delivery_id]
            if len(kept) == len(records):
                return False
            self._file.persist(kept)
            return True

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(record: DeliveryRecord) -> dict:
        return {
            "id": record.id,
            "inventory_item_id": record.inventory_item_id,
            "barcode": record.barcode,
            "customer_name": record.customer_name,
            "quantity_delivered": record.quantity_delivered,
            "delivered_by": record.delivered_by,
            "notes": record.notes,
            "delivery_date": record.delivery_date.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> DeliveryRecord:
        return DeliveryRecord(
            id=raw["id"],
            inventory_item_id=raw["inventory_item_id"],
            barcode=raw["barcode"],
            customer_name=raw["customer_name"],
            quantity_delivered=raw["quantity_delivered"],
            delivered_by=raw["delivered_by"],
            notes=raw.get("notes", ""),
            delivery_date=datetime.fromisoformat(raw["delivery_date"]),
        )
