"""Application service: spreadsheet reports and barcode label sheets.

Builds the report contents (columns, rows, summary) from the stores and
hands them to a ``ReportWriter`` or ``BarcodeListWriter``; the file formats
live in infrastructure.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from pathlib import Path

from ims.application.delivery_history import build_query
from ims.application.dto import DATE_FORMAT, DATETIME_FORMAT
from ims.domain.exceptions import ValidationError
from ims.domain.model.inventory import DEFAULT_LOW_STOCK_THRESHOLD, Category, utc_now
from ims.domain.model.value_objects import Money
from ims.domain.repository.delivery_repository import DeliveryRepository
from ims.domain.repository.inventory_repository import InventoryRepository
from ims.logging_config import get_logger

logger = get_logger(__name__)

INVENTORY_COLUMNS = [
    ("Item Name", 25),
    ("Category", 12),
    ("Size", 10),
    ("Color", 12),
    ("Barcode Number", 22),
    ("Barcode Image", 22),
    ("Current Stock", 14),
    ("Unit Price", 12),
    ("Total Value", 14),
    ("Description", 30),
    ("Status", 14),
    ("Date Added", 20),
    ("Last Updated", 20),
]

DELIVERY_COLUMNS = [
    ("Delivery Date", 15),
    ("Customer Name", 20),
    ("Item Name", 25),
    ("Category", 12),
    ("Size", 10),
    ("Color", 15),
    ("Barcode", 18),
    ("Quantity Delivered", 18),
    ("Unit Price", 12),
    ("Total Amount", 15),
    ("Delivered By", 15),
    ("Notes", 30),
]


@dataclass(frozen=True)
class BarcodeImage:
    """Cell value the writer replaces with a rendered barcode."""

    value: str


@dataclass(frozen=True)
class Sheet:
    title: str
    columns: list[tuple[str, int]]  # (header, width)
    rows: list[list]
    summary: list | None = None


class ReportWriter(ABC):

    @abstractmethod
    def write(self, sheet: Sheet, destination: Path) -> Path:
        """Write the sheet to ``destination`` and return the file path."""


@dataclass(frozen=True)
class BarcodeLabel:
    item_name: str
    size: str
    color: str
    barcode: str
    quantity: int


@dataclass(frozen=True)
class BarcodeList:
    """Printable barcode labels, grouped by category."""

    title: str
    generated_at: str
    category_filter: str | None
    groups: list[tuple[str, list[BarcodeLabel]]]


class BarcodeListWriter(ABC):

    @abstractmethod
    def write(self, barcode_list: BarcodeList, destination: Path) -> Path:
        """Write the label document to ``destination`` and return the file path."""


class ExportReportHandler:

    def __init__(
        self,
        inventory_repo: InventoryRepository,
        delivery_repo: DeliveryRepository,
        writer: ReportWriter,
        list_writer: BarcodeListWriter,
        low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD,
    ) -> None:
        self._inventory_repo = inventory_repo
        self._delivery_repo = delivery_repo
        self._writer = writer
        self._list_writer = list_writer
        self._threshold = low_stock_threshold

    def export_inventory(
        self,
        export_dir: Path,
        category: str | None = None,
        search: str | None = None,
        low_stock_only: bool = False,
    ) -> Path:
        items = self._inventory_repo.search(
            category=Category.parse(category) if category else None,
            text=search,
        )
        if low_stock_only:
            items = [i for i in items if i.quantity <= self._threshold]
        if not items:
            raise ValidationError("No inventory items found to export")

        items.sort(key=lambda i: (i.category.value, i.item_name))
        rows = [
            [
                item.item_name,
                item.category.value,
                item.size,
                item.color,
                item.barcode,
                BarcodeImage(item.barcode),
                item.quantity,
                item.price.amount,
                item.total_value.amount,
                item.description,
                item.stock_status(self._threshold).value,
                item.created_at.strftime(DATETIME_FORMAT),
                item.updated_at.strftime(DATETIME_FORMAT),
            ]
            for item in items
        ]

        low = sum(1 for i in items if 0 < i.quantity <= self._threshold)
        out = sum(1 for i in items if i.quantity == 0)
        summary = [
            "SUMMARY", "", "", "", "", "",
            sum(i.quantity for i in items),
            "",
            sum((i.total_value for i in items), Money.zero()).amount,
            f"Total Items: {len(items)} | Low Stock: {low} | Out of Stock: {out}",
        ]

        filename = f"inventory-list-{utc_now().strftime('%Y-%m-%d-%H%M%S')}.xlsx"
        path = self._writer.write(
            Sheet("Inventory", INVENTORY_COLUMNS, rows, summary), export_dir / filename
        )
        logger.info("Exported %d inventory item(s) to %s", len(items), path)
        return path

    def export_deliveries(
        self,
        export_dir: Path,
        customer_name: str | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> Path:
        query = build_query(customer_name, start_date, end_date)
        items_by_id = {i.id: i for i in self._inventory_repo.list_all()}

        rows = []
        for record in self._delivery_repo.find(query):
            item = items_by_id.get(record.inventory_item_id)
            if item is None:
                # Item deleted since; nothing to price the line with
                continue
            rows.append([
                record.delivery_date.strftime(DATE_FORMAT),
                record.customer_name,
                item.item_name,
                item.category.value,
                item.size,
                item.color,
                record.barcode,
                record.quantity_delivered,
                str(item.price),
                str(item.price * record.quantity_delivered),
                record.delivered_by,
                record.notes,
            ])

        if not rows:
            raise ValidationError("No delivery records found for the selected criteria")

        filename = f"delivery-report-{utc_now().strftime('%Y-%m-%d')}.xlsx"
        path = self._writer.write(
            Sheet("Delivery Report", DELIVERY_COLUMNS, rows), export_dir / filename
        )
        logger.info("Exported %d delivery record(s) to %s", len(rows), path)
        return path

    def export_barcode_list(self, export_dir: Path, category: str | None = None) -> Path:
        """Write a printable label sheet: one barcode image plus details per item."""
        selected = Category.parse(category) if category else None
        items = self._inventory_repo.search(category=selected)
        if not items:
            raise ValidationError("No items found to export")

        items.sort(key=lambda i: (i.category.value, i.item_name))
        groups: dict[str, list[BarcodeLabel]] = {}
        for item in items:
            groups.setdefault(item.category.value, []).append(
                BarcodeLabel(item.item_name, item.size, item.color, item.barcode, item.quantity)
            )

        now = utc_now()
        barcode_list = BarcodeList(
            title="Inventory Barcode List",
            generated_at=now.strftime(DATETIME_FORMAT),
            category_filter=selected.value if selected else None,
            groups=list(groups.items()),
        )
        scope = selected.value.lower() if selected else "all"
        filename = f"barcodes-{scope}-{now.strftime('%Y-%m-%d')}.docx"
        path = self._list_writer.write(barcode_list, export_dir / filename)
        logger.info("Exported %d barcode label(s) to %s", len(items), path)
        return path
