"""python-docx backed BarcodeListWriter: a printable label sheet."""

from __future__ import annotations

from io import BytesIO
from pathlib import Path

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.shared import Inches

from ims.application.barcode_image import BarcodeRenderer
from ims.application.export_report import BarcodeLabel, BarcodeList, BarcodeListWriter

_IMAGE_WIDTH = Inches(2.0)


class DocxBarcodeListWriter(BarcodeListWriter):
    """One heading and one two-column table (image, details) per category."""

    def __init__(self, renderer: BarcodeRenderer) -> None:
        self._renderer = renderer

    def write(self, barcode_list: BarcodeList, destination: Path) -> Path:
        document = Document()

        heading = document.add_heading(barcode_list.title, level=1)
        heading.alignment = WD_ALIGN_PARAGRAPH.CENTER
        generated = document.add_paragraph(f"Generated: {barcode_list.generated_at}")
        generated.alignment = WD_ALIGN_PARAGRAPH.CENTER
        if barcode_list.category_filter:
            scope = document.add_paragraph(f"Category Filter: {barcode_list.category_filter}")
            scope.alignment = WD_ALIGN_PARAGRAPH.CENTER

        for category, labels in barcode_list.groups:
            document.add_heading(category, level=2)
            table = document.add_table(rows=1, cols=2)
            table.style = "Table Grid"
            for cell, text in zip(table.rows[0].cells, ("Barcode Image", "Item Details")):
                paragraph = cell.paragraphs[0]
                paragraph.alignment = WD_ALIGN_PARAGRAPH.CENTER
                paragraph.add_run(text).bold = True

            for label in labels:
                image_cell, details_cell = table.add_row().cells
                self._add_image(image_cell, label.barcode)
                self._add_details(details_cell, label)

        destination.parent.mkdir(parents=True, exist_ok=True)
        document.save(str(destination))
        return destination

    def _add_image(self, cell, barcode: str) -> None:
        paragraph = cell.paragraphs[0]
        paragraph.alignment = WD_ALIGN_PARAGRAPH.CENTER
        png = self._renderer.render(barcode)
        paragraph.add_run().add_picture(BytesIO(png), width=_IMAGE_WIDTH)

    @staticmethod
    def _add_details(cell, label: BarcodeLabel) -> None:
        lines = [
            ("Item", label.item_name),
            ("Size", label.size),
            ("Color", label.color),
            ("Barcode", label.barcode),
            ("Stock", str(label.quantity)),
        ]
        for i, (name, value) in enumerate(lines):
            paragraph = cell.paragraphs[0] if i == 0 else cell.add_paragraph()
            paragraph.add_run(f"{name}: ").bold = True
            paragraph.add_run(value)
