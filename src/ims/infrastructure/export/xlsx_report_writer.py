"""openpyxl-backed ReportWriter."""

from __future__ import annotations

from io import BytesIO
from pathlib import Path

import openpyxl
from openpyxl.drawing.image import Image
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

from ims.application.barcode_image import BarcodeRenderer
from ims.application.export_report import BarcodeImage, ReportWriter, Sheet

_HEADER_FONT = Font(bold=True, color="FFFFFF")
_HEADER_FILL = PatternFill(start_color="4472C4", end_color="4472C4", fill_type="solid")
_SUMMARY_FONT = Font(bold=True)

# Pixels for the picture, points for the row holding it
_IMAGE_SIZE = (150, 45)
_IMAGE_ROW_HEIGHT = 40


class XlsxReportWriter(ReportWriter):
    """Writes a Sheet to .xlsx.

    ``BarcodeImage`` cells become embedded pictures when a renderer is
    given, and plain barcode numbers otherwise.
    """

    def __init__(self, renderer: BarcodeRenderer | None = None) -> None:
        self._renderer = renderer

    def write(self, sheet: Sheet, destination: Path) -> Path:
        wb = openpyxl.Workbook()
        ws = wb.active
        ws.title = sheet.title

        ws.append([header for header, _ in sheet.columns])
        for cell in ws[1]:
            cell.font = _HEADER_FONT
            cell.fill = _HEADER_FILL
            cell.alignment = Alignment(horizontal="center")

        for col_idx, (_, width) in enumerate(sheet.columns, start=1):
            ws.column_dimensions[get_column_letter(col_idx)].width = width

        for row in sheet.rows:
            ws.append([self._cell_value(value) for value in row])
            for col_idx, value in enumerate(row, start=1):
                if isinstance(value, BarcodeImage) and self._renderer is not None:
                    self._embed(ws, value.value, ws.max_row, col_idx)

        if sheet.summary is not None:
            ws.append([])
            ws.append(sheet.summary)
            for cell in ws[ws.max_row]:
                cell.font = _SUMMARY_FONT

        ws.freeze_panes = "A2"

        destination.parent.mkdir(parents=True, exist_ok=True)
        wb.save(destination)
        return destination

    def _cell_value(self, value):
        if isinstance(value, BarcodeImage):
            return None if self._renderer is not None else value.value
        return value

    def _embed(self, ws, barcode: str, row: int, col: int) -> None:
        image = Image(BytesIO(self._renderer.render(barcode)))
        image.width, image.height = _IMAGE_SIZE
        ws.add_image(image, f"{get_column_letter(col)}{row}")
        ws.row_dimensions[row].height = _IMAGE_ROW_HEIGHT
