"""Tests for the openpyxl report writer."""

import openpyxl

from ims.application.export_report import BarcodeImage, Sheet
from ims.infrastructure.export.code128_renderer import Code128Renderer
from ims.infrastructure.export.xlsx_report_writer import XlsxReportWriter


def test_writes_header_rows_and_bold_summary(tmp_path):
    sheet = Sheet(
        title="Inventory",
        columns=[("Item Name", 25), ("Current Stock", 14)],
        rows=[["Polo", 4], ["Parka", 2]],
        summary=["SUMMARY", 6],
    )
    path = XlsxReportWriter().write(sheet, tmp_path / "reports" / "out.xlsx")

    wb = openpyxl.load_workbook(path)
    ws = wb.active
    rows = list(ws.iter_rows(values_only=True))
    assert ws.title == "Inventory"
    assert rows[0] == ("Item Name", "Current Stock")
    assert rows[1:3] == [("Polo", 4), ("Parka", 2)]
    assert rows[-1] == ("SUMMARY", 6)
    assert ws.cell(row=ws.max_row, column=1).font.bold
    assert ws.column_dimensions["A"].width == 25


def test_no_summary(tmp_path):
    sheet = Sheet("Delivery Report", [("Customer Name", 20)], [["Acme"]])
    path = XlsxReportWriter().write(sheet, tmp_path / "d.xlsx")

    ws = openpyxl.load_workbook(path).active
    assert ws.max_row == 2


def _barcode_sheet():
    return Sheet(
        title="Inventory",
        columns=[("Barcode Number", 22), ("Barcode Image", 22)],
        rows=[["123456789012", BarcodeImage("123456789012")]],
    )


def test_barcode_cells_become_pictures(tmp_path):
    path = XlsxReportWriter(Code128Renderer()).write(_barcode_sheet(), tmp_path / "i.xlsx")

    ws = openpyxl.load_workbook(path).active
    assert len(ws._images) == 1
    assert ws["A2"].value == "123456789012"
    assert ws["B2"].value is None
    assert ws.row_dimensions[2].height == 40


def test_barcode_cells_without_renderer_hold_the_number(tmp_path):
    path = XlsxReportWriter().write(_barcode_sheet(), tmp_path / "i.xlsx")

    ws = openpyxl.load_workbook(path).active
    assert ws._images == []
    assert ws["B2"].value == "123456789012"
