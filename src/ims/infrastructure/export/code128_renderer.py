"""python-barcode backed BarcodeRenderer (Code 128, PNG via Pillow)."""

from __future__ import annotations

from io import BytesIO

from barcode import Code128
from barcode.writer import ImageWriter

from ims.application.barcode_image import BarcodeRenderer

# Bars only, sized for a label cell; the number is printed next to it
_OPTIONS = {
    "module_width": 0.3,
    "module_height": 12.0,
    "quiet_zone": 2.0,
    "write_text": False,
    "dpi": 200,
}


class Code128Renderer(BarcodeRenderer):

    def render(self, barcode: str) -> bytes:
        buffer = BytesIO()
        Code128(barcode, writer=ImageWriter()).write(buffer, options=_OPTIONS)
        return buffer.getvalue()
