"""Application service: barcode image rendering.

The rasterizer is a port; ``ims.infrastructure.export`` supplies the
Code 128 implementation.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ims.domain.exceptions import ValidationError
from ims.domain.model.value_objects import normalize_barcode


class BarcodeRenderer(ABC):

    @abstractmethod
    def render(self, barcode: str) -> bytes:
        """Return a PNG image of ``barcode``."""


class BarcodeImageHandler:

    def __init__(self, renderer: BarcodeRenderer) -> None:
        self._renderer = renderer

    def handle(self, raw_barcode: str) -> bytes:
        barcode = normalize_barcode(raw_barcode)
        if not barcode:
            raise ValidationError("Missing barcode")
        return self._renderer.render(barcode)
