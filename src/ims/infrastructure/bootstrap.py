"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from ims.infrastructure.config import get_settings
from ims.infrastructure.export.code128_renderer import Code128Renderer
from ims.infrastructure.persistence.json_delivery_repository import (
    JsonDeliveryRepository,
)
from ims.infrastructure.persistence.json_inventory_repository import (
    JsonInventoryRepository,
)


def inventory_repository() -> JsonInventoryRepository:
    return JsonInventoryRepository(get_settings().DATA_DIR / "inventory.json")


def delivery_repository() -> JsonDeliveryRepository:
    return JsonDeliveryRepository(get_settings().DATA_DIR / "deliveries.json")


def barcode_renderer() -> Code128Renderer:
    return Code128Renderer()
