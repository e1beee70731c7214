"""Application service: Dashboard statistics (query).

Day and month boundaries are computed in UTC, the same zone delivery
dates are stored in.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from ims.application.dto import DeliveryDTO, ItemDTO
from ims.domain.model.inventory import DEFAULT_LOW_STOCK_THRESHOLD, utc_now
from ims.domain.repository.delivery_repository import DeliveryRepository
from ims.domain.repository.inventory_repository import InventoryRepository

RECENT_LIMIT = 5


@dataclass(frozen=True)
class CategoryStockDTO:
    category: str
    total_quantity: int
    item_count: int


@dataclass(frozen=True)
class DashboardDTO:
    total_items: int
    total_stock: int
    low_stock_items: int
    out_of_stock_items: int
    today_deliveries: int
    this_month_deliveries: int
    total_deliveries: int
    total_units_delivered: int
    category_stock: list[CategoryStockDTO]
    recent_deliveries: list[DeliveryDTO]
    low_stock_list: list[ItemDTO]


class DashboardHandler:

    def __init__(
        self,
        inventory_repo: InventoryRepository,
        delivery_repo: DeliveryRepository,
        low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD,
    ) -> None:
        self._inventory_repo = inventory_repo
        self._delivery_repo = delivery_repo
        self._threshold = low_stock_threshold

    def handle(self, now: datetime | None = None) -> DashboardDTO:
        now = now or utc_now()
        items = self._inventory_repo.list_all()
        deliveries = self._delivery_repo.list_all()

        today = now.replace(hour=0, minute=0, second=0, microsecond=0)
        tomorrow = today + timedelta(days=1)
        this_month = today.replace(day=1)
        next_month = (this_month + timedelta(days=32)).replace(day=1)

        low_stock = [i for i in items if 0 < i.quantity <= self._threshold]
        low_stock.sort(key=lambda i: i.quantity)

        by_category: dict[str, list[int]] = {}
        for item in items:
            totals = by_category.setdefault(item.category.value, [0, 0])
            totals[0] += item.quantity
            totals[1] += 1
        category_stock = sorted(
            (CategoryStockDTO(cat, qty, count) for cat, (qty, count) in by_category.items()),
            key=lambda c: c.total_quantity,
            reverse=True,
        )

        items_by_id = {i.id: i for i in items}
        recent = sorted(deliveries, key=lambda d: d.delivery_date, reverse=True)[:RECENT_LIMIT]

        return DashboardDTO(
            total_items=len(items),
            total_stock=sum(i.quantity for i in items),
            low_stock_items=len(low_stock),
            out_of_stock_items=sum(1 for i in items if i.quantity == 0),
            today_deliveries=sum(1 for d in deliveries if today <= d.delivery_date < tomorrow),
            this_month_deliveries=sum(
                1 for d in deliveries if this_month <= d.delivery_date < next_month
            ),
            total_deliveries=len(deliveries),
            total_units_delivered=sum(d.quantity_delivered for d in deliveries),
            category_stock=category_stock,
            recent_deliveries=[
                DeliveryDTO.from_record(d, items_by_id.get(d.inventory_item_id)) for d in recent
            ],
            low_stock_list=[
                ItemDTO.from_item(i, self._threshold) for i in low_stock[:RECENT_LIMIT]
            ],
        )
