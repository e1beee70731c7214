"""Application services: Delivery History and Show Delivery (queries)."""

from __future__ import annotations

from datetime import date, datetime, time, timezone

from ims.application.dto import DeliveryDTO
from ims.domain.exceptions import EntityNotFoundError, ValidationError
from ims.domain.repository.delivery_repository import DeliveryQuery, DeliveryRepository
from ims.domain.repository.inventory_repository import InventoryRepository
from ims.domain.repository.pagination import Page


def build_query(
    customer_name: str | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
) -> DeliveryQuery:
    """Turn form-style filters into a DeliveryQuery.

    The end date covers the whole day (up to 23:59:59.999999 UTC).
    """
    if start_date and end_date and start_date > end_date:
        raise ValidationError("Start date must not be after end date")
    return DeliveryQuery(
        customer_name=(customer_name or "").strip() or None,
        start=datetime.combine(start_date, time.min, tzinfo=timezone.utc) if start_date else None,
        end=datetime.combine(end_date, time.max, tzinfo=timezone.utc) if end_date else None,
    )


class DeliveryHistoryHandler:

    def __init__(
        self,
        delivery_repo: DeliveryRepository,
        inventory_repo: InventoryRepository,
        per_page: int = 10,
    ) -> None:
        self._delivery_repo = delivery_repo
        self._inventory_repo = inventory_repo
        self._per_page = per_page

    def handle(
        self,
        customer_name: str | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
        page: int = 1,
    ) -> Page[DeliveryDTO]:
        query = build_query(customer_name, start_date, end_date)
        result = self._delivery_repo.query(query, page=page, per_page=self._per_page)
        return Page(
            items=[
                DeliveryDTO.from_record(r, self._inventory_repo.get_by_id(r.inventory_item_id))
                for r in result.items
            ],
            page=result.page,
            per_page=result.per_page,
            total=result.total,
        )


class ShowDeliveryHandler:

    def __init__(
        self,
        delivery_repo: DeliveryRepository,
        inventory_repo: InventoryRepository,
    ) -> None:
        self._delivery_repo = delivery_repo
        self._inventory_repo = inventory_repo

    def handle(self, delivery_id: str) -> DeliveryDTO:
        record = self._delivery_repo.get_by_id(delivery_id)
        if record is None:
            raise EntityNotFoundError("Delivery not found")
        return DeliveryDTO.from_record(
            record, self._inventory_repo.get_by_id(record.inventory_item_id)
        )
