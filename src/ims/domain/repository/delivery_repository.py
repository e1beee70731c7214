"""Abstract repository for DeliveryRecord."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

from ims.domain.model.delivery import DeliveryRecord
from ims.domain.repository.pagination import Page, paginate


@dataclass(frozen=True)
class DeliveryQuery:
    """Filter for delivery listings.

    ``start`` and ``end`` are inclusive bounds on ``delivery_date``.
    """

    customer_name: str | None = None
    start: datetime | None = None
    end: datetime | None = None

    def matches(self, record: DeliveryRecord) -> bool:
        if self.customer_name and self.customer_name.lower() not in record.customer_name.lower():
            return False
        if self.start is not None and record.delivery_date < self.start:
            return False
        if self.end is not None and record.delivery_date > self.end:
            return False
        return True


class DeliveryRepository(ABC):

    @abstractmethod
    def get_by_id(self, delivery_id: str) -> DeliveryRecord | None:
        """Return a delivery by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[DeliveryRecord]:
        """Return every delivery record."""

    @abstractmethod
    def add(self, record: DeliveryRecord) -> None:
        """Insert a new delivery record."""

    @abstractmethod
    def save_if(self, record: DeliveryRecord, expected_quantity: int) -> bool:
        """Persist ``record`` only if the stored copy still has ``expected_quantity``.

        Check and write are one atomic step. Returns False, writing
        nothing, when the record is gone or its quantity has moved on.
        """

    @abstractmethod
    def delete(self, delivery_id: str) -> bool:
        """Remove a delivery permanently. Returns False if it did not exist."""

    def find(self, query: DeliveryQuery) -> list[DeliveryRecord]:
        """All matching deliveries, newest first."""
        rows = [r for r in self.list_all() if query.matches(r)]
        rows.sort(key=lambda r: r.delivery_date, reverse=True)
        return rows

    def query(
        self,
        query: DeliveryQuery,
        page: int = 1,
        per_page: int = 10,
    ) -> Page[DeliveryRecord]:
        return paginate(self.find(query), page, per_page)
