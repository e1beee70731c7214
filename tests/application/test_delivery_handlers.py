"""Tests for the delivery use cases: record, update, delete, history, show."""

from datetime import date, datetime, timezone

import pytest

from ims.application.delete_delivery import DeleteDeliveryHandler
from ims.application.delivery_history import (
    DeliveryHistoryHandler,
    ShowDeliveryHandler,
    build_query,
)
from ims.application.dto import DELETED_ITEM
from ims.application.record_delivery import RecordDeliveryHandler
from ims.application.update_delivery import UpdateDeliveryHandler
from ims.domain.exceptions import EntityNotFoundError, InsufficientStockError, ValidationError
from tests.factories import make_delivery, make_item
from tests.fakes import FakeDeliveryRepository, FakeInventoryRepository


def _setup(quantity=10):
    item = make_item(quantity=quantity)
    return FakeInventoryRepository([item]), FakeDeliveryRepository(), item


def _dated(item, customer, when):
    record = make_delivery(item, customer=customer)
    record.delivery_date = when
    return record


class TestRecordUpdateDelete:

    def test_record_returns_display_dto(self):
        inv, deliveries, item = _setup()
        dto = RecordDeliveryHandler(inv, deliveries).handle(
            inventory_id=item.id, customer_name="Alice", quantity="3", delivered_by="sam"
        )
        assert dto.item_name == "Polo"
        assert dto.quantity_delivered == 3
        assert dto.delivered_by == "sam"
        assert inv.get_by_id(item.id).quantity == 7

    def test_record_insufficient(self):
        inv, deliveries, item = _setup(quantity=2)
        with pytest.raises(InsufficientStockError):
            RecordDeliveryHandler(inv, deliveries).handle(item.id, "Alice", 3, "sam")

    def test_update_then_delete_round_trip(self):
        inv, deliveries, item = _setup()
        dto = RecordDeliveryHandler(inv, deliveries).handle(item.id, "Alice", 3, "sam")

        updated = UpdateDeliveryHandler(inv, deliveries).handle(dto.id, "Alice B", "5", "fixed")
        assert updated.customer_name == "Alice B"
        assert inv.get_by_id(item.id).quantity == 5

        DeleteDeliveryHandler(inv, deliveries).handle(dto.id)
        assert inv.get_by_id(item.id).quantity == 10
        assert deliveries.list_all() == []


class TestHistory:

    def _history(self):
        inv, deliveries, item = _setup()
        deliveries.add(_dated(item, "Acme Corp", datetime(2024, 3, 1, 9, tzinfo=timezone.utc)))
        deliveries.add(_dated(item, "Globex", datetime(2024, 3, 15, 23, 59, tzinfo=timezone.utc)))
        deliveries.add(_dated(item, "acme retail", datetime(2024, 4, 2, tzinfo=timezone.utc)))
        return DeliveryHistoryHandler(deliveries, inv), inv, item

    def test_newest_first(self):
        handler, _, _ = self._history()
        names = [d.customer_name for d in handler.handle().items]
        assert names == ["acme retail", "Globex", "Acme Corp"]

    def test_customer_filter_is_case_insensitive(self):
        handler, _, _ = self._history()
        page = handler.handle(customer_name="ACME")
        assert page.total == 2

    def test_end_date_covers_whole_day(self):
        handler, _, _ = self._history()
        page = handler.handle(start_date=date(2024, 3, 15), end_date=date(2024, 3, 15))
        assert [d.customer_name for d in page.items] == ["Globex"]

    def test_reversed_range_rejected(self):
        with pytest.raises(ValidationError):
            build_query(start_date=date(2024, 5, 1), end_date=date(2024, 4, 1))

    def test_deleted_item_shown_as_placeholder(self):
        handler, inv, item = self._history()
        inv.delete(item.id)
        assert handler.handle().items[0].item_name == DELETED_ITEM


class TestShowDelivery:

    def test_show(self):
        inv, deliveries, item = _setup()
        record = make_delivery(item, quantity=2, customer="Initech")
        deliveries.add(record)
        dto = ShowDeliveryHandler(deliveries, inv).handle(record.id)
        assert dto.customer_name == "Initech"
        assert dto.barcode == item.barcode

    def test_show_missing(self):
        inv, deliveries, _ = _setup()
        with pytest.raises(EntityNotFoundError, match="Delivery not found"):
            ShowDeliveryHandler(deliveries, inv).handle("nope")
