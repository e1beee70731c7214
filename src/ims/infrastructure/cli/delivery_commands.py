"""CLI commands for delivery records."""

from __future__ import annotations

from datetime import datetime

import click

from ims.application.delete_delivery import DeleteDeliveryHandler
from ims.application.delivery_history import DeliveryHistoryHandler, ShowDeliveryHandler
from ims.application.dto import DeliveryDTO
from ims.application.record_delivery import RecordDeliveryHandler
from ims.application.scan_item import ScanBarcodeHandler
from ims.application.update_delivery import UpdateDeliveryHandler
from ims.domain.exceptions import DomainException
from ims.infrastructure.bootstrap import delivery_repository, inventory_repository
from ims.infrastructure.config import get_settings


def _display_delivery(dto: DeliveryDTO) -> None:
    click.echo(f"Delivery {dto.id}")
    click.echo(f"Date:      {dto.delivery_date}")
    click.echo(f"Customer:  {dto.customer_name}")
    click.echo(f"Item:      {dto.item_name}  ({dto.barcode})")
    click.echo(f"Quantity:  {dto.quantity_delivered}")
    click.echo(f"By:        {dto.delivered_by}")
    if dto.notes:
        click.echo(f"Notes:     {dto.notes}")


@click.command("record")
@click.option("--barcode", default=None, help="Scanned barcode of the item.")
@click.option("--item-id", default=None, help="Item ID (instead of --barcode).")
@click.option("--customer", required=True, help="Customer name.")
@click.option("--quantity", required=True, help="Quantity delivered.")
@click.option("--notes", default="", help="Free-text notes.")
@click.option("--staff", default=None, help="Staff member making the delivery.")
def delivery_record(
    barcode: str | None,
    item_id: str | None,
    customer: str,
    quantity: str,
    notes: str,
    staff: str | None,
) -> None:
    """Record a delivery and take the quantity out of stock."""
    if bool(barcode) == bool(item_id):
        raise click.UsageError("Give exactly one of --barcode or --item-id.")

    settings = get_settings()
    inventory_repo = inventory_repository()

    try:
        if barcode:
            item_id = ScanBarcodeHandler(inventory_repo).handle(barcode, for_delivery=True).id
        dto = RecordDeliveryHandler(inventory_repo, delivery_repository()).handle(
            inventory_id=item_id,
            customer_name=customer,
            quantity=quantity,
            delivered_by=staff or settings.DEFAULT_STAFF,
            notes=notes,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc)) from exc

    click.echo(
        f"Delivery recorded: {dto.quantity_delivered} x {dto.item_name} to {dto.customer_name}"
    )
    click.echo(f"ID: {dto.id}")


@click.command("update")
@click.option("--id", "delivery_id", required=True, help="Delivery ID.")
@click.option("--customer", required=True, help="Customer name.")
@click.option("--quantity", required=True, help="Corrected quantity delivered.")
@click.option("--notes", default="", help="Free-text notes.")
def delivery_update(delivery_id: str, customer: str, quantity: str, notes: str) -> None:
    """Correct a delivery; stock moves by the change in quantity."""
    handler = UpdateDeliveryHandler(inventory_repository(), delivery_repository())

    try:
        dto = handler.handle(
            delivery_id=delivery_id,
            customer_name=customer,
            quantity=quantity,
            notes=notes,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc)) from exc

    click.echo(f"Delivery {dto.id} updated.")


@click.command("delete")
@click.option("--id", "delivery_id", required=True, help="Delivery ID.")
@click.confirmation_option(prompt="Delete this delivery and return its stock?")
def delivery_delete(delivery_id: str) -> None:
    """Delete a delivery and return its quantity to stock."""
    handler = DeleteDeliveryHandler(inventory_repository(), delivery_repository())

    try:
        handler.handle(delivery_id)
    except DomainException as exc:
        raise click.ClickException(str(exc)) from exc

    click.echo("Delivery deleted.")


@click.command("history")
@click.option("--customer", default=None, help="Customer name contains.")
@click.option("--from", "start", type=click.DateTime(formats=["%Y-%m-%d"]), default=None)
@click.option("--to", "end", type=click.DateTime(formats=["%Y-%m-%d"]), default=None)
@click.option("--page", default=1, type=int, show_default=True, help="Page number.")
def delivery_history(
    customer: str | None,
    start: datetime | None,
    end: datetime | None,
    page: int,
) -> None:
    """List deliveries, newest first."""
    handler = DeliveryHistoryHandler(
        delivery_repo=delivery_repository(),
        inventory_repo=inventory_repository(),
        per_page=get_settings().PAGE_SIZE,
    )

    try:
        result = handler.handle(
            customer_name=customer,
            start_date=start.date() if start else None,
            end_date=end.date() if end else None,
            page=page,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc)) from exc

    if not result.items:
        click.echo("No deliveries found.")
        return

    click.echo(f"{'Date':<20} {'Customer':<20} {'Item':<22} {'Qty':>5}  {'By':<12} ID")
    click.echo("-" * 110)
    for dto in result.items:
        click.echo(
            f"{dto.delivery_date:<20} {dto.customer_name:<20} {dto.item_name:<22} "
            f"{dto.quantity_delivered:>5}  {dto.delivered_by:<12} {dto.id}"
        )
    click.echo(f"Page {result.page} of {result.total_pages}  ({result.total} deliveries)")


@click.command("show")
@click.option("--id", "delivery_id", required=True, help="Delivery ID.")
def delivery_show(delivery_id: str) -> None:
    """Show one delivery."""
    handler = ShowDeliveryHandler(delivery_repository(), inventory_repository())

    try:
        dto = handler.handle(delivery_id)
    except DomainException as exc:
        raise click.ClickException(str(exc)) from exc

    _display_delivery(dto)
