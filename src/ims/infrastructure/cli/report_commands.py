"""CLI commands for reports and the dashboard."""

from __future__ import annotations

from datetime import datetime

import click

from ims.application.dashboard import DashboardHandler
from ims.application.export_report import ExportReportHandler
from ims.domain.exceptions import DomainException
from ims.infrastructure.bootstrap import (
    barcode_renderer,
    delivery_repository,
    inventory_repository,
)
from ims.infrastructure.config import get_settings
from ims.infrastructure.export.docx_barcode_list_writer import DocxBarcodeListWriter
from ims.infrastructure.export.xlsx_report_writer import XlsxReportWriter


def _export_handler() -> ExportReportHandler:
    renderer = barcode_renderer()
    return ExportReportHandler(
        inventory_repo=inventory_repository(),
        delivery_repo=delivery_repository(),
        writer=XlsxReportWriter(renderer),
        list_writer=DocxBarcodeListWriter(renderer),
        low_stock_threshold=get_settings().LOW_STOCK_THRESHOLD,
    )


@click.command("inventory")
@click.option("--category", default=None, help="Only this category.")
@click.option("--search", default=None, help="Match item name or barcode.")
@click.option("--low-stock", is_flag=True, help="Only low or out-of-stock items.")
def report_inventory(category: str | None, search: str | None, low_stock: bool) -> None:
    """Export the inventory list to an Excel file."""
    try:
        path = _export_handler().export_inventory(
            get_settings().EXPORT_DIR,
            category=category,
            search=search,
            low_stock_only=low_stock,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc)) from exc

    click.echo(f"Inventory report written to {path}")


@click.command("deliveries")
@click.option("--customer", default=None, help="Customer name contains.")
@click.option("--from", "start", type=click.DateTime(formats=["%Y-%m-%d"]), default=None)
@click.option("--to", "end", type=click.DateTime(formats=["%Y-%m-%d"]), default=None)
def report_deliveries(customer: str | None, start: datetime | None, end: datetime | None) -> None:
    """Export delivery history to an Excel file."""
    try:
        path = _export_handler().export_deliveries(
            get_settings().EXPORT_DIR,
            customer_name=customer,
            start_date=start.date() if start else None,
            end_date=end.date() if end else None,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc)) from exc

    click.echo(f"Delivery report written to {path}")


@click.command("barcodes")
@click.option("--category", default=None, help="Only this category.")
def report_barcodes(category: str | None) -> None:
    """Export a Word document of printable barcode labels."""
    try:
        path = _export_handler().export_barcode_list(get_settings().EXPORT_DIR, category=category)
    except DomainException as exc:
        raise click.ClickException(str(exc)) from exc

    click.echo(f"Barcode list written to {path}")


@click.command("dashboard")
def report_dashboard() -> None:
    """Show stock and delivery statistics."""
    handler = DashboardHandler(
        inventory_repo=inventory_repository(),
        delivery_repo=delivery_repository(),
        low_stock_threshold=get_settings().LOW_STOCK_THRESHOLD,
    )
    dto = handler.handle()

    click.echo(f"Items:              {dto.total_items}")
    click.echo(f"Units in stock:     {dto.total_stock}")
    click.echo(f"Low stock:          {dto.low_stock_items}")
    click.echo(f"Out of stock:       {dto.out_of_stock_items}")
    click.echo(f"Deliveries today:   {dto.today_deliveries}")
    click.echo(f"Deliveries (month): {dto.this_month_deliveries}")
    click.echo(f"Deliveries (all):   {dto.total_deliveries}  ({dto.total_units_delivered} units)")

    if dto.category_stock:
        click.echo()
        click.echo(f"  {'Category':<12} {'Units':>8} {'Items':>6}")
        click.echo(f"  {'-'*28}")
        for row in dto.category_stock:
            click.echo(f"  {row.category:<12} {row.total_quantity:>8} {row.item_count:>6}")

    if dto.low_stock_list:
        click.echo()
        click.echo("Low stock:")
        for item in dto.low_stock_list:
            click.echo(f"  {item.item_name} ({item.size}, {item.color}): {item.quantity}")

    if dto.recent_deliveries:
        click.echo()
        click.echo("Recent deliveries:")
        for d in dto.recent_deliveries:
            click.echo(
                f"  {d.delivery_date}  {d.customer_name}  {d.quantity_delivered} x {d.item_name}"
            )
