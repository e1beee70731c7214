import click

from ims.infrastructure.cli.delivery_commands import (
    delivery_delete,
    delivery_history,
    delivery_record,
    delivery_show,
    delivery_update,
)
from ims.infrastructure.cli.inventory_commands import (
    inventory_add,
    inventory_barcode,
    inventory_delete,
    inventory_edit,
    inventory_list,
    inventory_scan,
    inventory_set_stock,
)
from ims.infrastructure.cli.report_commands import (
    report_barcodes,
    report_dashboard,
    report_deliveries,
    report_inventory,
)
from ims.infrastructure.config import get_settings
from ims.logging_config import configure_logging


@click.group()
def cli() -> None:
    """IMS - Inventory and Delivery Management"""
    configure_logging(get_settings().LOG_LEVEL)


@cli.group()
def inventory() -> None:
    """Manage inventory items."""


@cli.group()
def delivery() -> None:
    """Record and correct deliveries."""


@cli.group()
def report() -> None:
    """Reports and statistics."""


# Register subcommands
inventory.add_command(inventory_add)
inventory.add_command(inventory_barcode)
inventory.add_command(inventory_delete)
inventory.add_command(inventory_edit)
inventory.add_command(inventory_list)
inventory.add_command(inventory_scan)
inventory.add_command(inventory_set_stock)
delivery.add_command(delivery_delete)
delivery.add_command(delivery_history)
delivery.add_command(delivery_record)
delivery.add_command(delivery_show)
delivery.add_command(delivery_update)
report.add_command(report_barcodes)
report.add_command(report_dashboard)
report.add_command(report_deliveries)
report.add_command(report_inventory)
