"""CLI commands for inventory items."""

from __future__ import annotations

from pathlib import Path

import click

from ims.application.add_items import AddItemsHandler
from ims.application.barcode_image import BarcodeImageHandler
from ims.application.delete_item import DeleteItemHandler
from ims.application.dto import ItemDTO, SizeSpec
from ims.application.edit_item import EditItemHandler
from ims.application.scan_item import ScanBarcodeHandler
from ims.application.set_stock import SetStockHandler
from ims.application.show_inventory import ShowInventoryHandler
from ims.domain.exceptions import DomainException
from ims.domain.model.value_objects import normalize_barcode
from ims.infrastructure.bootstrap import barcode_renderer, inventory_repository
from ims.infrastructure.config import get_settings


def _parse_sizes(raw: tuple[str, ...]) -> list[SizeSpec]:
    """Parse ('S:10', 'M:5') into SizeSpec list."""
    specs: list[SizeSpec] = []
    for pair in raw:
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid size format '{pair}'. Expected 'Size:Quantity'."
            )
        size, qty = pair.rsplit(":", 1)
        specs.append(SizeSpec(size=size.strip(), quantity=qty.strip()))
    return specs


def _display_item(dto: ItemDTO) -> None:
    click.echo(f"{dto.item_name}  ({dto.category}, {dto.size}, {dto.color})")
    click.echo(f"ID:       {dto.id}")
    click.echo(f"Barcode:  {dto.barcode}")
    click.echo(f"Stock:    {dto.quantity}  [{dto.status}]")
    click.echo(f"Price:    {dto.price}")
    if dto.description:
        click.echo(f"Notes:    {dto.description}")


@click.command("add")
@click.option("--name", "item_name", required=True, help="Item name.")
@click.option("--category", required=True, help="T-Shirt, Jacket, Cap, Trousers or Uniform.")
@click.option("--color", default="", help="Color.")
@click.option("--price", required=True, help="Unit price.")
@click.option("--description", default="", help="Free-text description.")
@click.option("--size", "sizes", multiple=True, required=True, help="Size as 'Size:Qty'; repeatable.")
def inventory_add(
    item_name: str,
    category: str,
    color: str,
    price: str,
    description: str,
    sizes: tuple[str, ...],
) -> None:
    """Add an item in one or more sizes (tops up sizes that already exist)."""
    specs = _parse_sizes(sizes)
    handler = AddItemsHandler(inventory_repo=inventory_repository())

    try:
        result = handler.handle(
            item_name=item_name,
            category=category,
            color=color,
            price=price,
            description=description,
            sizes=specs,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc)) from exc

    click.echo(result.summary)


@click.command("list")
@click.option("--category", default=None, help="Only this category.")
@click.option("--search", default=None, help="Match item name or barcode.")
@click.option("--page", default=1, type=int, show_default=True, help="Page number.")
def inventory_list(category: str | None, search: str | None, page: int) -> None:
    """List inventory items, newest first."""
    settings = get_settings()
    handler = ShowInventoryHandler(
        inventory_repo=inventory_repository(),
        low_stock_threshold=settings.LOW_STOCK_THRESHOLD,
        per_page=settings.PAGE_SIZE,
    )

    try:
        result = handler.handle(category=category, search=search, page=page)
    except DomainException as exc:
        raise click.ClickException(str(exc)) from exc

    if not result.items:
        click.echo("No inventory items found.")
        return

    click.echo(
        f"{'Barcode':<14} {'Item':<22} {'Category':<10} {'Size':<6} "
        f"{'Color':<10} {'Stock':>6} {'Price':>14}  Status"
    )
    click.echo("-" * 100)
    for dto in result.items:
        click.echo(
            f"{dto.barcode:<14} {dto.item_name:<22} {dto.category:<10} {dto.size:<6} "
            f"{dto.color:<10} {dto.quantity:>6} {dto.price:>14}  {dto.status}"
        )
    click.echo(f"Page {result.page} of {result.total_pages}  ({result.total} items)")


@click.command("scan")
@click.argument("barcode")
@click.option("--for-delivery", is_flag=True, help="Also require stock on hand.")
def inventory_scan(barcode: str, for_delivery: bool) -> None:
    """Look an item up by its barcode."""
    handler = ScanBarcodeHandler(
        inventory_repo=inventory_repository(),
        low_stock_threshold=get_settings().LOW_STOCK_THRESHOLD,
    )

    try:
        dto = handler.handle(barcode, for_delivery=for_delivery)
    except DomainException as exc:
        raise click.ClickException(str(exc)) from exc

    _display_item(dto)


@click.command("edit")
@click.option("--id", "item_id", required=True, help="Item ID.")
@click.option("--name", "item_name", required=True, help="Item name.")
@click.option("--category", required=True, help="Category.")
@click.option("--size", required=True, help="Size.")
@click.option("--color", default="", help="Color.")
@click.option("--quantity", required=True, help="Stock on hand.")
@click.option("--price", required=True, help="Unit price.")
@click.option("--description", default="", help="Free-text description.")
def inventory_edit(
    item_id: str,
    item_name: str,
    category: str,
    size: str,
    color: str,
    quantity: str,
    price: str,
    description: str,
) -> None:
    """Overwrite an item's details (the barcode does not change)."""
    handler = EditItemHandler(inventory_repo=inventory_repository())

    try:
        item = handler.handle(
            item_id=item_id,
            item_name=item_name,
            category=category,
            size=size,
            color=color,
            quantity=quantity,
            price=price,
            description=description,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc)) from exc

    click.echo(f"Item '{item.item_name}' updated.")


@click.command("set-stock")
@click.option("--id", "item_id", required=True, help="Item ID.")
@click.option("--quantity", required=True, help="Counted quantity on hand.")
def inventory_set_stock(item_id: str, quantity: str) -> None:
    """Set an item's stock level after a physical count."""
    handler = SetStockHandler(inventory_repo=inventory_repository())

    try:
        item = handler.handle(item_id=item_id, quantity=quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc)) from exc

    click.echo(f"Stock for '{item.item_name}' set to {item.quantity}")


@click.command("delete")
@click.option("--id", "item_id", required=True, help="Item ID.")
@click.confirmation_option(prompt="Delete this item? Its deliveries stay in the history.")
def inventory_delete(item_id: str) -> None:
    """Delete an inventory item."""
    handler = DeleteItemHandler(inventory_repo=inventory_repository())

    try:
        handler.handle(item_id)
    except DomainException as exc:
        raise click.ClickException(str(exc)) from exc

    click.echo("Item deleted.")


@click.command("barcode")
@click.argument("barcode")
@click.option(
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="PNG file to write. Defaults to <export dir>/<barcode>.png.",
)
def inventory_barcode(barcode: str, output: Path | None) -> None:
    """Render a barcode as a Code 128 PNG image."""
    handler = BarcodeImageHandler(barcode_renderer())

    try:
        png = handler.handle(barcode)
    except DomainException as exc:
        raise click.ClickException(str(exc)) from exc

    path = output or get_settings().EXPORT_DIR / f"{normalize_barcode(barcode)}.png"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(png)
    click.echo(f"Barcode image written to {path}")
