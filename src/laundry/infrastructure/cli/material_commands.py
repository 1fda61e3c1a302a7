"""CLI commands for materials and their stock."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

import click

from laundry.application.add_material import AddMaterialHandler
from laundry.application.add_stock import AddStockHandler
from laundry.application.adjust_stock import AdjustStockHandler
from laundry.application.dto import MaterialStockDTO, StockMovementDTO
from laundry.application.show_inventory import MaterialHistoryHandler, ShowInventoryHandler
from laundry.domain.exceptions import DomainException
from laundry.infrastructure.bootstrap import unit_of_work
from laundry.infrastructure.cli.options import actor_option


def _quantity(raw: str) -> Decimal:
    try:
        return Decimal(raw)
    except InvalidOperation:
        raise click.BadParameter(f"Invalid quantity '{raw}'.")


def _display_stock(lines: list[MaterialStockDTO]) -> None:
    click.echo(f"{'ID':<6} {'SKU':<12} {'Material':<24} {'Stock':>12} {'Alert':>10} {'':<4}")
    click.echo("-" * 72)
    for m in lines:
        click.echo(
            f"{m.id:<6} {m.sku:<12} {m.name:<24} {m.stock_qty:>9} {m.unit:<2} "
            f"{m.min_stock_alert:>10} {m.status:<4}"
        )


def _display_movement(m: StockMovementDTO) -> None:
    order = f" order #{m.order_id}" if m.order_id else ""
    click.echo(
        f"{m.created_at:%Y-%m-%d %H:%M}  {m.type:<10} {m.quantity:>10}  "
        f"{m.stock_before} -> {m.stock_after}{order}  {m.notes or ''}"
    )


@click.command("add")
@click.option("--name", required=True, help="Material name.")
@click.option("--sku", required=True, help="Unique SKU.")
@click.option("--unit", required=True, help="Unit of measure (ml, gr, pcs).")
@click.option("--stock", default="0", show_default=True, help="Opening stock.")
@click.option("--alert", default="100", show_default=True, help="Low-stock threshold.")
@actor_option
def material_add(name: str, sku: str, unit: str, stock: str, alert: str,
                 actor: int | None) -> None:
    """Register a consumable material."""
    handler = AddMaterialHandler(unit_of_work())

    try:
        dto = handler.handle(name, sku, unit, _quantity(stock), _quantity(alert), actor)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Material #{dto.id} '{dto.sku}' added with {dto.stock_qty} {dto.unit}")


@click.command("list")
def material_list() -> None:
    """Show current stock levels."""
    lines = ShowInventoryHandler(unit_of_work()).handle()

    if not lines:
        click.echo("No materials found.")
        return

    _display_stock(lines)


@click.command("low")
def material_low() -> None:
    """Show materials at or below their alert level."""
    lines = ShowInventoryHandler(unit_of_work()).handle(low_only=True)

    if not lines:
        click.echo("All materials are above their alert level.")
        return

    _display_stock(lines)


@click.command("restock")
@click.option("--id", "material_id", required=True, type=int, help="Material ID.")
@click.option("--qty", required=True, help="Quantity received.")
@click.option("--notes", default="", help="Movement note.")
@actor_option
def material_restock(material_id: int, qty: str, notes: str, actor: int | None) -> None:
    """Record a delivery of new stock."""
    handler = AddStockHandler(unit_of_work())

    try:
        movement = handler.handle(material_id, _quantity(qty), notes, actor)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Material #{material_id} stock is now {movement.stock_after}")


@click.command("adjust")
@click.option("--id", "material_id", required=True, type=int, help="Material ID.")
@click.option("--qty", required=True, help="Counted stock quantity.")
@click.option("--notes", default="", help="Movement note.")
@actor_option
def material_adjust(material_id: int, qty: str, notes: str, actor: int | None) -> None:
    """Set stock to a physically counted value."""
    handler = AdjustStockHandler(unit_of_work())

    try:
        movement = handler.handle(material_id, _quantity(qty), notes, actor)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Material #{material_id} adjusted {movement.stock_before} -> {movement.stock_after}"
    )


@click.command("history")
@click.option("--id", "material_id", required=True, type=int, help="Material ID.")
@click.option("--limit", default=50, show_default=True)
def material_history(material_id: int, limit: int) -> None:
    """Show a material's stock movements, newest first."""
    try:
        movements = MaterialHistoryHandler(unit_of_work()).handle(material_id, limit)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not movements:
        click.echo("No stock movements recorded.")
        return

    for m in movements:
        _display_movement(m)
