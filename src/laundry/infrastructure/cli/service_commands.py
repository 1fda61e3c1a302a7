"""CLI commands for the Service catalog."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

import click

from laundry.application.add_service import AddServiceHandler, SetServiceRecipeHandler
from laundry.application.update_service_price import UpdateServicePriceHandler
from laundry.domain.exceptions import DomainException
from laundry.domain.model.service import DEFAULT_EXPRESS_MULTIPLIER, UnitType
from laundry.infrastructure.bootstrap import unit_of_work
from laundry.infrastructure.cli.options import choice_of


@click.command("add")
@click.option("--code", required=True, help="Unique service code.")
@click.option("--name", required=True, help="Service name.")
@click.option("--price", required=True, help="Price per unit (e.g. 7000).")
@click.option("--unit", type=choice_of(UnitType), default=UnitType.KG.value, show_default=True)
@click.option("--express/--no-express", default=False, help="Offer express service.")
@click.option("--multiplier", default=str(DEFAULT_EXPRESS_MULTIPLIER), show_default=True,
              help="Express price multiplier.")
def service_add(code: str, name: str, price: str, unit: str,
                express: bool, multiplier: str) -> None:
    """Add a new service to the catalog."""
    try:
        express_multiplier = Decimal(multiplier)
    except InvalidOperation:
        raise click.BadParameter(f"Invalid multiplier '{multiplier}'.")

    handler = AddServiceHandler(unit_of_work())

    try:
        service = handler.handle(
            code=code,
            name=name,
            price=price,
            unit_type=UnitType(unit.upper()),
            is_express_available=express,
            express_multiplier=express_multiplier,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Service #{service.id} '{service.code}' added at {service.price}")


@click.command("list")
def service_list() -> None:
    """List all services in the catalog."""
    with unit_of_work() as uow:
        services = uow.services.list_all()

    if not services:
        click.echo("No services found.")
        return

    click.echo(f"{'ID':<6} {'Code':<10} {'Name':<24} {'Unit':<5} {'Price':>16} {'Express':>8}")
    click.echo("-" * 74)
    for s in services:
        express = f"x{s.express_multiplier}" if s.is_express_available else "-"
        click.echo(
            f"{s.id:<6} {s.code:<10} {s.name:<24} {s.unit_type.value:<5} "
            f"{str(s.price):>16} {express:>8}"
        )


@click.command("recipe")
@click.option("--service", "service_code", required=True, help="Service code.")
@click.option("--material", "material_sku", required=True, help="Material SKU.")
@click.option("--qty", required=True, help="Quantity per service unit; 0 removes the line.")
def service_recipe(service_code: str, material_sku: str, qty: str) -> None:
    """Set how much of a material one unit of a service consumes."""
    handler = SetServiceRecipeHandler(unit_of_work())

    try:
        service = handler.handle(service_code, material_sku, qty)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Recipe for '{service.code}':")
    for line in service.recipe:
        click.echo(f"  material #{line.material_id}: {line.quantity_needed}")


@click.command("update-price")
@click.option("--id", "service_id", required=True, type=int, help="Service ID.")
@click.option("--price", required=True, help="New price (e.g. 8000).")
def service_update_price(service_id: int, price: str) -> None:
    """Update a service's price. Existing orders keep their price."""
    handler = UpdateServicePriceHandler(unit_of_work())

    try:
        handler.handle(service_id=service_id, new_price=price)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Service #{service_id} price updated to {price}")
