import click

from laundry.infrastructure.cli.customer_commands import customer_reconcile, customer_show
from laundry.infrastructure.cli.db_commands import db_init
from laundry.infrastructure.cli.material_commands import (
    material_add,
    material_adjust,
    material_history,
    material_list,
    material_low,
    material_restock,
)
from laundry.infrastructure.cli.order_commands import (
    order_book,
    order_confirm,
    order_delete,
    order_list,
    order_note,
    order_notified,
    order_pay,
    order_show,
    order_status,
    order_track,
    order_walk_in,
)
from laundry.infrastructure.cli.service_commands import (
    service_add,
    service_list,
    service_recipe,
    service_update_price,
)


@click.group()
def cli() -> None:
    """Laundry shop: orders, materials and loyalty."""


@cli.group()
def db() -> None:
    """Manage the database."""


@cli.group()
def service() -> None:
    """Manage the service catalog."""


@cli.group()
def material() -> None:
    """Manage materials and stock."""


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def customer() -> None:
    """Inspect customers."""


# Register subcommands
db.add_command(db_init)
service.add_command(service_add)
service.add_command(service_list)
service.add_command(service_recipe)
service.add_command(service_update_price)
material.add_command(material_add)
material.add_command(material_adjust)
material.add_command(material_history)
material.add_command(material_list)
material.add_command(material_low)
material.add_command(material_restock)
order.add_command(order_book)
order.add_command(order_confirm)
order.add_command(order_delete)
order.add_command(order_list)
order.add_command(order_note)
order.add_command(order_notified)
order.add_command(order_pay)
order.add_command(order_show)
order.add_command(order_status)
order.add_command(order_track)
order.add_command(order_walk_in)
customer.add_command(customer_reconcile)
customer.add_command(customer_show)
