"""CLI commands for customers and their loyalty counters."""

from __future__ import annotations

import click

from laundry.application.reconcile_customers import ReconcileCustomersHandler
from laundry.application.show_customer import ShowCustomerHandler
from laundry.domain.exceptions import DomainException
from laundry.infrastructure.bootstrap import unit_of_work


@click.command("show")
@click.option("--phone", required=True, help="Customer phone.")
def customer_show(phone: str) -> None:
    """Show a customer's loyalty counters."""
    try:
        c = ShowCustomerHandler(unit_of_work()).handle(phone)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Customer #{c.id}  {c.name}  ({c.phone})")
    click.echo(f"Points:      {c.total_points}")
    click.echo(f"Orders:      {c.total_orders}")
    click.echo(f"Total spent: {c.total_spent}")
    if c.last_order_date:
        click.echo(f"Last order:  {c.last_order_date:%Y-%m-%d}")


@click.command("reconcile")
@click.option("--fix", is_flag=True, default=False, help="Rewrite drifted counters.")
def customer_reconcile(fix: bool) -> None:
    """Compare customer counters with their orders."""
    drifts = ReconcileCustomersHandler(unit_of_work()).handle(fix=fix)

    if not drifts:
        click.echo("All customer counters match their orders.")
        return

    click.echo(f"{'ID':<6} {'Phone':<16} {'Orders':>13} {'Spent':>27} {'Points':>13}")
    click.echo("-" * 79)
    for d in drifts:
        click.echo(
            f"{d.customer_id:<6} {d.phone:<16} "
            f"{f'{d.recorded_orders}->{d.expected_orders}':>13} "
            f"{f'{d.recorded_spent}->{d.expected_spent}':>27} "
            f"{f'{d.recorded_points}->{d.expected_points}':>13}"
        )
    click.echo()
    click.echo(f"{len(drifts)} customer(s) {'fixed' if fix else 'drifted'}.")
