"""CLI commands for the database schema."""

from __future__ import annotations

import click

from laundry.infrastructure.bootstrap import engine
from laundry.infrastructure.persistence.engine import create_tables, drop_tables


@click.command("init")
@click.option("--reset", is_flag=True, default=False, help="Drop every table first.")
def db_init(reset: bool) -> None:
    """Create the database tables."""
    if reset:
        click.confirm("This deletes all data. Continue?", abort=True)
        drop_tables(engine())
    create_tables(engine())
    click.echo(f"Database ready at {engine().url.render_as_string(hide_password=True)}")
