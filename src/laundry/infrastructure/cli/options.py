"""Option helpers shared by the command modules."""

from __future__ import annotations

from enum import Enum

import click

actor_option = click.option(
    "--actor", type=int, default=None, envvar="LAUNDRY_ACTOR_ID",
    help="Acting user ID, recorded in history and stock movements.",
)


def choice_of(enum_cls: type[Enum]) -> click.Choice:
    """Case-insensitive choice over an enum's values."""
    return click.Choice([m.value for m in enum_cls], case_sensitive=False)
