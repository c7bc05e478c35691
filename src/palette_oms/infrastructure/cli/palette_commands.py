"""CLI commands for the palette type catalog."""

from __future__ import annotations

import click

from palette_oms.application.add_palette_type import AddPaletteTypeHandler
from palette_oms.application.show_palette_types import ShowPaletteTypesHandler
from palette_oms.domain.exceptions import DomainException
from palette_oms.infrastructure.bootstrap import unit_of_work


@click.command("add")
@click.option("--name", required=True, help="Palette type name.")
@click.option("--description", default=None, help="Description.")
@click.option("--price", default=None, help="Price (e.g. 12.50).")
def palette_add(name: str, description: str | None, price: str | None) -> None:
    """Add a new palette type to the catalog."""
    handler = AddPaletteTypeHandler(unit_of_work())

    try:
        dto = handler.handle(name=name, description=description, price=price)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Palette type #{dto.id} '{dto.name}' added")


@click.command("list")
def palette_list() -> None:
    """List all palette types in the catalog."""
    try:
        palette_types = ShowPaletteTypesHandler(unit_of_work()).handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not palette_types:
        click.echo("No palette types found.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'Price':>10}")
    click.echo("-" * 38)
    for p in palette_types:
        click.echo(f"{p.id:<6} {p.name:<20} {p.price or '-':>10}")
