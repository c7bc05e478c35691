"""CLI commands for delivery time slots."""

from __future__ import annotations

from datetime import date

import click

from palette_oms.application.generate_slots import GenerateSlotsHandler
from palette_oms.application.show_agenda import ShowAgendaHandler
from palette_oms.domain.exceptions import DomainException
from palette_oms.infrastructure.bootstrap import unit_of_work
from palette_oms.infrastructure.config import get_settings


@click.command("generate")
@click.option("--start", "start_date", type=click.DateTime(["%Y-%m-%d"]), default=None, help="First day (default: today).")
@click.option("--days", "days_ahead", type=int, default=None, help="Number of days (default from settings).")
def slots_generate(start_date, days_ahead: int | None) -> None:
    """Generate hourly delivery slots (08:00-18:00) for a window of days."""
    settings = get_settings()
    first_day = start_date.date() if start_date else date.today()
    days = days_ahead if days_ahead is not None else settings.DEFAULT_DAYS_AHEAD

    handler = GenerateSlotsHandler(unit_of_work(), settings.SLOT_CAPACITY)
    try:
        created = handler.handle(first_day, days)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{created} slot(s) created from {first_day} over {days} day(s).")


@click.command("agenda")
def slots_agenda() -> None:
    """Show slots still open for booking, from today on."""
    try:
        slots = ShowAgendaHandler(unit_of_work()).handle(date.today())
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not slots:
        click.echo("No available slots.")
        return

    click.echo(f"{'ID':<6} {'Date':<12} {'Time':<12} {'Used':>8}")
    click.echo("-" * 40)
    for slot in slots:
        click.echo(
            f"{slot.id:<6} {slot.date:<12} {slot.start_time + '-' + slot.end_time:<12} "
            f"{str(slot.used_capacity) + '/' + str(slot.capacity):>8}"
        )
