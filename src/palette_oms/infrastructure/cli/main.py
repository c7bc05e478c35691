from __future__ import annotations

import logging

import click

from palette_oms.infrastructure.bootstrap import engine
from palette_oms.infrastructure.cli.order_commands import (
    order_cancel,
    order_confirm,
    order_create,
    order_delete,
    order_deliver,
    order_list,
    order_show,
)
from palette_oms.infrastructure.cli.palette_commands import palette_add, palette_list
from palette_oms.infrastructure.cli.slot_commands import slots_agenda, slots_generate
from palette_oms.infrastructure.config import get_settings
from palette_oms.infrastructure.logging_config import configure_logging
from palette_oms.infrastructure.persistence.database import init_db


@click.group()
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log at INFO level.")
def cli(verbose: bool) -> None:
    """Palette OMS: palette delivery order management"""
    configure_logging("INFO" if verbose else "WARNING")


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def palette() -> None:
    """Manage the palette type catalog."""


@cli.group()
def slots() -> None:
    """Manage delivery time slots."""


@cli.group()
def db() -> None:
    """Manage the database."""


@db.command("init")
def db_init() -> None:
    """Create the database tables."""
    init_db(engine())
    click.echo("Database initialised.")


@cli.command("serve")
@click.option("--host", default=None, help="Bind address (default from settings).")
@click.option("--port", type=int, default=None, help="Port (default from settings).")
def serve(host: str | None, port: int | None) -> None:
    """Run the HTTP API."""
    import uvicorn

    settings = get_settings()
    logging.getLogger(__name__).info("Starting API server")
    uvicorn.run(
        "palette_oms.infrastructure.api.app:create_app_from_env",
        factory=True,
        host=host or settings.API_HOST,
        port=port or settings.API_PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


# Register subcommands
order.add_command(order_cancel)
order.add_command(order_confirm)
order.add_command(order_create)
order.add_command(order_delete)
order.add_command(order_deliver)
order.add_command(order_list)
order.add_command(order_show)
palette.add_command(palette_add)
palette.add_command(palette_list)
slots.add_command(slots_agenda)
slots.add_command(slots_generate)
