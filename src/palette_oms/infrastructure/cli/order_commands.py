"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from palette_oms.application.cancel_order import CancelOrderHandler
from palette_oms.application.confirm_order import ConfirmOrderHandler
from palette_oms.application.delete_order import DeleteOrderHandler
from palette_oms.application.deliver_order import DeliverOrderHandler
from palette_oms.application.dto import OrderDTO, OrderItemSpec, OrderRequest
from palette_oms.application.list_orders import ListOrdersHandler
from palette_oms.application.show_order import ShowOrderHandler
from palette_oms.application.submit_order import SubmitOrderHandler
from palette_oms.domain.exceptions import DomainException
from palette_oms.domain.model.order import OrderStatus
from palette_oms.infrastructure.bootstrap import slot_failure_policy, unit_of_work


def _parse_item(raw: str) -> OrderItemSpec:
    """Parse '3:2' (palette type ID : quantity) into an OrderItemSpec."""
    if ":" not in raw:
        raise click.BadParameter(
            f"Invalid item format '{raw}'. Expected 'PaletteTypeId:Quantity'."
        )
    type_str, qty_str = raw.rsplit(":", 1)
    try:
        return OrderItemSpec(palette_type_id=int(type_str), quantity=int(qty_str))
    except ValueError:
        raise click.BadParameter(f"Invalid item '{raw}': both parts must be integers.")


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id}  (status={dto.status})")
    if dto.customer is not None:
        click.echo(f"Customer: {dto.customer.name} ({dto.customer.phone})")
    click.echo(f"Delivery: {dto.delivery_date} at {dto.delivery_address}")
    if dto.time_slot is not None:
        slot = dto.time_slot
        click.echo(
            f"Slot:     {slot.date} {slot.start_time}-{slot.end_time} "
            f"({slot.used_capacity}/{slot.capacity}, {slot.status})"
        )
    if dto.notes:
        click.echo(f"Notes:    {dto.notes}")
    click.echo()
    click.echo(f"  {'Palette type':<14} {'Qty':>5}")
    click.echo(f"  {'-'*20}")
    for item in dto.order_items:
        click.echo(f"  {'#' + str(item.palette_type_id):<14} {item.quantity:>5}")


@click.command("create")
@click.option("--name", required=True, help="Customer name.")
@click.option("--phone", required=True, help="Customer phone (identifies the customer).")
@click.option("--email", default=None, help="Customer email.")
@click.option("--customer-address", default=None, help="Customer postal address.")
@click.option("--address", "delivery_address", required=True, help="Delivery address.")
@click.option("--date", "delivery_date", required=True, type=click.DateTime(["%Y-%m-%d"]), help="Delivery date (YYYY-MM-DD).")
@click.option("--slot", "time_slot_id", type=int, default=None, help="Time slot ID to reserve.")
@click.option("--item", "items", multiple=True, required=True, help="Item as 'PaletteTypeId:Qty' (repeatable).")
@click.option("--notes", default=None, help="Free-form notes.")
def order_create(
    name: str,
    phone: str,
    email: str | None,
    customer_address: str | None,
    delivery_address: str,
    delivery_date,
    time_slot_id: int | None,
    items: tuple[str, ...],
    notes: str | None,
) -> None:
    """Create a new provisional delivery order."""
    request = OrderRequest(
        customer_name=name,
        customer_phone=phone,
        customer_email=email,
        customer_address=customer_address,
        delivery_address=delivery_address,
        delivery_date=delivery_date.date(),
        notes=notes,
        created_via_api=False,
        time_slot_id=time_slot_id,
        items=[_parse_item(raw) for raw in items],
    )
    handler = SubmitOrderHandler(unit_of_work(), slot_failure_policy())

    try:
        dto = handler.handle(request)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id} created  (status={dto.status})")
    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
def order_show(order_id: int) -> None:
    """Show details of an existing order."""
    try:
        dto = ShowOrderHandler(unit_of_work()).handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
@click.option(
    "--status",
    type=click.Choice([s.value for s in OrderStatus]),
    default=None,
    help="Only orders in this status.",
)
def order_list(status: str | None) -> None:
    """List orders, newest first."""
    try:
        orders = ListOrdersHandler(unit_of_work()).handle(status)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<6} {'Customer':<20} {'Date':<12} {'Slot':>6} {'Status':<12}")
    click.echo("-" * 60)
    for dto in orders:
        customer = dto.customer.name if dto.customer else f"#{dto.customer_id}"
        slot = str(dto.time_slot_id) if dto.time_slot_id is not None else "-"
        click.echo(f"{dto.id:<6} {customer:<20} {dto.delivery_date:<12} {slot:>6} {dto.status:<12}")


@click.command("confirm")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to confirm.")
def order_confirm(order_id: int) -> None:
    """Confirm a provisional order."""
    try:
        ConfirmOrderHandler(unit_of_work()).handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} confirmed.")


@click.command("deliver")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to mark delivered.")
def order_deliver(order_id: int) -> None:
    """Mark an order as delivered."""
    try:
        DeliverOrderHandler(unit_of_work()).handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} delivered.")


@click.command("cancel")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to cancel.")
def order_cancel(order_id: int) -> None:
    """Cancel an order (releases its delivery slot unit)."""
    try:
        CancelOrderHandler(unit_of_work()).handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} cancelled.")


@click.command("delete")
@click.option("--id", "order_id", required=True, type=int, help="Cancelled order ID to delete.")
@click.confirmation_option(prompt="Delete this order permanently?")
def order_delete(order_id: int) -> None:
    """Permanently delete a cancelled order."""
    try:
        DeleteOrderHandler(unit_of_work()).handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} deleted.")
