"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from llantera.application.dto import OrderDTO, OrderItemSpec
from llantera.domain.exceptions import DomainException
from llantera.infrastructure.bootstrap import handlers


def _parse_items(raw: str) -> list[OrderItemSpec]:
    """Parse 'SKU:Qty@Price,SKU:Qty@Price' into OrderItemSpec list."""
    specs: list[OrderItemSpec] = []
    for entry in raw.split(","):
        entry = entry.strip()
        if ":" not in entry or "@" not in entry:
            raise click.BadParameter(
                f"Invalid item format '{entry}'. Expected 'SKU:Quantity@UnitPrice'."
            )
        sku, rest = entry.rsplit(":", 1)
        qty_str, price = rest.split("@", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for tire '{sku}'."
            )
        specs.append(OrderItemSpec(tire_sku=sku.strip(), quantity=qty, unit_price=price.strip()))
    return specs


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order {dto.order_number}  (status={dto.status})")
    click.echo(f"User:     {dto.user_id}")
    click.echo(f"Payment:  {dto.payment_method} / {dto.payment_mode}")
    click.echo(f"Created:  {dto.created_at}")
    click.echo()
    click.echo(f"  {'SKU':<20} {'Qty':>5} {'Price':>12} {'Subtotal':>12}")
    click.echo(f"  {'-'*51}")
    for item in dto.items:
        click.echo(
            f"  {item.tire_sku:<20} {item.quantity:>5} {item.unit_price:>12} {item.subtotal:>12}"
        )
    click.echo(f"  {'-'*51}")
    click.echo(f"  {'Subtotal':<27} {dto.subtotal:>24}")
    click.echo(f"  {'IVA 16%':<27} {dto.iva:>24}")
    click.echo(f"  {'Total':<27} {dto.total:>24}")


@click.command("create")
@click.option("--user", "user_id", required=True, help="Customer user ID.")
@click.option("--items", required=True, help="Items as 'SKU:Qty@Price,SKU:Qty@Price'.")
@click.option(
    "--payment",
    required=True,
    type=click.Choice(["transferencia", "tarjeta", "efectivo"]),
    help="Payment method.",
)
@click.option("--mode", "payment_mode", default="contado", help="Payment mode.")
@click.option("--notes", default="", help="Customer notes.")
def order_create(user_id: str, items: str, payment: str, payment_mode: str, notes: str) -> None:
    """Place an order (reserves stock)."""
    specs = _parse_items(items)

    try:
        dto = handlers().create_order.handle(
            user_id, specs, payment_method=payment, payment_mode=payment_mode, customer_notes=notes
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("status")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option("--to", "new_status", required=True, help="Target status.")
@click.option("--notes", default="", help="Admin notes.")
def order_status(order_id: int, new_status: str, notes: str) -> None:
    """Move an order to a new status (cancel releases stock, delivery confirms it)."""
    try:
        dto = handlers().update_status.handle(order_id, new_status, admin_notes=notes)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.order_number} is now {dto.status}.")


@click.command("cancel")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to cancel.")
@click.option("--user", "user_id", required=True, help="Customer user ID.")
def order_cancel(order_id: int, user_id: str) -> None:
    """Cancel your own order while it is still 'solicitado'."""
    try:
        dto = handlers().cancel_order.handle(user_id, order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.order_number} cancelled.")


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
def order_show(order_id: int) -> None:
    """Show details of an existing order."""
    try:
        dto = handlers().show_order.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
@click.option("--user", "user_id", default=None, help="Only this user's orders.")
@click.option("--status", default=None, help="Only orders in this status.")
@click.option("--limit", default=50, type=int)
@click.option("--offset", default=0, type=int)
def order_list(user_id: str | None, status: str | None, limit: int, offset: int) -> None:
    """List orders, newest first."""
    try:
        orders, total = handlers().show_order.list(user_id, status, limit, offset)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not orders:
        click.echo("No orders found.")
        return

    for dto in orders:
        click.echo(f"{dto.order_number:<12} {dto.status:<11} {dto.user_id:<16} {dto.total:>14}")
    click.echo(f"{len(orders)} of {total} orders")
