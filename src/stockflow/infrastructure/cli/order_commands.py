"""CLI commands for the Order aggregate."""

from __future__ import annotations

from datetime import datetime

import click

from stockflow.application.dto import OrderDTO
from stockflow.application.list_orders import (
    ListAllOrdersHandler,
    ListOrdersByDateRangeHandler,
    ListOrdersByUserHandler,
)
from stockflow.application.order_total import OrderTotalHandler
from stockflow.application.show_order import ShowOrderHandler
from stockflow.infrastructure.bootstrap import (
    cancel_order_handler,
    create_order_handler,
    unit_of_work_factory,
    update_order_quantity_handler,
)
from stockflow.infrastructure.cli.errors import domain_errors

# ISO-8601 local date-times, with "T" or a space before the time
ISO_FORMATS = [
    "%Y-%m-%d",
    "%Y-%m-%dT%H:%M",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%dT%H:%M:%S.%f",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M:%S.%f",
]


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id}  (status={dto.status})")
    click.echo(f"User:     #{dto.user.id} {dto.user.username} <{dto.user.email}>")
    click.echo(f"Placed:   {dto.order_date.isoformat(sep=' ', timespec='seconds')}")
    click.echo()
    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>12}")
    click.echo(f"  {'-'*50}")
    click.echo(
        f"  {dto.product.name:<20} {dto.quantity:>5} "
        f"{dto.product.price:>10.2f} {dto.total_amount:>12.2f}"
    )
    click.echo(f"  {'-'*50}")
    click.echo(f"  Stock left for '{dto.product.name}': {dto.product.stock}")


def _display_order_list(orders: list[OrderDTO]) -> None:
    if not orders:
        click.echo("No orders found.")
        return

    click.echo(
        f"{'ID':<6} {'Placed':<20} {'User':<15} {'Product':<20} "
        f"{'Qty':>5} {'Status':<10} {'Total':>12}"
    )
    click.echo("-" * 94)
    for o in orders:
        click.echo(
            f"{o.id:<6} {o.order_date.isoformat(sep=' ', timespec='seconds'):<20} "
            f"{o.user.username:<15} {o.product.name:<20} {o.quantity:>5} "
            f"{o.status:<10} {o.total_amount:>12.2f}"
        )


@click.command("create")
@click.option("--user", "user_id", required=True, type=int, help="Ordering user ID.")
@click.option("--product", "product_id", required=True, type=int, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="Units to order.")
def order_create(user_id: int, product_id: int, quantity: int) -> None:
    """Place an order (reserves stock)."""
    with domain_errors():
        dto = create_order_handler().handle(user_id, product_id, quantity)

    click.echo(f"Order #{dto.id} created  (status={dto.status})")
    click.echo()
    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
def order_show(order_id: int) -> None:
    """Show details of an existing order."""
    with domain_errors():
        dto = ShowOrderHandler(unit_of_work_factory()).handle(order_id)

    _display_order(dto)


@click.command("cancel")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to cancel.")
def order_cancel(order_id: int) -> None:
    """Cancel a pending order (returns its stock)."""
    with domain_errors():
        dto = cancel_order_handler().handle(order_id)

    click.echo(f"Order #{dto.id} canceled — {dto.quantity} unit(s) returned to stock.")


@click.command("update")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to change.")
@click.option("--quantity", required=True, type=int, help="New quantity.")
def order_update(order_id: int, quantity: int) -> None:
    """Change the quantity of a pending order."""
    with domain_errors():
        dto = update_order_quantity_handler().handle(order_id, quantity)

    click.echo(f"Order #{dto.id} updated.")
    click.echo()
    _display_order(dto)


@click.command("list")
@click.option("--user", "user_id", type=int, default=None, help="Only this user's orders.")
@click.option("--from", "start", type=click.DateTime(ISO_FORMATS), default=None, help="Range start (ISO-8601).")
@click.option("--to", "end", type=click.DateTime(ISO_FORMATS), default=None, help="Range end (ISO-8601).")
def order_list(user_id: int | None, start: datetime | None, end: datetime | None) -> None:
    """List orders, optionally by user or by date range (inclusive)."""
    if (start is None) != (end is None):
        raise click.UsageError("--from and --to must be given together")
    if user_id is not None and start is not None:
        raise click.UsageError("--user cannot be combined with --from/--to")

    uow_factory = unit_of_work_factory()
    with domain_errors():
        if user_id is not None:
            orders = ListOrdersByUserHandler(uow_factory).handle(user_id)
        elif start is not None and end is not None:
            orders = ListOrdersByDateRangeHandler(uow_factory).handle(start, end)
        else:
            orders = ListAllOrdersHandler(uow_factory).handle()

    _display_order_list(orders)


@click.command("total")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
def order_total(order_id: int) -> None:
    """Print the stored total amount of an order."""
    with domain_errors():
        total = OrderTotalHandler(unit_of_work_factory()).handle(order_id)

    click.echo(f"{total:.2f}")
