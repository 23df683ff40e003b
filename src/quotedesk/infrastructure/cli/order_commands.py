"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from quotedesk.application.change_order_status import ChangeOrderStatusHandler
from quotedesk.application.dto import OrderDTO
from quotedesk.application.show_order import ListOrdersHandler, ShowOrderHandler
from quotedesk.domain.exceptions import DomainException
from quotedesk.infrastructure.bootstrap import order_repository


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id}  (status={dto.status}, from quote #{dto.quote_id})")
    click.echo(f"Customer: {dto.customer}")
    click.echo(f"Created:  {dto.created_at}")
    click.echo()
    click.echo(f"  {'Item':<28} {'Qty':>8} {'Price':>12} {'Total':>14}")
    click.echo(f"  {'-'*65}")
    for item in dto.items:
        click.echo(
            f"  {item.description:<28} {item.quantity:>8,} {item.unit_price:>12} {item.line_total:>14}"
        )
    click.echo(f"  {'-'*65}")
    click.echo(f"  {'Order Total (incl. tax)':<37} {dto.total_amount:>27}")


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
def order_show(order_id: int) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(order_repo=order_repository())

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
@click.option("--status", default=None, help="Only show orders in this status.")
def order_list(status: str | None) -> None:
    """List orders."""
    handler = ListOrdersHandler(order_repo=order_repository())

    try:
        orders = handler.handle(status)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<5} {'Quote':<6} {'Customer':<24} {'Status':<11} {'Total':>14}")
    click.echo("-" * 64)
    for o in orders:
        click.echo(f"{o.id:<5} {o.quote_id:<6} {o.customer:<24} {o.status:<11} {o.total_amount:>14}")


@click.command("status")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option(
    "--to",
    "new_status",
    required=True,
    help="processing, shipped, delivered or cancelled.",
)
def order_status(order_id: int, new_status: str) -> None:
    """Advance an order to its next status, or cancel it."""
    handler = ChangeOrderStatusHandler(order_repo=order_repository())

    try:
        dto = handler.handle(order_id, new_status)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id} is now {dto.status}.")
