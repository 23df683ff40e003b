"""CLI commands for the Quote aggregate."""

from __future__ import annotations

from datetime import datetime

import click

from quotedesk.application.change_quote_status import ChangeQuoteStatusHandler
from quotedesk.application.convert_quote import ConvertQuoteToOrderHandler
from quotedesk.application.create_quote import CreateQuoteHandler
from quotedesk.application.dto import QuoteDTO, QuoteItemSpec
from quotedesk.application.edit_quote_item import (
    AddQuoteItemHandler,
    ChangeQuantityHandler,
    RemoveQuoteItemHandler,
    SelectProductHandler,
    SetPriceHandler,
)
from quotedesk.application.show_quote import ListQuotesHandler, ShowQuoteHandler
from quotedesk.domain.exceptions import DomainException
from quotedesk.infrastructure.bootstrap import (
    order_repository,
    pricing_policy,
    product_repository,
    quote_repository,
)


def _parse_items(raw: str) -> list[QuoteItemSpec]:
    """Parse 'License:5,Support:20000@450' into QuoteItemSpec list."""
    specs: list[QuoteItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductName:Quantity[@Price]'."
            )
        name, rest = pair.rsplit(":", 1)
        qty_str, _, price = rest.partition("@")
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{name}'."
            )
        specs.append(
            QuoteItemSpec(product_name=name.strip(), quantity=qty, price=price.strip() or None)
        )
    return specs


def _display_quote(dto: QuoteDTO) -> None:
    """Shared formatting for displaying a quote."""
    click.echo(f"Quote #{dto.id}  (status={dto.status})")
    click.echo(f"Customer:    {dto.customer}")
    if dto.description:
        click.echo(f"Description: {dto.description}")
    click.echo(f"Valid until: {dto.valid_until}   Delivery: {dto.expected_delivery_date}")
    click.echo()
    click.echo(f"  {'#':>2} {'Item':<28} {'Qty':>8} {'Price':>12} {'Total':>14}")
    click.echo(f"  {'-'*68}")
    for item in dto.items:
        marker = " *" if item.manual_price else ""
        click.echo(
            f"  {item.line:>2} {item.description:<28} {item.quantity:>8,} "
            f"{item.unit_price:>12} {item.line_total:>14}{marker}"
        )
    click.echo(f"  {'-'*68}")
    click.echo(f"  {'Subtotal':<40} {dto.subtotal:>27}")
    click.echo(f"  {'Tax (' + dto.tax_rate + ')':<40} {dto.tax:>27}")
    click.echo(f"  {'Total':<40} {dto.total:>27}")
    if any(item.manual_price for item in dto.items):
        click.echo()
        click.echo("  * manually priced")


def _run(handler_call):
    try:
        return handler_call()
    except DomainException as exc:
        raise click.ClickException(str(exc))


def _parse_date(value: str | None, option: str):
    if value is None:
        return None
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise click.BadParameter(f"Invalid date '{value}'. Expected YYYY-MM-DD.", param_hint=option)


@click.command("create")
@click.option("--customer", required=True, help="Customer name.")
@click.option("--items", required=True, help="Items as 'Product:Qty[@Price],...'.")
@click.option("--description", default="", help="Free-text description.")
@click.option("--valid-until", default=None, help="YYYY-MM-DD (default: in 5 days).")
@click.option("--delivery", default=None, help="Expected delivery YYYY-MM-DD (default: in 15 days).")
def quote_create(
    customer: str,
    items: str,
    description: str,
    valid_until: str | None,
    delivery: str | None,
) -> None:
    """Create a draft quote priced from the catalog."""
    specs = _parse_items(items)
    handler = CreateQuoteHandler(
        quote_repo=quote_repository(),
        product_repo=product_repository(),
        policy=pricing_policy(),
    )

    dto = _run(lambda: handler.handle(
        customer=customer,
        item_specs=specs,
        description=description,
        valid_until=_parse_date(valid_until, "--valid-until"),
        expected_delivery_date=_parse_date(delivery, "--delivery"),
    ))

    click.echo(f"Quote #{dto.id} created.")
    _display_quote(dto)


@click.command("show")
@click.option("--id", "quote_id", required=True, type=int, help="Quote ID to display.")
def quote_show(quote_id: int) -> None:
    """Show a quote with its totals."""
    handler = ShowQuoteHandler(quote_repo=quote_repository(), policy=pricing_policy())
    _display_quote(_run(lambda: handler.handle(quote_id)))


@click.command("list")
@click.option("--status", default=None, help="Only show quotes in this status.")
def quote_list(status: str | None) -> None:
    """List quotes."""
    handler = ListQuotesHandler(quote_repo=quote_repository(), policy=pricing_policy())
    quotes = _run(lambda: handler.handle(status))

    if not quotes:
        click.echo("No quotes found.")
        return

    click.echo(f"{'ID':<5} {'Customer':<24} {'Status':<10} {'Items':>5} {'Total':>14}")
    click.echo("-" * 62)
    for q in quotes:
        click.echo(f"{q.id:<5} {q.customer:<24} {q.status:<10} {len(q.items):>5} {q.total:>14}")


@click.command("set-quantity")
@click.option("--id", "quote_id", required=True, type=int, help="Quote ID.")
@click.option("--line", required=True, type=int, help="Line number (1-based).")
@click.option("--quantity", required=True, type=int, help="New quantity.")
def quote_set_quantity(quote_id: int, line: int, quantity: int) -> None:
    """Change a line's quantity (re-prices from tiers up to the limit)."""
    handler = ChangeQuantityHandler(
        quote_repo=quote_repository(),
        product_repo=product_repository(),
        policy=pricing_policy(),
    )
    dto = _run(lambda: handler.handle(quote_id, line, quantity))

    if dto.items[line - 1].manual_price:
        click.echo(f"Line {line} now needs a manual price (see 'quote set-price').")
    _display_quote(dto)


@click.command("set-price")
@click.option("--id", "quote_id", required=True, type=int, help="Quote ID.")
@click.option("--line", required=True, type=int, help="Line number (1-based).")
@click.option("--price", required=True, help="Unit price, e.g. 950.00.")
def quote_set_price(quote_id: int, line: int, price: str) -> None:
    """Set the unit price of a manually priced line."""
    handler = SetPriceHandler(
        quote_repo=quote_repository(),
        product_repo=product_repository(),
        policy=pricing_policy(),
    )
    _display_quote(_run(lambda: handler.handle(quote_id, line, price)))


@click.command("set-product")
@click.option("--id", "quote_id", required=True, type=int, help="Quote ID.")
@click.option("--line", required=True, type=int, help="Line number (1-based).")
@click.option("--product", "product_name", required=True, help="Product name.")
def quote_set_product(quote_id: int, line: int, product_name: str) -> None:
    """Point a line at a different product."""
    handler = SelectProductHandler(
        quote_repo=quote_repository(),
        product_repo=product_repository(),
        policy=pricing_policy(),
    )
    _display_quote(_run(lambda: handler.handle(quote_id, line, product_name)))


@click.command("add-item")
@click.option("--id", "quote_id", required=True, type=int, help="Quote ID.")
@click.option("--product", "product_name", required=True, help="Product name.")
@click.option("--quantity", required=True, type=int, help="Number of units.")
@click.option("--price", default=None, help="Manual unit price (required over the tier limit).")
def quote_add_item(quote_id: int, product_name: str, quantity: int, price: str | None) -> None:
    """Add a line to a draft quote."""
    handler = AddQuoteItemHandler(
        quote_repo=quote_repository(),
        product_repo=product_repository(),
        policy=pricing_policy(),
    )
    spec = QuoteItemSpec(product_name=product_name, quantity=quantity, price=price)
    _display_quote(_run(lambda: handler.handle(quote_id, spec)))


@click.command("remove-item")
@click.option("--id", "quote_id", required=True, type=int, help="Quote ID.")
@click.option("--line", required=True, type=int, help="Line number (1-based).")
def quote_remove_item(quote_id: int, line: int) -> None:
    """Remove a line from a draft quote."""
    handler = RemoveQuoteItemHandler(
        quote_repo=quote_repository(),
        product_repo=product_repository(),
        policy=pricing_policy(),
    )
    _display_quote(_run(lambda: handler.handle(quote_id, line)))


@click.command("status")
@click.option("--id", "quote_id", required=True, type=int, help="Quote ID.")
@click.option("--to", "new_status", required=True, help="draft, sent, accepted or declined.")
def quote_status(quote_id: int, new_status: str) -> None:
    """Change a quote's status."""
    handler = ChangeQuoteStatusHandler(quote_repo=quote_repository(), policy=pricing_policy())
    dto = _run(lambda: handler.handle(quote_id, new_status))
    click.echo(f"Quote #{dto.id} is now {dto.status}.")


@click.command("convert")
@click.option("--id", "quote_id", required=True, type=int, help="Quote ID to convert.")
def quote_convert(quote_id: int) -> None:
    """Turn a sent or accepted quote into an order."""
    handler = ConvertQuoteToOrderHandler(
        quote_repo=quote_repository(),
        order_repo=order_repository(),
        policy=pricing_policy(),
    )
    dto = _run(lambda: handler.handle(quote_id))
    click.echo(f"Quote #{quote_id} converted to order #{dto.id} ({dto.total_amount}).")
