from __future__ import annotations

from pathlib import Path

import click

from quotedesk.domain.exceptions import DomainException
from quotedesk.infrastructure.cli.order_commands import (
    order_list,
    order_show,
    order_status,
)
from quotedesk.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_list,
    product_price,
    product_seed,
    product_show,
    product_update,
)
from quotedesk.infrastructure.cli.quote_commands import (
    quote_add_item,
    quote_convert,
    quote_create,
    quote_list,
    quote_remove_item,
    quote_set_price,
    quote_set_product,
    quote_set_quantity,
    quote_show,
    quote_status,
)
from quotedesk.infrastructure.config.settings import get_settings, override_settings
from quotedesk.infrastructure.logging_config import configure_logging


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory holding products.json, quotes.json and orders.json.",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log at INFO level.")
def cli(data_dir: Path | None, verbose: bool) -> None:
    """Quotedesk — catalog, quotes and orders"""
    try:
        settings = get_settings()
        settings.pricing_policy()
    except DomainException as exc:
        raise click.ClickException(f"Invalid configuration: {exc}")

    if data_dir is not None:
        settings = override_settings(data_dir=data_dir)
    configure_logging("INFO" if verbose else settings.log_level)


@cli.group()
def product() -> None:
    """Manage the product catalog."""


@cli.group()
def quote() -> None:
    """Manage quotes."""


@cli.group()
def order() -> None:
    """Manage orders."""


# Register subcommands
product.add_command(product_add)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_price)
product.add_command(product_seed)
product.add_command(product_show)
product.add_command(product_update)
quote.add_command(quote_add_item)
quote.add_command(quote_convert)
quote.add_command(quote_create)
quote.add_command(quote_list)
quote.add_command(quote_remove_item)
quote.add_command(quote_set_price)
quote.add_command(quote_set_product)
quote.add_command(quote_set_quantity)
quote.add_command(quote_show)
quote.add_command(quote_status)
order.add_command(order_list)
order.add_command(order_show)
order.add_command(order_status)
