"""CLI commands for the product catalog."""

from __future__ import annotations

import click

from quotedesk.application.add_product import AddProductHandler
from quotedesk.application.delete_product import DeleteProductHandler
from quotedesk.application.dto import PriceTierSpec, ProductDTO
from quotedesk.application.seed_products import SeedProductsHandler
from quotedesk.application.show_product import (
    ListProductsHandler,
    ShowProductHandler,
    UnitPriceHandler,
)
from quotedesk.application.update_product import UpdateProductHandler
from quotedesk.domain.exceptions import DomainException
from quotedesk.infrastructure.bootstrap import pricing_policy, product_repository


def _parse_tiers(raw: tuple[str, ...]) -> list[PriceTierSpec]:
    """Parse ('10:1200', '100:1100') into PriceTierSpec list."""
    specs: list[PriceTierSpec] = []
    for value in raw:
        if ":" not in value:
            raise click.BadParameter(
                f"Invalid tier '{value}'. Expected 'UpToQuantity:Price'.",
                param_hint="--tier",
            )
        qty_str, price = value.split(":", 1)
        try:
            qty = int(qty_str.replace(",", "").strip())
        except ValueError:
            raise click.BadParameter(
                f"Invalid tier quantity '{qty_str}'.", param_hint="--tier"
            )
        specs.append(PriceTierSpec(up_to_quantity=qty, price=price.strip()))
    return specs


def _display_product(dto: ProductDTO) -> None:
    click.echo(f"Product #{dto.id}  {dto.name}")
    if dto.category:
        click.echo(f"Category: {dto.category}")
    if dto.description:
        click.echo(f"About:    {dto.description}")
    click.echo(f"Created:  {dto.created_at}")
    click.echo()
    click.echo(f"  {'Up to qty':>10} {'Unit price':>12}")
    click.echo(f"  {'-'*23}")
    for tier in dto.tiers:
        click.echo(f"  {tier.up_to_quantity:>10,} {tier.price:>12}")
    if not dto.tiers:
        click.echo("  (no price tiers)")


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--category", default="", help="Category, e.g. Software.")
@click.option("--description", default="", help="Short description.")
@click.option("--tier", "tiers", multiple=True, help="Price tier as 'UpToQty:Price'; repeatable.")
@click.option("--price", default=None, help="Single flat price instead of tiers.")
def product_add(
    name: str,
    category: str,
    description: str,
    tiers: tuple[str, ...],
    price: str | None,
) -> None:
    """Add a new product to the catalog."""
    specs = _parse_tiers(tiers)
    handler = AddProductHandler(product_repo=product_repository(), policy=pricing_policy())

    try:
        dto = handler.handle(
            name=name,
            category=category,
            description=description,
            tiers=specs or None,
            price=price,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{dto.id} '{dto.name}' added with {len(dto.tiers)} price tier(s)")


@click.command("list")
@click.option("--category", default=None, help="Only show this category.")
def product_list(category: str | None) -> None:
    """List all products in the catalog."""
    products = ListProductsHandler(product_repo=product_repository()).handle(category)

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<30} {'Category':<12} {'Tiers':>6}")
    click.echo("-" * 57)
    for p in products:
        click.echo(f"{p.id:<6} {p.name:<30} {p.category:<12} {len(p.tiers):>6}")


@click.command("show")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_show(product_id: str) -> None:
    """Show a product and its price tiers."""
    try:
        dto = ShowProductHandler(product_repo=product_repository()).handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_product(dto)


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--category", default=None, help="New category.")
@click.option("--description", default=None, help="New description.")
@click.option("--tier", "tiers", multiple=True, help="Replacement tier 'UpToQty:Price'; repeatable.")
def product_update(
    product_id: str,
    name: str | None,
    category: str | None,
    description: str | None,
    tiers: tuple[str, ...],
) -> None:
    """Update a product's details or replace its price tiers."""
    specs = _parse_tiers(tiers)
    handler = UpdateProductHandler(product_repo=product_repository(), policy=pricing_policy())

    try:
        dto = handler.handle(
            product_id=product_id,
            name=name,
            category=category,
            description=description,
            tiers=specs or None,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{dto.id} updated.")
    _display_product(dto)


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_delete(product_id: str) -> None:
    """Remove a product from the catalog."""
    try:
        DeleteProductHandler(product_repo=product_repository()).handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product_id} deleted.")


@click.command("seed")
def product_seed() -> None:
    """Fill an empty catalog with sample products."""
    handler = SeedProductsHandler(product_repo=product_repository(), policy=pricing_policy())
    added = handler.handle()

    if not added:
        click.echo("Catalog already has products; nothing seeded.")
        return
    click.echo(f"Seeded {len(added)} products.")


@click.command("price")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="Number of units.")
def product_price(product_id: str, quantity: int) -> None:
    """Show the tier price that applies to a quantity."""
    handler = UnitPriceHandler(product_repo=product_repository(), policy=pricing_policy())

    try:
        dto = handler.handle(product_id=product_id, quantity=quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{dto.quantity:,} x {dto.product_name} @ {dto.unit_price} = {dto.line_total}")
    if dto.manual_price_required:
        click.echo("Quantity is over the tier limit: quotes need a manual price.")
