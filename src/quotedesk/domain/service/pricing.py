"""Domain service: tiered pricing, manual price override and totals.

These are plain functions over value objects.  None of them touch a
repository or raise on well-typed input, so quotes, orders, the CLI and
any future renderer can call them freely.

Composition::

    price_for_quantity   -> default unit price of a line item
    apply_quantity_change -> decides whether that default is used
    compute_totals       -> subtotal / tax / total over all line items
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Protocol, Union

from quotedesk.domain.model.pricing_policy import DEFAULT_POLICY, PricingPolicy
from quotedesk.domain.model.product import PriceTier, Product
from quotedesk.domain.model.value_objects import Money, Quantity


class PricedLine(Protocol):
    """Anything with a quantity and a unit price (quote or order lines)."""

    quantity: Quantity
    unit_price: Money


class OverridableLine(PricedLine, Protocol):
    manual_price: bool


TierSource = Union[Product, Sequence[PriceTier], None]


@dataclass(frozen=True)
class Totals:
    subtotal: Money
    tax: Money
    total: Money


def price_for_quantity(source: TierSource, quantity: int) -> Money:
    """Return the unit price that applies to ``quantity`` units.

    Tiers are sorted by ceiling first (stable, so among equal ceilings
    the one listed first wins).  Quantities past the highest ceiling use
    the highest tier's price.  No tiers at all prices at zero.
    """
    tiers = source.price_tiers if isinstance(source, Product) else source
    if not tiers:
        return Money.zero()

    ordered = sorted(tiers, key=lambda tier: tier.up_to_quantity)
    for tier in ordered:
        if quantity <= tier.up_to_quantity:
            return tier.price

    return ordered[-1].price


def apply_quantity_change(
    item: OverridableLine,
    quantity: Quantity,
    product: Product | None,
    policy: PricingPolicy = DEFAULT_POLICY,
) -> None:
    """Set a new quantity on ``item`` and re-decide how it is priced.

    Over the threshold the item switches to manual pricing and its price
    is left exactly as it was.  At or under the threshold it goes back
    to tier pricing and, when the product is known, is re-priced.
    """
    item.quantity = quantity
    if policy.requires_manual_price(quantity.value):
        item.manual_price = True
        return

    item.manual_price = False
    if product is not None:
        item.unit_price = price_for_quantity(product, quantity.value)


def line_total(item: PricedLine) -> Money:
    return item.unit_price * item.quantity.value


def compute_totals(
    items: Iterable[PricedLine],
    policy: PricingPolicy = DEFAULT_POLICY,
) -> Totals:
    subtotal = Money.zero()
    for item in items:
        subtotal = subtotal + line_total(item)

    tax = subtotal * policy.tax_rate
    return Totals(subtotal=subtotal, tax=tax, total=subtotal + tax)
