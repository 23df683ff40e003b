"""Application service: Create Quote use case.

Resolves each requested product from the catalog, prices it from its
tiers (or from the price the user supplied), and lets the Quote
aggregate validate the rest.
"""

from __future__ import annotations

import logging
from datetime import date

from quotedesk.application.dto import QuoteDTO, QuoteItemSpec
from quotedesk.domain.exceptions import EntityNotFoundError
from quotedesk.domain.model.pricing_policy import DEFAULT_POLICY, PricingPolicy
from quotedesk.domain.model.product import Product
from quotedesk.domain.model.quote import Quote, QuoteLineItem
from quotedesk.domain.model.value_objects import Money, Quantity
from quotedesk.domain.repository.product_repository import ProductRepository
from quotedesk.domain.repository.quote_repository import QuoteRepository

logger = logging.getLogger(__name__)


def warn_if_untiered(product: Product) -> None:
    """Log when a line is about to be priced from a product with no tiers."""
    if not product.price_tiers:
        logger.warning("Product #%s '%s' has no price tiers; priced at zero",
                       product.id, product.name)


def build_line_item(
    product_repo: ProductRepository,
    spec: QuoteItemSpec,
    policy: PricingPolicy,
) -> QuoteLineItem:
    product = product_repo.get_by_name(spec.product_name)
    if product is None:
        raise EntityNotFoundError(f"Product not found: '{spec.product_name}'")

    price = Money.of(spec.price) if spec.price is not None else None
    if price is None:
        warn_if_untiered(product)

    return QuoteLineItem.for_product(product, Quantity(spec.quantity), price, policy)


class CreateQuoteHandler:

    def __init__(
        self,
        quote_repo: QuoteRepository,
        product_repo: ProductRepository,
        policy: PricingPolicy = DEFAULT_POLICY,
    ) -> None:
        self._quote_repo = quote_repo
        self._product_repo = product_repo
        self._policy = policy

    def handle(
        self,
        customer: str,
        item_specs: list[QuoteItemSpec],
        description: str = "",
        valid_until: date | None = None,
        expected_delivery_date: date | None = None,
    ) -> QuoteDTO:
        line_items = [
            build_line_item(self._product_repo, spec, self._policy)
            for spec in item_specs
        ]

        quote = Quote.create(
            customer=customer,
            items=line_items,
            description=description,
            valid_until=valid_until,
            expected_delivery_date=expected_delivery_date,
        )
        self._quote_repo.save(quote)

        logger.info("Created quote #%s for %s with %d item(s)",
                    quote.id, quote.customer, len(quote.items))
        return QuoteDTO.from_domain(quote, self._policy)
