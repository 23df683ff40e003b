"""Application services: editing the line items of a draft quote.

Each handler loads the quote, applies one edit through the aggregate and
saves it back.  Quantity changes run through the manual price override
gate; totals are recomputed when the quote is next read.
"""

from __future__ import annotations

import logging

from quotedesk.application.create_quote import build_line_item, warn_if_untiered
from quotedesk.application.dto import QuoteDTO, QuoteItemSpec
from quotedesk.domain.exceptions import EntityNotFoundError
from quotedesk.domain.model.pricing_policy import DEFAULT_POLICY, PricingPolicy
from quotedesk.domain.model.quote import Quote
from quotedesk.domain.model.value_objects import Money, Quantity
from quotedesk.domain.repository.product_repository import ProductRepository
from quotedesk.domain.repository.quote_repository import QuoteRepository

logger = logging.getLogger(__name__)


class _QuoteItemHandler:

    def __init__(
        self,
        quote_repo: QuoteRepository,
        product_repo: ProductRepository,
        policy: PricingPolicy = DEFAULT_POLICY,
    ) -> None:
        self._quote_repo = quote_repo
        self._product_repo = product_repo
        self._policy = policy

    def _load(self, quote_id: int) -> Quote:
        quote = self._quote_repo.get_by_id(quote_id)
        if quote is None:
            raise EntityNotFoundError(f"Quote #{quote_id} not found")
        return quote

    def _save(self, quote: Quote) -> QuoteDTO:
        self._quote_repo.save(quote)
        return QuoteDTO.from_domain(quote, self._policy)


class ChangeQuantityHandler(_QuoteItemHandler):

    def handle(self, quote_id: int, line: int, quantity: int) -> QuoteDTO:
        """Change a line's quantity.

        Over the threshold the line flips to manual pricing and keeps its
        current price until someone sets one.  At or under it, the line
        is re-priced from its product's tiers.
        """
        quote = self._load(quote_id)
        qty = Quantity(quantity)

        current = quote.item(line)
        was_manual = current.manual_price
        product = (
            self._product_repo.get_by_id(current.product_id)
            if current.product_id
            else None
        )

        item = quote.change_quantity(line, qty, product, self._policy)

        if item.manual_price and not was_manual:
            logger.info("Quote #%s line %d: %s units is over %s, manual price required",
                        quote.id, line, qty, self._policy.manual_price_threshold)
        elif not item.manual_price:
            if product is None:
                logger.warning("Quote #%s line %d: product is no longer in the catalog; "
                               "keeping price %s", quote.id, line, item.unit_price)
            else:
                warn_if_untiered(product)
            if was_manual:
                logger.info("Quote #%s line %d: back to tier pricing at %s",
                            quote.id, line, item.unit_price)
        return self._save(quote)


class SetPriceHandler(_QuoteItemHandler):

    def handle(self, quote_id: int, line: int, price: str) -> QuoteDTO:
        quote = self._load(quote_id)
        item = quote.set_price(line, Money.of(price), self._policy)
        logger.debug("Quote #%s line %d priced at %s by hand", quote.id, line, item.unit_price)
        return self._save(quote)


class SelectProductHandler(_QuoteItemHandler):

    def handle(self, quote_id: int, line: int, product_name: str) -> QuoteDTO:
        quote = self._load(quote_id)
        product = self._product_repo.get_by_name(product_name)
        if product is None:
            raise EntityNotFoundError(f"Product not found: '{product_name}'")
        item = quote.select_product(line, product, self._policy)
        if not item.manual_price:
            warn_if_untiered(product)
        return self._save(quote)


class AddQuoteItemHandler(_QuoteItemHandler):

    def handle(self, quote_id: int, spec: QuoteItemSpec) -> QuoteDTO:
        quote = self._load(quote_id)
        quote.add_item(build_line_item(self._product_repo, spec, self._policy))
        return self._save(quote)


class RemoveQuoteItemHandler(_QuoteItemHandler):

    def handle(self, quote_id: int, line: int) -> QuoteDTO:
        quote = self._load(quote_id)
        removed = quote.remove_item(line)
        logger.debug("Quote #%s: removed line %d (%s)", quote.id, line, removed.description)
        return self._save(quote)
