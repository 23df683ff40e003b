"""Application service: Convert Quote to Order use case.

Coordinates two aggregates: the order is built from the quote's current
items and grand total, then the quote is marked ordered.  The quote is
validated before anything is saved, so a rejected conversion leaves
both stores untouched, and the quote is saved before the order.
"""

from __future__ import annotations

import logging

from quotedesk.application.dto import OrderDTO
from quotedesk.domain.exceptions import EntityNotFoundError
from quotedesk.domain.model.order import Order
from quotedesk.domain.model.pricing_policy import DEFAULT_POLICY, PricingPolicy
from quotedesk.domain.repository.order_repository import OrderRepository
from quotedesk.domain.repository.quote_repository import QuoteRepository

logger = logging.getLogger(__name__)


class ConvertQuoteToOrderHandler:

    def __init__(
        self,
        quote_repo: QuoteRepository,
        order_repo: OrderRepository,
        policy: PricingPolicy = DEFAULT_POLICY,
    ) -> None:
        self._quote_repo = quote_repo
        self._order_repo = order_repo
        self._policy = policy

    def handle(self, quote_id: int) -> OrderDTO:
        quote = self._quote_repo.get_by_id(quote_id)
        if quote is None:
            raise EntityNotFoundError(f"Quote #{quote_id} not found")

        order = Order.from_quote(quote, self._policy)
        quote.mark_ordered()

        # No order may exist for a quote that is still convertible.
        self._quote_repo.save(quote)
        self._order_repo.save(order)

        logger.info("Converted quote #%s into order #%s (%s)",
                    quote.id, order.id, order.total_amount)
        return OrderDTO.from_domain(order)
