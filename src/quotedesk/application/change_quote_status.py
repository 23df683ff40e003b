"""Application service: move a quote through draft / sent / accepted / declined."""

from __future__ import annotations

import logging

from quotedesk.application.dto import QuoteDTO
from quotedesk.domain.exceptions import EntityNotFoundError, ValidationError
from quotedesk.domain.model.pricing_policy import DEFAULT_POLICY, PricingPolicy
from quotedesk.domain.model.quote import QuoteStatus
from quotedesk.domain.repository.quote_repository import QuoteRepository

logger = logging.getLogger(__name__)


def parse_quote_status(raw: str) -> QuoteStatus:
    try:
        return QuoteStatus(raw.strip().lower())
    except ValueError as exc:
        choices = ", ".join(s.value for s in QuoteStatus)
        raise ValidationError(f"Unknown quote status '{raw}' (expected one of: {choices})") from exc


class ChangeQuoteStatusHandler:

    def __init__(
        self,
        quote_repo: QuoteRepository,
        policy: PricingPolicy = DEFAULT_POLICY,
    ) -> None:
        self._quote_repo = quote_repo
        self._policy = policy

    def handle(self, quote_id: int, new_status: str) -> QuoteDTO:
        quote = self._quote_repo.get_by_id(quote_id)
        if quote is None:
            raise EntityNotFoundError(f"Quote #{quote_id} not found")

        previous = quote.status
        quote.transition_to(parse_quote_status(new_status))
        self._quote_repo.save(quote)

        logger.info("Quote #%s: %s -> %s", quote.id, previous.value, quote.status.value)
        return QuoteDTO.from_domain(quote, self._policy)
