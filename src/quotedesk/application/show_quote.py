"""Application service: Show / List Quotes (queries)."""

from __future__ import annotations

from quotedesk.application.change_quote_status import parse_quote_status
from quotedesk.application.dto import QuoteDTO
from quotedesk.domain.exceptions import EntityNotFoundError
from quotedesk.domain.model.pricing_policy import DEFAULT_POLICY, PricingPolicy
from quotedesk.domain.repository.quote_repository import QuoteRepository


class ShowQuoteHandler:

    def __init__(
        self,
        quote_repo: QuoteRepository,
        policy: PricingPolicy = DEFAULT_POLICY,
    ) -> None:
        self._quote_repo = quote_repo
        self._policy = policy

    def handle(self, quote_id: int) -> QuoteDTO:
        quote = self._quote_repo.get_by_id(quote_id)
        if quote is None:
            raise EntityNotFoundError(f"Quote #{quote_id} not found")
        return QuoteDTO.from_domain(quote, self._policy)


class ListQuotesHandler:

    def __init__(
        self,
        quote_repo: QuoteRepository,
        policy: PricingPolicy = DEFAULT_POLICY,
    ) -> None:
        self._quote_repo = quote_repo
        self._policy = policy

    def handle(self, status: str | None = None) -> list[QuoteDTO]:
        quotes = self._quote_repo.list_all()
        if status is not None:
            wanted = parse_quote_status(status)
            quotes = [q for q in quotes if q.status == wanted]
        return [QuoteDTO.from_domain(q, self._policy) for q in quotes]
