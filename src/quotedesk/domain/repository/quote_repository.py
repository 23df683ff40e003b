"""Abstract repository for the Quote aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from quotedesk.domain.model.quote import Quote


class QuoteRepository(ABC):

    @abstractmethod
    def next_id(self) -> int:
        """Generate the next unique quote ID."""

    @abstractmethod
    def get_by_id(self, quote_id: int) -> Quote | None:
        """Return a quote by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Quote]:
        """Return every quote, oldest first."""

    @abstractmethod
    def save(self, quote: Quote) -> None:
        """Persist a new or updated quote, assigning an ID if it has none."""
