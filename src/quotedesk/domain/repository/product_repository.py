"""Abstract repository for the Product aggregate.

Declared in the domain layer so that pricing and quoting never depend on
how the catalog is stored.  The JSON implementation lives under
infrastructure; tests use an in-memory fake.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from quotedesk.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def get_by_name(self, name: str) -> Product | None:
        """Return a product by name (case-insensitive), or None."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new or updated product."""

    @abstractmethod
    def delete(self, product_id: str) -> bool:
        """Remove a product; return False if it did not exist."""
