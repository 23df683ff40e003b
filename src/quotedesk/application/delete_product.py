"""Application service: Delete Product use case."""

from __future__ import annotations

import logging

from quotedesk.domain.exceptions import EntityNotFoundError
from quotedesk.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class DeleteProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: str) -> None:
        # Quotes keep their own copy of name and price, so nothing else
        # needs updating when a product disappears.
        if not self._product_repo.delete(product_id):
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        logger.info("Deleted product #%s", product_id)
