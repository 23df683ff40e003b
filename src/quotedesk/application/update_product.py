"""Application service: Update Product use case."""

from __future__ import annotations

import logging

from quotedesk.application.add_product import build_tiers
from quotedesk.application.dto import PriceTierSpec, ProductDTO
from quotedesk.domain.exceptions import EntityNotFoundError, ValidationError
from quotedesk.domain.model.pricing_policy import DEFAULT_POLICY, PricingPolicy
from quotedesk.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class UpdateProductHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        policy: PricingPolicy = DEFAULT_POLICY,
    ) -> None:
        self._product_repo = product_repo
        self._policy = policy

    def handle(
        self,
        product_id: str,
        name: str | None = None,
        category: str | None = None,
        description: str | None = None,
        tiers: list[PriceTierSpec] | None = None,
    ) -> ProductDTO:
        """Edit a product.  Only the fields given are changed.

        Existing quotes keep the prices they already resolved; only line
        items priced after this call see the new tiers.
        """
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        if name is not None and name.strip().lower() != product.name.lower():
            clash = self._product_repo.get_by_name(name.strip())
            if clash is not None and clash.id != product.id:
                raise ValidationError(f"Product '{name.strip()}' already exists")
            product.rename(name)

        product.update_details(category=category, description=description)

        if tiers is not None:
            product.replace_tiers(build_tiers(tiers), self._policy)

        self._product_repo.save(product)
        logger.info("Updated product #%s '%s'", product.id, product.name)
        return ProductDTO.from_domain(product)
