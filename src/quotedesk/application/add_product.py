"""Application service: Add Product use case."""

from __future__ import annotations

import logging

from quotedesk.application.dto import PriceTierSpec, ProductDTO
from quotedesk.domain.exceptions import ValidationError
from quotedesk.domain.model.pricing_policy import DEFAULT_POLICY, PricingPolicy
from quotedesk.domain.model.product import PriceTier, Product
from quotedesk.domain.model.value_objects import Money
from quotedesk.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


def build_tiers(specs: list[PriceTierSpec]) -> list[PriceTier]:
    return [PriceTier.of(spec.up_to_quantity, spec.price) for spec in specs]


class AddProductHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        policy: PricingPolicy = DEFAULT_POLICY,
    ) -> None:
        self._product_repo = product_repo
        self._policy = policy

    def handle(
        self,
        name: str,
        category: str = "",
        description: str = "",
        tiers: list[PriceTierSpec] | None = None,
        price: str | None = None,
    ) -> ProductDTO:
        """Add a product priced either by tiers or by a single flat price."""
        if tiers and price is not None:
            raise ValidationError("Give either price tiers or a single price, not both")

        if name and self._product_repo.get_by_name(name.strip()) is not None:
            raise ValidationError(f"Product '{name.strip()}' already exists")

        product = Product.create(
            product_id=self._next_id(),
            name=name,
            category=category,
            description=description,
            price_tiers=build_tiers(tiers) if tiers else None,
            price=Money.of(price) if price is not None else None,
            policy=self._policy,
        )
        self._product_repo.save(product)
        logger.info("Added product #%s '%s' with %d tier(s)",
                    product.id, product.name, len(product.price_tiers))
        return ProductDTO.from_domain(product)

    def _next_id(self) -> str:
        ids = [int(p.id) for p in self._product_repo.list_all() if p.id.isdigit()]
        return str(max(ids) + 1) if ids else "1"
