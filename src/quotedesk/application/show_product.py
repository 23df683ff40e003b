"""Application service: catalog queries and tier price lookups."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from quotedesk.application.dto import ProductDTO
from quotedesk.domain.exceptions import EntityNotFoundError
from quotedesk.domain.model.pricing_policy import DEFAULT_POLICY, PricingPolicy
from quotedesk.domain.model.value_objects import Quantity
from quotedesk.domain.repository.product_repository import ProductRepository
from quotedesk.domain.service.pricing import price_for_quantity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UnitPriceDTO:
    product_name: str
    quantity: int
    unit_price: str
    line_total: str
    manual_price_required: bool


class ShowProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: str) -> ProductDTO:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        return ProductDTO.from_domain(product)


class ListProductsHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, category: str | None = None) -> list[ProductDTO]:
        products = self._product_repo.list_all()
        if category is not None:
            products = [p for p in products if p.category.lower() == category.lower()]
        return [ProductDTO.from_domain(p) for p in products]


class UnitPriceHandler:
    """Answer "what would N units of this product cost?"."""

    def __init__(
        self,
        product_repo: ProductRepository,
        policy: PricingPolicy = DEFAULT_POLICY,
    ) -> None:
        self._product_repo = product_repo
        self._policy = policy

    def handle(self, product_id: str, quantity: int) -> UnitPriceDTO:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        qty = Quantity(quantity)
        if not product.price_tiers:
            logger.warning("Product #%s '%s' has no price tiers; priced at zero",
                           product.id, product.name)
        unit_price = price_for_quantity(product, qty.value)
        return UnitPriceDTO(
            product_name=product.name,
            quantity=qty.value,
            unit_price=str(unit_price),
            line_total=str(unit_price * qty.value),
            manual_price_required=self._policy.requires_manual_price(qty.value),
        )
