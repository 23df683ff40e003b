"""Application service: seed an empty catalog with sample products."""

from __future__ import annotations

from quotedesk.application.add_product import AddProductHandler
from quotedesk.application.dto import PriceTierSpec, ProductDTO
from quotedesk.domain.model.pricing_policy import DEFAULT_POLICY, PricingPolicy
from quotedesk.domain.repository.product_repository import ProductRepository

SAMPLE_PRODUCTS: list[dict] = [
    {
        "name": "Standard Software License",
        "category": "Software",
        "description": "A standard license for our flagship software.",
        "tiers": [
            PriceTierSpec(10, "1200.00"),
            PriceTierSpec(100, "1100.00"),
            PriceTierSpec(10_000, "1000.00"),
        ],
    },
    {
        "name": "Premium Support Package",
        "category": "Service",
        "description": "1-year premium support with 24/7 access.",
        "tiers": [PriceTierSpec(10_000, "500.00")],
    },
    {
        "name": "Consulting Hour",
        "category": "Service",
        "description": "One hour of expert consultation.",
        "tiers": [PriceTierSpec(10_000, "150.00")],
    },
    {
        "name": "Hardware Component A",
        "category": "Hardware",
        "description": "Essential hardware component for system integration.",
        "tiers": [PriceTierSpec(10_000, "350.00")],
    },
    {
        "name": "Training Workshop",
        "category": "Training",
        "description": "Full-day training workshop for up to 10 people.",
        "tiers": [PriceTierSpec(10_000, "2000.00")],
    },
]


class SeedProductsHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        policy: PricingPolicy = DEFAULT_POLICY,
    ) -> None:
        self._product_repo = product_repo
        self._add = AddProductHandler(product_repo, policy)

    def handle(self) -> list[ProductDTO]:
        """Add the sample products, but only to an empty catalog."""
        if self._product_repo.list_all():
            return []
        return [self._add.handle(**sample) for sample in SAMPLE_PRODUCTS]
