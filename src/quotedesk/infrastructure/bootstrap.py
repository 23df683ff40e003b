"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from quotedesk.domain.model.pricing_policy import PricingPolicy
from quotedesk.infrastructure.config.settings import get_settings
from quotedesk.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from quotedesk.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from quotedesk.infrastructure.persistence.json_quote_repository import (
    JsonQuoteRepository,
)


def pricing_policy() -> PricingPolicy:
    return get_settings().pricing_policy()


def product_repository() -> JsonProductRepository:
    return JsonProductRepository(get_settings().data_dir / "products.json")


def quote_repository() -> JsonQuoteRepository:
    return JsonQuoteRepository(get_settings().data_dir / "quotes.json")


def order_repository() -> JsonOrderRepository:
    return JsonOrderRepository(get_settings().data_dir / "orders.json")
