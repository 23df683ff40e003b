"""Data Transfer Objects — plain containers that cross layer boundaries.

Inputs (``*Spec``) carry what the user typed; outputs (``*DTO``) carry
display-ready strings so the CLI never formats Money or dates itself.
Renderers that need raw numbers should read the aggregates instead.
"""

from __future__ import annotations

from dataclasses import dataclass

from quotedesk.domain.model.order import Order
from quotedesk.domain.model.pricing_policy import DEFAULT_POLICY, PricingPolicy
from quotedesk.domain.model.product import Product
from quotedesk.domain.model.quote import Quote

_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M UTC"


# --- Inputs -------------------------------------------------------------------


@dataclass(frozen=True)
class QuoteItemSpec:
    """A requested line: product name, quantity and an optional price."""

    product_name: str
    quantity: int
    price: str | None = None


@dataclass(frozen=True)
class PriceTierSpec:
    up_to_quantity: int
    price: str


# --- Outputs ------------------------------------------------------------------


@dataclass(frozen=True)
class PriceTierDTO:
    up_to_quantity: int
    price: str


@dataclass(frozen=True)
class ProductDTO:
    id: str
    name: str
    category: str
    description: str
    tiers: list[PriceTierDTO]
    created_at: str

    @staticmethod
    def from_domain(product: Product) -> ProductDTO:
        return ProductDTO(
            id=product.id,
            name=product.name,
            category=product.category,
            description=product.description,
            tiers=[
                PriceTierDTO(up_to_quantity=t.up_to_quantity, price=str(t.price))
                for t in product.sorted_tiers
            ],
            created_at=product.created_at.strftime(_TIMESTAMP_FORMAT),
        )


@dataclass(frozen=True)
class QuoteLineItemDTO:
    line: int
    product_id: str | None
    description: str
    quantity: int
    unit_price: str
    line_total: str
    manual_price: bool


@dataclass(frozen=True)
class QuoteDTO:
    id: int
    customer: str
    description: str
    status: str
    items: list[QuoteLineItemDTO]
    subtotal: str
    tax: str
    total: str
    tax_rate: str  # e.g. "8%"
    valid_until: str
    expected_delivery_date: str
    created_at: str

    @staticmethod
    def from_domain(quote: Quote, policy: PricingPolicy = DEFAULT_POLICY) -> QuoteDTO:
        totals = quote.totals(policy)
        return QuoteDTO(
            id=quote.id,  # type: ignore[arg-type]
            customer=quote.customer,
            description=quote.description,
            status=quote.status.value,
            items=[
                QuoteLineItemDTO(
                    line=number,
                    product_id=item.product_id,
                    description=item.description,
                    quantity=item.quantity.value,
                    unit_price=str(item.unit_price),
                    line_total=str(item.line_total),
                    manual_price=item.manual_price,
                )
                for number, item in enumerate(quote.items, start=1)
            ],
            subtotal=str(totals.subtotal),
            tax=str(totals.tax),
            total=str(totals.total),
            tax_rate=f"{(policy.tax_rate * 100).normalize():f}%",
            valid_until=quote.valid_until.isoformat(),
            expected_delivery_date=quote.expected_delivery_date.isoformat(),
            created_at=quote.created_at.strftime(_TIMESTAMP_FORMAT),
        )


@dataclass(frozen=True)
class OrderLineItemDTO:
    description: str
    quantity: int
    unit_price: str
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    id: int
    quote_id: int
    customer: str
    status: str
    items: list[OrderLineItemDTO]
    total_amount: str
    created_at: str

    @staticmethod
    def from_domain(order: Order) -> OrderDTO:
        return OrderDTO(
            id=order.id,  # type: ignore[arg-type]
            quote_id=order.quote_id,
            customer=order.customer,
            status=order.status.value,
            items=[
                OrderLineItemDTO(
                    description=item.description,
                    quantity=item.quantity.value,
                    unit_price=str(item.unit_price),
                    line_total=str(item.line_total),
                )
                for item in order.items
            ],
            total_amount=str(order.total_amount),
            created_at=order.created_at.strftime(_TIMESTAMP_FORMAT),
        )
