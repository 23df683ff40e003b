"""Order aggregate — a quote that the customer committed to.

Orders are only ever created from a quote.  They copy the quote's line
items and grand total at conversion time, so later catalog or quote
edits never change what was ordered.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from quotedesk.domain.exceptions import ValidationError
from quotedesk.domain.model.pricing_policy import DEFAULT_POLICY, PricingPolicy
from quotedesk.domain.model.quote import Quote
from quotedesk.domain.model.value_objects import Money, Quantity
from quotedesk.domain.service.pricing import line_total


class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


# Each status may only move one step forward along the pipeline.
_NEXT_STATUS: dict[OrderStatus, OrderStatus] = {
    OrderStatus.PENDING: OrderStatus.PROCESSING,
    OrderStatus.PROCESSING: OrderStatus.SHIPPED,
    OrderStatus.SHIPPED: OrderStatus.DELIVERED,
}

_FINAL_STATUSES = frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED})


@dataclass
class OrderLineItem:
    """Snapshot of a quote line at conversion time."""

    product_id: str | None
    description: str
    quantity: Quantity
    unit_price: Money

    @property
    def line_total(self) -> Money:
        return line_total(self)


@dataclass
class Order:
    id: int | None
    quote_id: int
    customer: str
    items: list[OrderLineItem]
    total_amount: Money
    status: OrderStatus = OrderStatus.PENDING
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def from_quote(quote: Quote, policy: PricingPolicy = DEFAULT_POLICY) -> Order:
        """Build a pending order from a sent or accepted quote.

        ``total_amount`` is the quote's grand total, tax included.  The
        quote itself is not modified; callers mark it ordered.
        """
        if quote.id is None:
            raise ValidationError("Quote must be saved before it can be ordered")

        return Order(
            id=None,
            quote_id=quote.id,
            customer=quote.customer,
            items=[
                OrderLineItem(
                    product_id=item.product_id,
                    description=item.description,
                    quantity=item.quantity,
                    unit_price=item.unit_price,
                )
                for item in quote.items
            ],
            total_amount=quote.totals(policy).total,
        )

    # --- State transitions ----------------------------------------------------

    def advance_to(self, status: OrderStatus) -> None:
        """Move to ``status``; cancelling is allowed from any open state."""
        if self.status in _FINAL_STATUSES:
            raise ValidationError(
                f"Order is {self.status.value} and can no longer change status"
            )
        if status == OrderStatus.CANCELLED:
            self.status = status
            return
        if _NEXT_STATUS.get(self.status) != status:
            raise ValidationError(
                f"Cannot move order from {self.status.value} to {status.value}"
            )
        self.status = status

    def cancel(self) -> None:
        self.advance_to(OrderStatus.CANCELLED)

    # --- Computed properties --------------------------------------------------

    @property
    def is_open(self) -> bool:
        return self.status not in _FINAL_STATUSES
