"""Quote aggregate — the sales document priced from the catalog.

A Quote owns its line items.  While the quote is a draft, items can be
added, removed, re-priced and have their quantities changed; every
quantity change goes through the manual price override gate.  Totals
are never stored on the aggregate: they are recomputed from the items
each time they are read.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from enum import Enum

from quotedesk.domain.exceptions import ValidationError
from quotedesk.domain.model.pricing_policy import DEFAULT_POLICY, PricingPolicy
from quotedesk.domain.model.product import Product
from quotedesk.domain.model.value_objects import Money, Quantity
from quotedesk.domain.service.pricing import (
    Totals,
    apply_quantity_change,
    compute_totals,
    line_total,
    price_for_quantity,
)


class QuoteStatus(Enum):
    DRAFT = "draft"
    SENT = "sent"
    ACCEPTED = "accepted"
    DECLINED = "declined"
    ORDERED = "ordered"


_TRANSITIONS: dict[QuoteStatus, frozenset[QuoteStatus]] = {
    QuoteStatus.DRAFT: frozenset({QuoteStatus.SENT}),
    QuoteStatus.SENT: frozenset(
        {QuoteStatus.ACCEPTED, QuoteStatus.DECLINED, QuoteStatus.DRAFT}
    ),
    QuoteStatus.ACCEPTED: frozenset(),
    QuoteStatus.DECLINED: frozenset({QuoteStatus.DRAFT}),
    QuoteStatus.ORDERED: frozenset(),
}

# Quotes that can be turned into an order
CONVERTIBLE_STATUSES = frozenset({QuoteStatus.SENT, QuoteStatus.ACCEPTED})

VALID_FOR_DAYS = 5
DELIVERY_LEAD_DAYS = 15


@dataclass
class QuoteLineItem:
    """One product/quantity/price row.

    ``manual_price`` means the unit price was typed in by a person and
    must not be recomputed from tiers when the quantity changes.
    """

    product_id: str | None
    description: str
    quantity: Quantity
    unit_price: Money
    manual_price: bool = False

    @property
    def line_total(self) -> Money:
        return line_total(self)

    @staticmethod
    def for_product(
        product: Product,
        quantity: Quantity,
        price: Money | None = None,
        policy: PricingPolicy = DEFAULT_POLICY,
    ) -> QuoteLineItem:
        """Build an item priced from the product's tiers.

        Over the threshold a price must be supplied, and the item starts
        out in manual pricing.  An explicit ``price`` always wins.
        """
        manual = policy.requires_manual_price(quantity.value)
        if manual and price is None:
            raise ValidationError(
                f"Quantity {quantity} of {product.name} is over "
                f"{policy.manual_price_threshold:,} units and needs a manual price"
            )
        return QuoteLineItem(
            product_id=product.id,
            description=product.name,
            quantity=quantity,
            unit_price=price if price is not None else price_for_quantity(product, quantity.value),
            manual_price=manual or price is not None,
        )


@dataclass
class Quote:
    """Aggregate root for quotes.

    ``Quote.create()`` enforces the rules for new quotes; the constructor
    stays permissive so repositories can reload stored quotes as-is.
    """

    id: int | None
    customer: str
    items: list[QuoteLineItem]
    description: str = ""
    status: QuoteStatus = QuoteStatus.DRAFT
    valid_until: date = field(
        default_factory=lambda: date.today() + timedelta(days=VALID_FOR_DAYS)
    )
    expected_delivery_date: date = field(
        default_factory=lambda: date.today() + timedelta(days=DELIVERY_LEAD_DAYS)
    )
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW quotes only) -----------------------------------

    @staticmethod
    def create(
        customer: str,
        items: list[QuoteLineItem],
        description: str = "",
        valid_until: date | None = None,
        expected_delivery_date: date | None = None,
        today: date | None = None,
    ) -> Quote:
        if not customer or not customer.strip():
            raise ValidationError("Customer is required")

        if not items:
            raise ValidationError("Quote must contain at least one item")

        today = today or date.today()
        valid_until = valid_until or today + timedelta(days=VALID_FOR_DAYS)
        expected_delivery_date = (
            expected_delivery_date or today + timedelta(days=DELIVERY_LEAD_DAYS)
        )
        if valid_until < today:
            raise ValidationError(f"Valid-until date {valid_until} is in the past")

        return Quote(
            id=None,
            customer=customer.strip(),
            items=list(items),
            description=description.strip(),
            valid_until=valid_until,
            expected_delivery_date=expected_delivery_date,
        )

    # --- Line item editing (draft only) ---------------------------------------

    def add_item(self, item: QuoteLineItem) -> None:
        self._assert_editable()
        self.items.append(item)

    def remove_item(self, line: int) -> QuoteLineItem:
        self._assert_editable()
        self.item(line)
        if len(self.items) == 1:
            raise ValidationError("Quote must keep at least one item")
        return self.items.pop(line - 1)

    def change_quantity(
        self,
        line: int,
        quantity: Quantity,
        product: Product | None,
        policy: PricingPolicy = DEFAULT_POLICY,
    ) -> QuoteLineItem:
        self._assert_editable()
        item = self.item(line)
        apply_quantity_change(item, quantity, product, policy)
        return item

    def select_product(
        self,
        line: int,
        product: Product,
        policy: PricingPolicy = DEFAULT_POLICY,
    ) -> QuoteLineItem:
        """Point a line at another product, re-pricing unless manual."""
        self._assert_editable()
        item = self.item(line)
        item.product_id = product.id
        item.description = product.name
        if not item.manual_price:
            item.unit_price = price_for_quantity(product, item.quantity.value)
        return item

    def set_price(
        self,
        line: int,
        price: Money,
        policy: PricingPolicy = DEFAULT_POLICY,
    ) -> QuoteLineItem:
        """Type in a line's unit price.

        Only manually priced lines, or lines over the threshold, take a
        hand-entered price.  Tier-priced lines are re-priced on every
        quantity or product change, so a typed price would not stick.
        """
        self._assert_editable()
        item = self.item(line)
        if not item.manual_price and not policy.requires_manual_price(item.quantity.value):
            raise ValidationError(
                f"Line {line} is priced from its product's tiers; "
                f"only quantities over {policy.manual_price_threshold:,} take a manual price"
            )
        item.unit_price = price
        return item

    # --- State transitions ----------------------------------------------------

    def transition_to(self, status: QuoteStatus) -> None:
        if status == QuoteStatus.ORDERED:
            raise ValidationError("Quotes are marked ordered only by converting them")
        if status not in _TRANSITIONS[self.status]:
            raise ValidationError(
                f"Cannot move quote from {self.status.value} to {status.value}"
            )
        self.status = status

    def mark_ordered(self) -> None:
        if self.status not in CONVERTIBLE_STATUSES:
            raise ValidationError(
                f"Cannot convert quote in {self.status.value} status "
                f"(must be sent or accepted)"
            )
        self.status = QuoteStatus.ORDERED

    # --- Computed properties --------------------------------------------------

    def totals(self, policy: PricingPolicy = DEFAULT_POLICY) -> Totals:
        return compute_totals(self.items, policy)

    @property
    def is_editable(self) -> bool:
        return self.status == QuoteStatus.DRAFT

    # --- Lookup ---------------------------------------------------------------

    def item(self, line: int) -> QuoteLineItem:
        """Return the item on 1-based ``line``."""
        if not 1 <= line <= len(self.items):
            raise ValidationError(
                f"Line {line} does not exist (quote has {len(self.items)} items)"
            )
        return self.items[line - 1]

    # --- Internal helpers -----------------------------------------------------

    def _assert_editable(self) -> None:
        if not self.is_editable:
            raise ValidationError(
                f"Quote is {self.status.value}; only draft quotes can be edited"
            )
