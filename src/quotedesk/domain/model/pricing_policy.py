"""Pricing constants and the policy object that carries them.

The tax rate and the manual-price threshold are injected wherever prices
or totals are computed, so a different rate or threshold never requires
touching the pricing code itself.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from quotedesk.domain.exceptions import ValidationError

# Above this many units a line item must be priced by hand, and no price
# tier may reach past it.
MANUAL_PRICE_THRESHOLD = 10_000

TAX_RATE = Decimal("0.08")


@dataclass(frozen=True)
class PricingPolicy:
    tax_rate: Decimal = TAX_RATE
    manual_price_threshold: int = MANUAL_PRICE_THRESHOLD

    def __post_init__(self) -> None:
        if not isinstance(self.tax_rate, Decimal):
            raise ValidationError(
                f"Tax rate must be a Decimal, got {type(self.tax_rate).__name__}"
            )
        if self.tax_rate < 0:
            raise ValidationError(f"Tax rate cannot be negative, got {self.tax_rate}")
        if isinstance(self.manual_price_threshold, bool) or not isinstance(
            self.manual_price_threshold, int
        ):
            raise ValidationError("Manual price threshold must be an integer")
        if self.manual_price_threshold <= 0:
            raise ValidationError("Manual price threshold must be positive")

    def requires_manual_price(self, quantity: int) -> bool:
        return quantity > self.manual_price_threshold

    def clamp_tier_ceiling(self, up_to_quantity: int) -> int:
        """Cap a tier ceiling entered in the catalog at the threshold."""
        return min(up_to_quantity, self.manual_price_threshold)


DEFAULT_POLICY = PricingPolicy()
