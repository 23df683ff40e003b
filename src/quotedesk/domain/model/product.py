"""Product aggregate and its price tiers.

Products live in the catalog independently of quotes and orders.  Line
items reference a product by id and copy its resolved price, so editing
tiers never rewrites an existing quote.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from quotedesk.domain.exceptions import ValidationError
from quotedesk.domain.model.pricing_policy import DEFAULT_POLICY, PricingPolicy
from quotedesk.domain.model.value_objects import Money


@dataclass(frozen=True)
class PriceTier:
    """Unit price for quantities up to and including ``up_to_quantity``."""

    up_to_quantity: int
    price: Money

    def __post_init__(self) -> None:
        if isinstance(self.up_to_quantity, bool) or not isinstance(
            self.up_to_quantity, int
        ):
            raise ValidationError(
                f"Tier quantity must be an integer, got {type(self.up_to_quantity).__name__}"
            )
        if self.up_to_quantity <= 0:
            raise ValidationError("Tier quantity must be positive")

    @staticmethod
    def of(up_to_quantity: int, price: str | float | int) -> PriceTier:
        return PriceTier(up_to_quantity=up_to_quantity, price=Money.of(price))

    def __str__(self) -> str:
        return f"up to {self.up_to_quantity:,} @ {self.price}"


@dataclass
class Product:
    """A catalog entry priced by quantity tiers.

    Use ``Product.create()`` for products entered through the catalog: it
    fills in a default tier and caps tier ceilings at the manual-price
    threshold.  The plain constructor is left for repositories
    reconstituting stored products, which may carry any tiers at all.
    """

    id: str
    name: str
    category: str
    description: str
    price_tiers: list[PriceTier]
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def create(
        product_id: str,
        name: str,
        category: str = "",
        description: str = "",
        price_tiers: list[PriceTier] | None = None,
        price: Money | None = None,
        policy: PricingPolicy = DEFAULT_POLICY,
    ) -> Product:
        """Create a catalog product.

        Without tiers, a single tier reaching the threshold is created at
        ``price`` (or zero when no price was given either).
        """
        if not name or not name.strip():
            raise ValidationError("Product name is required")

        if price_tiers:
            tiers = _clamped(price_tiers, policy)
        else:
            tiers = [
                PriceTier(
                    up_to_quantity=policy.manual_price_threshold,
                    price=price if price is not None else Money.zero(),
                )
            ]

        return Product(
            id=product_id,
            name=name.strip(),
            category=category.strip(),
            description=description.strip(),
            price_tiers=tiers,
        )

    # --- Mutations ------------------------------------------------------------

    def rename(self, name: str) -> None:
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        self.name = name.strip()

    def update_details(
        self,
        category: str | None = None,
        description: str | None = None,
    ) -> None:
        if category is not None:
            self.category = category.strip()
        if description is not None:
            self.description = description.strip()

    def replace_tiers(
        self,
        price_tiers: list[PriceTier],
        policy: PricingPolicy = DEFAULT_POLICY,
    ) -> None:
        """Swap in a new tier table; at least one tier must remain."""
        if not price_tiers:
            raise ValidationError(f"Product '{self.name}' needs at least one price tier")
        self.price_tiers = _clamped(price_tiers, policy)

    # --- Computed properties --------------------------------------------------

    @property
    def sorted_tiers(self) -> list[PriceTier]:
        return sorted(self.price_tiers, key=lambda tier: tier.up_to_quantity)


def _clamped(price_tiers: list[PriceTier], policy: PricingPolicy) -> list[PriceTier]:
    return [
        PriceTier(
            up_to_quantity=policy.clamp_tier_ceiling(tier.up_to_quantity),
            price=tier.price,
        )
        for tier in price_tiers
    ]
