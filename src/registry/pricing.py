"""Tiered pricing policy gating creation.

The identifier space is split into three fixed tiers. Each tier requires a
minimum payment of ``unit_price * multiple``.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from .constants import EXTRA_PREMIUM_IDS, PREMIUM_IDS

if TYPE_CHECKING:
    from ..config_schema import PricingConfig


class Tier(str, Enum):
    """Payment tiers partitioning the identifier space."""

    EXTRA_PREMIUM = "extra_premium"
    PREMIUM = "premium"
    REGULAR = "regular"


# Defaults mirror config_schema.PricingConfig
DEFAULT_UNIT_PRICE = 1_000_000_000_000_000
DEFAULT_MULTIPLES: dict[Tier, int] = {
    Tier.EXTRA_PREMIUM: 100,
    Tier.PREMIUM: 10,
    Tier.REGULAR: 1,
}


def tier_of(token_id: int) -> Tier:
    """Return the tier an identifier belongs to."""
    if token_id in EXTRA_PREMIUM_IDS:
        return Tier.EXTRA_PREMIUM
    if token_id in PREMIUM_IDS:
        return Tier.PREMIUM
    return Tier.REGULAR


class PricingPolicy:
    """Maps identifiers to their minimum creation payment."""

    unit_price: int
    multiples: dict[Tier, int]

    def __init__(
        self,
        unit_price: int = DEFAULT_UNIT_PRICE,
        multiples: dict[Tier, int] | None = None,
    ) -> None:
        if unit_price < 0:
            raise ValueError(f"unit_price cannot be negative: {unit_price}")
        self.unit_price = unit_price
        self.multiples = dict(DEFAULT_MULTIPLES)
        if multiples:
            self.multiples.update(multiples)

    @classmethod
    def from_config(cls, config: PricingConfig) -> PricingPolicy:
        """Create a PricingPolicy from the validated pricing section."""
        return cls(
            unit_price=config.unit_price,
            multiples={
                Tier.EXTRA_PREMIUM: config.extra_premium_multiple,
                Tier.PREMIUM: config.premium_multiple,
                Tier.REGULAR: config.regular_multiple,
            },
        )

    def tier_of(self, token_id: int) -> Tier:
        return tier_of(token_id)

    def tier_price(self, tier: Tier) -> int:
        """Minimum payment for any identifier in the tier."""
        return self.unit_price * self.multiples[tier]

    def required_payment(self, token_id: int) -> int:
        """Minimum payment to create the identifier. Never fails."""
        return self.tier_price(tier_of(token_id))
