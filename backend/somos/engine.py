"""Pricing engine for the SOMOS cleaning price calculator.

The engine turns a selection into a quote in five steps:

1. **Size scaling** — ``base_price * size_step ** size_tier``.
2. **Floor surcharge** — a flat charge per floor above the first, waived
   entirely when the building has an elevator.
3. **Base price** — size price plus floor surcharge.
4. **Frequency adjustment** — a positive discount reduces the base price, a
   negative one (move-in/move-out) adds a surcharge.
5. **Savings** — the discount amount; zero for one-time and surcharged
   frequencies, never negative.

Every quote is recomputed from the raw selection. Nothing is rounded here.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from somos.data.rate_card import DEFAULT_RATE_CARD
from somos.exceptions import InvalidSelectionError
from somos.models.enums import Frequency
from somos.models.quote import PriceQuote
from somos.models.selection import clamp_floor

if TYPE_CHECKING:
    from somos.data.rate_card import RateCard
    from somos.models.selection import Selection

ENGINE_VERSION = "0.1.0"


class PricingEngine:
    """Converts a Selection into a PriceQuote.

    Args:
        rate_card: Prices, size bands, floor charge and frequency discounts.

    Example::

        from somos.engine import PricingEngine
        from somos.models.selection import Selection

        engine = PricingEngine()
        quote = engine.quote(Selection(size_tier=2, floor=3))
    """

    def __init__(self, rate_card: RateCard = DEFAULT_RATE_CARD) -> None:
        self._rate_card = rate_card

    @property
    def rate_card(self) -> RateCard:
        return self._rate_card

    def quote(self, selection: Selection) -> PriceQuote:
        """Price a validated selection.

        Property type is carried on the selection but has no pricing rule.
        """
        return self.price(
            size_tier=selection.size_tier,
            floor=selection.floor,
            has_elevator=selection.has_elevator,
            frequency=selection.frequency,
        )

    def price(
        self,
        size_tier: int,
        floor: int,
        has_elevator: bool,
        frequency: Frequency,
    ) -> PriceQuote:
        """Price raw selection values.

        Args:
            size_tier: Index into the rate card's size bands.
            floor: Floor number, 1 for the ground floor. Floors above the
                top tier are priced as the top tier.
            has_elevator: Waives the floor surcharge when true.
            frequency: Service cadence.

        Returns:
            The base, final and savings figures for the selection.

        Raises:
            InvalidSelectionError: If the size tier or floor is out of range
                or the frequency has no rate.
        """
        card = self._rate_card

        if not 0 <= size_tier <= card.max_size_tier:
            msg = f"size_tier must be between 0 and {card.max_size_tier}, got {size_tier}"
            raise InvalidSelectionError(msg)
        if floor < 1:
            msg = f"floor must be at least 1, got {floor}"
            raise InvalidSelectionError(msg)

        try:
            rate = card.frequency(Frequency(frequency))
        except (KeyError, ValueError) as exc:
            msg = f"Unknown frequency '{frequency}'"
            raise InvalidSelectionError(msg) from exc

        # 1. Geometric size scaling
        base_price_for_size = card.base_price * card.size_step**size_tier

        # 2. Floor surcharge
        floor = clamp_floor(floor, card.max_floor_tier)
        floor_charge = 0.0
        if not has_elevator and floor > 1:
            floor_charge = (floor - 1) * card.floor_charge

        # 3. Base price
        base_price = base_price_for_size + floor_charge

        # 4. Frequency discount / surcharge
        discount = rate.discount
        if discount > 0:
            final_price = base_price * (1 - discount / 100)
        elif discount < 0:
            final_price = base_price * (1 + abs(discount) / 100)
        else:
            final_price = base_price

        # 5. Savings are only reported for discounts
        savings = base_price - final_price if discount > 0 else 0.0

        return PriceQuote(
            frequency=rate.frequency,
            frequency_label=rate.label,
            discount_percent=discount,
            base_price_for_size=base_price_for_size,
            floor_charge=floor_charge,
            base_price=base_price,
            final_price=final_price,
            savings=savings,
        )


def calculate_price(
    size_tier: int,
    floor: int,
    has_elevator: bool,
    frequency: Frequency,
    rate_card: RateCard = DEFAULT_RATE_CARD,
) -> PriceQuote:
    """Price a selection without building an engine or a Selection."""
    return PricingEngine(rate_card).price(
        size_tier=size_tier,
        floor=floor,
        has_elevator=has_elevator,
        frequency=frequency,
    )
