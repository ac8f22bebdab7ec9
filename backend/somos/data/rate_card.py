"""Rate card for the SOMOS cleaning price calculator.

All prices are USD. The base price applies to the smallest size band and
grows geometrically by ``SIZE_STEP`` for every band above it.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from somos.models.enums import Frequency
from somos.models.selection import MAX_FLOOR_TIER, PROPERTY_SIZES

BASE_PRICE: float = 185.94
SIZE_STEP: float = 1.2

# Flat charge per floor above the first, waived when there is an elevator
FLOOR_CHARGE: float = 30.0


class FrequencyRate(BaseModel):
    """Label and discount for one service frequency.

    A positive discount is a percentage off; a negative one is a surcharge.
    """

    frequency: Frequency
    label: str
    discount: float = Field(gt=-100, lt=100)


FREQUENCY_RATES: tuple[FrequencyRate, ...] = (
    FrequencyRate(frequency=Frequency.ONE_TIME, label="One-time Cleaning", discount=0),
    FrequencyRate(frequency=Frequency.WEEKLY, label="Weekly", discount=20),
    FrequencyRate(frequency=Frequency.BIWEEKLY, label="Every 2 Weeks", discount=15),
    FrequencyRate(frequency=Frequency.MONTHLY, label="Every 4 Weeks", discount=10),
    FrequencyRate(frequency=Frequency.MOVE_IN_OUT, label="Move-in/Move-out", discount=-20),
)


class RateCard(BaseModel):
    """Every constant the pricing engine reads, bundled for injection."""

    property_sizes: tuple[str, ...] = PROPERTY_SIZES
    base_price: float = Field(default=BASE_PRICE, gt=0)
    size_step: float = Field(default=SIZE_STEP, gt=0)
    floor_charge: float = Field(default=FLOOR_CHARGE, ge=0)
    max_floor_tier: int = Field(default=MAX_FLOOR_TIER, ge=1)
    frequencies: tuple[FrequencyRate, ...] = FREQUENCY_RATES

    @property
    def max_size_tier(self) -> int:
        return len(self.property_sizes) - 1

    def frequency(self, frequency: Frequency) -> FrequencyRate:
        """Look up the rate row for a frequency.

        Raises KeyError if the card has no row for it.
        """
        for rate in self.frequencies:
            if rate.frequency == frequency:
                return rate
        msg = f"No rate for frequency '{frequency}'"
        raise KeyError(msg)

    def size_label(self, size_tier: int) -> str:
        return self.property_sizes[size_tier]


DEFAULT_RATE_CARD = RateCard()
