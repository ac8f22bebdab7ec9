"""Pricing data for the SOMOS calculator."""

from somos.data.rate_card import DEFAULT_RATE_CARD, FrequencyRate, RateCard

__all__ = [
    "DEFAULT_RATE_CARD",
    "FrequencyRate",
    "RateCard",
]
