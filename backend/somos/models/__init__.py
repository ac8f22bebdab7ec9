"""Domain models for the SOMOS calculator."""

from somos.models.enums import Frequency, PropertyType, Theme
from somos.models.quote import PriceQuote
from somos.models.selection import Selection, SelectionUpdate, clamp_floor

__all__ = [
    "Frequency",
    "PriceQuote",
    "PropertyType",
    "Selection",
    "SelectionUpdate",
    "Theme",
    "clamp_floor",
]
