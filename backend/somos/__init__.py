"""SOMOS cleaning price calculator.

Usage::

    from somos import create_default_engine, Selection, Frequency

    engine = create_default_engine()
    quote = engine.quote(Selection(size_tier=2, floor=3, frequency=Frequency.WEEKLY))
"""

from somos.data.rate_card import DEFAULT_RATE_CARD, FrequencyRate, RateCard
from somos.engine import PricingEngine, calculate_price
from somos.exceptions import InvalidSelectionError, SomosError, ThemeStorageError
from somos.factory import create_default_engine, create_session
from somos.models.enums import Frequency, PropertyType, Theme
from somos.models.quote import PriceQuote
from somos.models.selection import Selection, SelectionUpdate
from somos.session import CalculatorSession
from somos.theme import (
    JsonFileThemeStore,
    MemoryThemeStore,
    RecordingSurface,
    ThemePreference,
)

__all__ = [
    "DEFAULT_RATE_CARD",
    "CalculatorSession",
    "Frequency",
    "FrequencyRate",
    "InvalidSelectionError",
    "JsonFileThemeStore",
    "MemoryThemeStore",
    "PriceQuote",
    "PricingEngine",
    "PropertyType",
    "RateCard",
    "RecordingSurface",
    "Selection",
    "SelectionUpdate",
    "SomosError",
    "Theme",
    "ThemePreference",
    "ThemeStorageError",
    "calculate_price",
    "create_default_engine",
    "create_session",
]
