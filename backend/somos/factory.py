"""Factory functions for creating pre-configured calculator objects."""

from __future__ import annotations

from typing import TYPE_CHECKING

from somos.data.rate_card import DEFAULT_RATE_CARD
from somos.engine import PricingEngine
from somos.session import CalculatorSession
from somos.theme import MemoryThemeStore, RecordingSurface, ThemePreference

if TYPE_CHECKING:
    from somos.theme import PresentationSurface, ThemeStore


def create_default_engine() -> PricingEngine:
    """Create a PricingEngine wired up with the standard rate card.

    Example::

        from somos import create_default_engine, Selection

        engine = create_default_engine()
        quote = engine.quote(Selection(size_tier=1))
    """
    return PricingEngine(DEFAULT_RATE_CARD)


def create_session(
    store: ThemeStore | None = None,
    surface: PresentationSurface | None = None,
    engine: PricingEngine | None = None,
) -> CalculatorSession:
    """Create a CalculatorSession with an uninitialized theme.

    Call ``initialize_theme`` once the ambient light/dark preference is
    known. Without a store the theme is kept in memory only.
    """
    theme = ThemePreference(
        store=store if store is not None else MemoryThemeStore(),
        surface=surface if surface is not None else RecordingSurface(),
    )
    return CalculatorSession(engine or create_default_engine(), theme)
