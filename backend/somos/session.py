"""Selection state holder for the calculator.

A CalculatorSession owns the user's current selection, the quote derived
from it, and the theme preference. The quote is recomputed synchronously on
every change, so ``session.quote == engine.quote(session.selection)`` holds
between any two calls. Changes are serialized by a per-session lock, so
overlapping requests are applied one after the other.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from somos.exceptions import InvalidSelectionError
from somos.models.selection import Selection

if TYPE_CHECKING:
    from somos.engine import PricingEngine
    from somos.models.enums import Frequency, PropertyType, Theme
    from somos.models.quote import PriceQuote
    from somos.theme import ThemePreference


class CalculatorSession:
    """Single-user calculator state.

    Args:
        engine: Prices each selection.
        theme: The light/dark preference owned by this session.
        selection: Starting selection; defaults to the calculator's
            initial state.
    """

    def __init__(
        self,
        engine: PricingEngine,
        theme: ThemePreference,
        selection: Selection | None = None,
    ) -> None:
        self._engine = engine
        self._theme = theme
        self._lock = threading.RLock()
        self._selection = selection or Selection()
        self._quote = engine.quote(self._selection)

    @property
    def selection(self) -> Selection:
        with self._lock:
            return self._selection.model_copy()

    @property
    def quote(self) -> PriceQuote:
        with self._lock:
            return self._quote

    @property
    def theme(self) -> ThemePreference:
        return self._theme

    @property
    def is_dark_mode(self) -> bool:
        return self._theme.is_dark

    # ------------------------------------------------------------------
    # Selection changes
    # ------------------------------------------------------------------

    def update(self, **changes: Any) -> PriceQuote:
        """Apply one or more field changes and re-derive the quote.

        The new selection is validated as a whole; on failure the session
        keeps its previous selection and quote.

        Raises:
            InvalidSelectionError: If any changed field is out of range.
        """
        unknown = set(changes) - set(Selection.model_fields)
        if unknown:
            msg = f"Unknown selection fields: {', '.join(sorted(unknown))}"
            raise InvalidSelectionError(msg)

        with self._lock:
            try:
                selection = Selection.model_validate(
                    {**self._selection.model_dump(), **changes}
                )
            except ValidationError as exc:
                raise InvalidSelectionError(str(exc)) from exc

            quote = self._engine.quote(selection)
            self._selection = selection
            self._quote = quote
            return quote

    def select_size(self, size_tier: int) -> PriceQuote:
        return self.update(size_tier=size_tier)

    def select_frequency(self, frequency: Frequency | str) -> PriceQuote:
        return self.update(frequency=frequency)

    def select_property_type(self, property_type: PropertyType | str) -> PriceQuote:
        return self.update(property_type=property_type)

    def select_floor(self, floor: int) -> PriceQuote:
        return self.update(floor=floor)

    def set_elevator(self, has_elevator: bool) -> PriceQuote:
        return self.update(has_elevator=has_elevator)

    # ------------------------------------------------------------------
    # Theme
    # ------------------------------------------------------------------

    def initialize_theme(self, prefers_dark: bool) -> Theme:
        with self._lock:
            return self._theme.initialize(prefers_dark)

    def toggle_theme(self) -> Theme:
        with self._lock:
            return self._theme.toggle()

    def snapshot(self) -> dict[str, Any]:
        """Current selection, quote and theme, serialized for the API."""
        with self._lock:
            return {
                "selection": self._selection.model_dump(mode="json"),
                "quote": self._quote.model_dump(mode="json"),
                "display": self._quote.to_display_dict(),
                "theme": self._theme.theme.value,
                "is_dark_mode": self._theme.is_dark,
            }
