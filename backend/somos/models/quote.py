"""Price quote output model for the SOMOS calculator."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from somos.models.enums import Frequency


class PriceQuote(BaseModel):
    """Prices derived from a single selection.

    Values are kept at full float precision; rounding to cents happens only
    when formatting for display.
    """

    frequency: Frequency
    frequency_label: str
    discount_percent: float
    base_price_for_size: float
    floor_charge: float
    base_price: float
    final_price: float
    savings: float

    @property
    def is_discount(self) -> bool:
        return self.discount_percent > 0

    @property
    def is_surcharge(self) -> bool:
        return self.discount_percent < 0

    @property
    def has_floor_charge(self) -> bool:
        return self.floor_charge > 0

    def to_display_dict(self) -> dict[str, Any]:
        """Produce the price panel contents for frontend consumption.

        Move-in/move-out quotes show a single surcharge-inclusive figure.
        Every other frequency shows the initial cleaning price, plus a second
        figure for the recurring price unless the cleaning is one-time.
        """
        from somos.formatting import format_floor_charge, format_price, format_savings

        floor_note = (
            format_floor_charge(self.floor_charge) if self.has_floor_charge else None
        )

        if self.frequency == Frequency.MOVE_IN_OUT:
            return {
                "mode": "move_in_out",
                "headline_label": f"{self.frequency_label} Price",
                "headline_price": format_price(self.final_price),
                "surcharge_note": (
                    f"Includes {abs(self.discount_percent):g}% surcharge "
                    "for specialized service"
                ),
                "floor_charge_note": floor_note,
            }

        display: dict[str, Any] = {
            "mode": "standard",
            "headline_label": "Initial Cleaning Price",
            "headline_price": format_price(self.base_price),
            "floor_charge_note": floor_note,
            "recurring": None,
        }

        if self.frequency != Frequency.ONE_TIME:
            label = f"{self.frequency_label} Price"
            if self.is_discount:
                label += " (Starting Week 2)"
            recurring: dict[str, Any] = {
                "label": label,
                "price": format_price(self.final_price),
                "savings_note": None,
                "discount_note": None,
            }
            if self.is_discount:
                recurring["savings_note"] = format_savings(
                    self.savings, self.discount_percent
                )
                recurring["discount_note"] = (
                    "Discount applies from the second service onwards"
                )
            display["recurring"] = recurring

        return display
