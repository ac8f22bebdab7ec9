"""Catalogue of the choices the calculator offers, for rendering controls."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from somos.data.rate_card import DEFAULT_RATE_CARD
from somos.formatting import format_floor_label
from somos.models.enums import PropertyType

if TYPE_CHECKING:
    from somos.data.rate_card import RateCard


def build_options(rate_card: RateCard = DEFAULT_RATE_CARD) -> dict[str, Any]:
    """Describe every control the calculator shows.

    Floor choices run from the ground floor up to the top tier; the top tier
    button is labelled with a '+' and sends the tier number itself.
    """
    return {
        "frequencies": [
            {
                "value": rate.frequency.value,
                "label": rate.label,
                "discount": rate.discount,
            }
            for rate in rate_card.frequencies
        ],
        "floors": [
            {
                "value": floor,
                "label": format_floor_label(floor, rate_card.max_floor_tier),
            }
            for floor in range(1, rate_card.max_floor_tier + 1)
        ],
        "sizes": [
            {"value": tier, "label": label}
            for tier, label in enumerate(rate_card.property_sizes)
        ],
        "property_types": [
            {"value": pt.value, "label": pt.label} for pt in PropertyType
        ],
        "floor_charge": rate_card.floor_charge,
    }
