"""Calculator selection model: the inputs the user picks."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from somos.models.enums import Frequency, PropertyType

PROPERTY_SIZES: tuple[str, ...] = (
    "0-800 sq ft",
    "801-1000 sq ft",
    "1001-1200 sq ft",
    "1201-1500 sq ft",
    "1501-1800 sq ft",
    "1801-2000 sq ft",
)

# Floors at or above this are the single "4+" tier
MAX_FLOOR_TIER: int = 4


def clamp_floor(floor: int, max_tier: int = MAX_FLOOR_TIER) -> int:
    """Collapse every floor at or above ``max_tier`` into the top tier."""
    return min(floor, max_tier)


class Selection(BaseModel):
    """Current calculator selection.

    Defaults match the calculator's initial state: smallest size band,
    apartment, ground floor, no elevator, one-time cleaning.
    """

    size_tier: int = Field(default=0, ge=0, le=len(PROPERTY_SIZES) - 1)
    property_type: PropertyType = PropertyType.APARTMENT
    floor: int = Field(default=1, ge=1)
    has_elevator: bool = False
    frequency: Frequency = Frequency.ONE_TIME

    @field_validator("floor")
    @classmethod
    def floor_collapses_to_top_tier(cls, v: int) -> int:
        return clamp_floor(v)


class SelectionUpdate(BaseModel):
    """Partial selection used to change one or more fields at once."""

    size_tier: int | None = None
    property_type: PropertyType | None = None
    floor: int | None = None
    has_elevator: bool | None = None
    frequency: Frequency | None = None

    def changes(self) -> dict[str, object]:
        return self.model_dump(exclude_none=True)
