"""Enums for the SOMOS calculator domain models."""

from enum import StrEnum


class PropertyType(StrEnum):
    """Kind of property being cleaned.

    Collected with every selection but not referenced by any pricing rule.
    """

    APARTMENT = "apartment"
    HOUSE = "house"
    TOWNHOUSE = "townhouse"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class Frequency(StrEnum):
    """Service cadence; each maps to a fixed discount on the rate card."""

    ONE_TIME = "one_time"
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"
    MOVE_IN_OUT = "move_in_out"


class Theme(StrEnum):
    """Persisted light/dark presentation preference."""

    LIGHT = "light"
    DARK = "dark"
