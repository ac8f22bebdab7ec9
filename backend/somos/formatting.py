"""Formatting helpers for calculator output.

Prices are shown as fixed-point USD with exactly two decimals and no
thousands separator, e.g. '$1234.50'.
"""

from __future__ import annotations

_ORDINAL_SUFFIXES: dict[int, str] = {1: "st", 2: "nd", 3: "rd"}


def format_price(amount: float) -> str:
    """Format an amount as '$<n>.<cents>'."""
    return f"${amount:.2f}"


def format_floor_label(floor: int, max_tier: int = 4) -> str:
    """Label a floor button: '1st', '2nd', '3rd', then '4+' for the top tier."""
    if floor >= max_tier:
        return f"{max_tier}+"
    return f"{floor}{_ORDINAL_SUFFIXES.get(floor, 'th')}"


def format_floor_charge(amount: float) -> str:
    return f"Includes {format_price(amount)} floor charge"


def format_savings(savings: float, discount_percent: float) -> str:
    """Format the savings line, e.g. 'You save $37.19 (20% off)'."""
    return f"You save {format_price(savings)} ({discount_percent:g}% off)"
