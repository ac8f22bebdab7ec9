"""Custom exception hierarchy for the SOMOS calculator."""

from __future__ import annotations


class SomosError(Exception):
    """Base exception for all SOMOS errors."""


class InvalidSelectionError(SomosError):
    """Raised when a calculator selection is outside its allowed range."""


class ThemeStorageError(SomosError):
    """Raised when the theme preference cannot be read or written."""
