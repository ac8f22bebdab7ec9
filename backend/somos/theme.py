"""Light/dark theme preference with write-through persistence.

The preference is stored under a single key in a key-value store and
mirrored onto a presentation surface, the capability through which the
document-wide "dark" class is applied. Both are injected so the preference
can be exercised without a browser.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from typing import TYPE_CHECKING, Protocol

from somos.exceptions import ThemeStorageError
from somos.models.enums import Theme

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

THEME_KEY = "theme"
DARK_CLASS = "dark"


class ThemeStore(Protocol):
    """Persistent key-value slot. Last write wins."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class PresentationSurface(Protocol):
    """Receives the active theme so all styling reacts uniformly."""

    def apply_theme(self, theme: Theme) -> None: ...


class MemoryThemeStore:
    """In-process store; preferences are lost when the process exits."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value


class JsonFileThemeStore:
    """Store backed by a JSON object on disk.

    A missing file reads as empty. A file that cannot be read or does not
    hold a JSON object raises ThemeStorageError. Writes go to a temporary
    file in the same directory which then replaces the target, so a reader
    never sees a half-written file.
    """

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, object]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            msg = f"Could not read preferences from {self._path}: {exc}"
            raise ThemeStorageError(msg) from exc
        if not isinstance(data, dict):
            msg = f"Preferences file {self._path} does not contain a JSON object"
            raise ThemeStorageError(msg)
        return data

    def get(self, key: str) -> str | None:
        value = self._load().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        try:
            data = self._load()
        except ThemeStorageError:
            logger.warning("Overwriting unreadable preferences file %s", self._path)
            data = {}
        data[key] = value
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._write_atomic(json.dumps(data, indent=2))
        except OSError as exc:
            msg = f"Could not write preferences to {self._path}: {exc}"
            raise ThemeStorageError(msg) from exc

    def _write_atomic(self, text: str) -> None:
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self._path.name}.", suffix=".tmp", dir=self._path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(text)
            os.replace(tmp_name, self._path)
        except OSError:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise


class RecordingSurface:
    """Keeps the document classes that a browser would carry."""

    def __init__(self) -> None:
        self._classes: set[str] = set()

    def apply_theme(self, theme: Theme) -> None:
        if theme == Theme.DARK:
            self._classes.add(DARK_CLASS)
        else:
            self._classes.discard(DARK_CLASS)

    @property
    def document_classes(self) -> list[str]:
        return sorted(self._classes)

    @property
    def is_dark(self) -> bool:
        return DARK_CLASS in self._classes


def parse_theme(value: str | None) -> Theme | None:
    """Return the Theme for a stored value, or None if it is not recognised."""
    if value is None:
        return None
    try:
        return Theme(value.strip().lower())
    except ValueError:
        return None


class ThemePreference:
    """Owns the dark-mode flag.

    ``initialize`` reads the persisted value once, falling back to the
    ambient preference. Every later change writes through to the store and
    the presentation surface. A store failure is logged and otherwise
    ignored: the worst case is that the preference is not remembered.

    Flip, mirror and write happen under one lock, so the stored value always
    matches the flag after concurrent changes.
    """

    def __init__(self, store: ThemeStore, surface: PresentationSurface) -> None:
        self._store = store
        self._surface = surface
        self._dark = False
        self._initialized = False
        self._lock = threading.RLock()

    @property
    def is_dark(self) -> bool:
        return self._dark

    @property
    def theme(self) -> Theme:
        return Theme.DARK if self._dark else Theme.LIGHT

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def surface(self) -> PresentationSurface:
        return self._surface

    def initialize(self, prefers_dark: bool) -> Theme:
        """Resolve the starting theme from storage or the ambient preference."""
        with self._lock:
            try:
                saved = parse_theme(self._store.get(THEME_KEY))
            except ThemeStorageError:
                logger.warning("Could not read saved theme; using system preference")
                saved = None

            if saved is None:
                self._dark = prefers_dark
            else:
                self._dark = saved == Theme.DARK

            self._initialized = True
            self._apply()
            return self.theme

    def toggle(self) -> Theme:
        with self._lock:
            return self.set(not self._dark)

    def set(self, dark: bool) -> Theme:
        with self._lock:
            self._dark = dark
            self._apply()
            return self.theme

    def _apply(self) -> None:
        theme = self.theme
        self._surface.apply_theme(theme)
        try:
            self._store.set(THEME_KEY, theme.value)
        except ThemeStorageError:
            logger.warning("Could not save theme preference '%s'", theme.value)
