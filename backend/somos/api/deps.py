"""Environment-driven configuration for the FastAPI application."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from somos.theme import JsonFileThemeStore, MemoryThemeStore

if TYPE_CHECKING:
    from somos.theme import ThemeStore

logger = logging.getLogger(__name__)

_DEFAULT_THEME_FILE = Path.home() / ".somos" / "preferences.json"
_DEFAULT_CORS_ORIGINS = ("http://localhost:3000",)
_DEFAULT_ROOT_PATH = "/calculator-next"


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the API.

    ``theme_file`` of None keeps the theme preference in memory only.

    Constructed directly, Settings describe an app mounted at the server
    root with no on-disk state (embedding, tests). ``load_settings`` is the
    deployment path and defaults ``root_path`` to the exported site prefix.
    """

    theme_file: Path | None = None
    cors_origins: tuple[str, ...] = _DEFAULT_CORS_ORIGINS
    root_path: str = ""


def load_settings() -> Settings:
    """Build Settings from environment variables.

    - ``SOMOS_THEME_FILE``: JSON preferences path; set it empty to disable
      on-disk persistence.
    - ``SOMOS_CORS_ORIGINS``: comma-separated allowed origins.
    - ``SOMOS_ROOT_PATH``: path prefix the app is served under.
    """
    raw_theme_file = os.environ.get("SOMOS_THEME_FILE")
    if raw_theme_file is None:
        theme_file: Path | None = _DEFAULT_THEME_FILE
    elif raw_theme_file.strip():
        theme_file = Path(raw_theme_file).expanduser()
    else:
        theme_file = None

    raw_origins = os.environ.get("SOMOS_CORS_ORIGINS", "")
    origins = tuple(o.strip() for o in raw_origins.split(",") if o.strip())

    return Settings(
        theme_file=theme_file,
        cors_origins=origins or _DEFAULT_CORS_ORIGINS,
        root_path=os.environ.get("SOMOS_ROOT_PATH", _DEFAULT_ROOT_PATH),
    )


def create_theme_store(settings: Settings) -> ThemeStore:
    if settings.theme_file is None:
        logger.info("Theme preference persistence disabled; using memory store")
        return MemoryThemeStore()
    return JsonFileThemeStore(settings.theme_file)
