"""FastAPI application — create_app factory with /api endpoints."""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import TYPE_CHECKING, Any

from dotenv import load_dotenv
from fastapi import FastAPI, Header, HTTPException, Response
from fastapi.middleware.cors import CORSMiddleware

# Load .env from project root (backend/../.env or backend/.env)
_backend_dir = Path(__file__).resolve().parent.parent.parent
_project_root = _backend_dir.parent
load_dotenv(_project_root / ".env")
load_dotenv(_backend_dir / ".env")

from somos.engine import ENGINE_VERSION
from somos.exceptions import InvalidSelectionError
from somos.models.selection import Selection, SelectionUpdate  # noqa: TCH001 (FastAPI resolves at runtime)
from somos.options import build_options
from somos.theme import RecordingSurface

if TYPE_CHECKING:
    from somos.api.deps import Settings
    from somos.engine import PricingEngine
    from somos.session import CalculatorSession

logger = logging.getLogger(__name__)

# Client hint carrying the browser's prefers-color-scheme media query
_COLOR_SCHEME_HINT = "Sec-CH-Prefers-Color-Scheme"


def _prefers_dark(hint: str | None) -> bool:
    return (hint or "").strip().strip('"').lower() == "dark"


def create_app(
    *,
    engine: PricingEngine | None = None,
    session: CalculatorSession | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Parameters
    ----------
    engine
        Optional pre-built engine for /api/quote and for a lazily created
        session. Defaults to create_default_engine.
    session
        Optional pre-built session (e.g. tests). If not provided, one is
        created on the first /api/session request, with its theme resolved
        from the persisted preference or the request's color-scheme hint.
    settings
        Optional settings; read from the environment when omitted.
    """
    if settings is None:
        from somos.api.deps import load_settings

        settings = load_settings()

    app = FastAPI(title="SOMOS Calculator", version=ENGINE_VERSION, root_path=settings.root_path)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Store on app state so tests can inject mocks
    app.state.engine = engine
    app.state.session = session
    app.state.settings = settings

    # Sync endpoints run in a threadpool; lazy creation happens once
    engine_lock = threading.Lock()
    session_lock = threading.Lock()

    def _get_engine() -> PricingEngine:
        with engine_lock:
            eng: PricingEngine | None = app.state.engine
            if eng is not None:
                return eng
            from somos.factory import create_default_engine

            eng = create_default_engine()
            app.state.engine = eng
            return eng

    def _get_session(color_scheme_hint: str | None) -> CalculatorSession:
        with session_lock:
            sess: CalculatorSession | None = app.state.session
            if sess is None:
                from somos.api.deps import create_theme_store
                from somos.factory import create_session

                sess = create_session(
                    store=create_theme_store(app.state.settings),
                    surface=RecordingSurface(),
                    engine=_get_engine(),
                )
                app.state.session = sess
            if not sess.theme.initialized:
                theme = sess.initialize_theme(_prefers_dark(color_scheme_hint))
                logger.info("Session theme initialized to '%s'", theme.value)
            return sess

    def _theme_payload(sess: CalculatorSession) -> dict[str, Any]:
        surface = sess.theme.surface
        classes = (
            surface.document_classes if isinstance(surface, RecordingSurface) else None
        )
        return {
            "theme": sess.theme.theme.value,
            "is_dark_mode": sess.is_dark_mode,
            "document_classes": classes,
        }

    # ------------------------------------------------------------------
    # GET /api/health
    # ------------------------------------------------------------------

    @app.get("/api/health")
    def health() -> dict[str, str]:
        return {"status": "ok", "version": ENGINE_VERSION}

    # ------------------------------------------------------------------
    # GET /api/options
    # ------------------------------------------------------------------

    @app.get("/api/options")
    def options() -> dict[str, Any]:
        return build_options(_get_engine().rate_card)

    # ------------------------------------------------------------------
    # POST /api/quote
    # ------------------------------------------------------------------

    @app.post("/api/quote")
    def quote(selection: Selection) -> dict[str, Any]:
        try:
            result = _get_engine().quote(selection)
        except InvalidSelectionError as exc:
            logger.info("Rejected quote request: %s", exc)
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return {
            "selection": selection.model_dump(mode="json"),
            "quote": result.model_dump(mode="json"),
            "display": result.to_display_dict(),
        }

    # ------------------------------------------------------------------
    # /api/session
    # ------------------------------------------------------------------

    @app.get("/api/session")
    def get_session(
        response: Response,
        sec_ch_prefers_color_scheme: str | None = Header(default=None),
    ) -> dict[str, Any]:
        response.headers["Accept-CH"] = _COLOR_SCHEME_HINT
        sess = _get_session(sec_ch_prefers_color_scheme)
        return {**sess.snapshot(), **_theme_payload(sess)}

    @app.patch("/api/session")
    def update_session(
        update: SelectionUpdate,
        sec_ch_prefers_color_scheme: str | None = Header(default=None),
    ) -> dict[str, Any]:
        sess = _get_session(sec_ch_prefers_color_scheme)
        try:
            sess.update(**update.changes())
        except InvalidSelectionError as exc:
            logger.info("Rejected selection update: %s", exc)
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return {**sess.snapshot(), **_theme_payload(sess)}

    @app.post("/api/session/theme/toggle")
    def toggle_theme(
        sec_ch_prefers_color_scheme: str | None = Header(default=None),
    ) -> dict[str, Any]:
        sess = _get_session(sec_ch_prefers_color_scheme)
        sess.toggle_theme()
        return _theme_payload(sess)

    return app
