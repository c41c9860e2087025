# -*- coding: utf-8 -*-
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Sequence

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles

from core.config import site_config
from core.i18n import I18n

from .api import resolve_lang
from .api import router as api_router
from .catalog_store import CatalogStore
from .settings import GameSiteSettings
from .ui import render_index_html

logger = logging.getLogger(__name__)

# public/<name> folders exposed at /<name> so catalog urls resolve in dev
_PUBLIC_MOUNTS = ("games", "images", "data", "js")


def create_app(
    games_path: Optional[Path] = None,
    *,
    categories_path: Optional[Path] = None,
    locales_dir: Optional[Path] = None,
    root_path: Optional[str] = None,
    cors_allow_origins: Optional[Sequence[str]] = None,
    gzip_minimum_size: Optional[int] = None,
    auto_reload_catalog: bool = False,
    static_dir: Optional[Path] = None,
    site_name: Optional[str] = None,
    settings: Optional[GameSiteSettings] = None,
) -> FastAPI:
    """FastAPI app factory."""

    defaults = settings or GameSiteSettings.from_config()
    rp = GameSiteSettings.normalize_root_path(defaults.root_path if root_path is None else root_path)
    if cors_allow_origins is None:
        cors_allow_origins = defaults.cors_allow_origins
    if gzip_minimum_size is None:
        gzip_minimum_size = defaults.gzip_minimum_size

    app = FastAPI(
        title="PlayHTML5 Game Listing API",
        version="1.0",
        root_path=rp,
        docs_url="/docs",
        redoc_url=None,
    )

    # static: public site folder
    public_root = Path(static_dir) if static_dir else site_config.path("PUBLIC_DIR")
    try:
        public_root.mkdir(parents=True, exist_ok=True)
    except OSError:
        logger.warning("Cannot create static dir: %s", public_root)
    app.mount("/static", StaticFiles(directory=str(public_root), check_dir=False), name="static")
    for name in _PUBLIC_MOUNTS:
        sub = public_root / name
        if sub.is_dir():
            app.mount(f"/{name}", StaticFiles(directory=str(sub)), name=f"public-{name}")

    # state
    app.state.store = CatalogStore(
        Path(games_path) if games_path else defaults.games_path,
        Path(categories_path) if categories_path else defaults.categories_path,
    )
    app.state.i18n = I18n(
        Path(locales_dir) if locales_dir else defaults.locales_dir,
        fallback_lang=site_config.fallback_language(),
    )
    app.state.auto_reload_catalog = bool(auto_reload_catalog)
    app.state.site_name = site_name or site_config.get("SITE", "NAME", "PlayHTML5")

    # middleware
    if gzip_minimum_size and gzip_minimum_size > 0:
        app.add_middleware(GZipMiddleware, minimum_size=int(gzip_minimum_size))

    if cors_allow_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(cors_allow_origins),
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # routes
    app.include_router(api_router)

    def _render(request: Request, lang: str) -> HTMLResponse:
        store: CatalogStore = app.state.store
        if app.state.auto_reload_catalog:
            store.load(force=False)
        # root_path is already applied by FastAPI; still need it for frontend URL prefixing
        root = request.scope.get("root_path") or ""
        html = render_index_html(
            i18n=app.state.i18n,
            lang=lang,
            games=store.query(category="all"),
            categories=store.categories(),
            featured=store.featured(),
            popular=store.popular(),
            site_name=app.state.site_name,
            app_root=str(root),
        )
        return HTMLResponse(html)

    @app.get("/healthz")
    def healthz():
        return {"ok": True}

    @app.get("/", response_class=HTMLResponse)
    def index(request: Request):
        return _render(request, resolve_lang(request))

    @app.get("/{lang}/", response_class=HTMLResponse)
    def index_lang(request: Request, lang: str):
        if not app.state.i18n.is_valid_language(lang):
            raise HTTPException(status_code=404, detail=f"Unsupported language: {lang}")
        return _render(request, lang)

    return app
