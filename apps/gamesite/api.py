# -*- coding: utf-8 -*-
from __future__ import annotations

import hashlib
import json
import logging
from typing import Any, Dict, List, Optional, Union

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import HTMLResponse, JSONResponse, Response
from pydantic import BaseModel

from core.catalog import Game, SORT_KEYS, validate_game_data
from core.i18n import LANGUAGES, I18n

from .catalog_store import CatalogStore
from .ui import render_game_card, render_game_grid, render_game_modal

logger = logging.getLogger(__name__)

LANG_COOKIE = "preferred-language"


def get_store(request: Request) -> CatalogStore:
    """Resolve the catalog store from app state (with optional auto-reload)."""

    store: CatalogStore = request.app.state.store  # type: ignore[attr-defined]
    auto = bool(getattr(request.app.state, "auto_reload_catalog", False))
    if auto:
        try:
            store.load(force=False)
        except Exception:
            # do not break requests on reload errors
            logger.exception("Catalog reload failed")
    return store


def get_i18n(request: Request) -> I18n:
    return request.app.state.i18n  # type: ignore[attr-defined]


def resolve_lang(request: Request, lang: Optional[str] = None) -> str:
    """?lang= (or explicit), then cookie, then Accept-Language, then fallback."""
    i18n = get_i18n(request)
    return i18n.detect_language(
        query_lang=lang or request.query_params.get("lang"),
        saved_lang=request.cookies.get(LANG_COOKIE),
        accept_language=request.headers.get("accept-language"),
    )


def _cache_headers(request: Request, *, max_age: int, etag: Optional[str] = None) -> Dict[str, str]:
    if max_age <= 0:
        return {}
    if bool(getattr(request.app.state, "auto_reload_catalog", False)):
        return {}
    headers = {"Cache-Control": f"public, max-age={int(max_age)}"}
    if etag:
        headers["ETag"] = str(etag)
    return headers


def _json(data: Dict[str, Any], *, headers: Optional[Dict[str, str]] = None) -> JSONResponse:
    return JSONResponse(content=data, headers=headers or {})


def _etag(payload: Any) -> str:
    raw = json.dumps(payload, ensure_ascii=False, sort_keys=True).encode("utf-8")
    return '"' + hashlib.sha1(raw).hexdigest()[:16] + '"'


def _public(games: List[Game], lang: str) -> List[Dict[str, Any]]:
    return [g.to_public(lang) for g in games]


def _require_game(store: CatalogStore, game_id: int) -> Game:
    game = store.get_game(game_id)
    if game is None:
        raise HTTPException(status_code=404, detail=f"Game not found: {game_id}")
    return game


router = APIRouter(prefix="/api/v1")


class GameSubmission(BaseModel):
    title: str = ""
    description: str = ""
    category: str = ""
    imageUrl: str = ""
    gameUrl: str = ""
    developer: str = ""
    rating: Optional[Union[float, str]] = None  # validated by validate_game_data


@router.get("/meta")
def api_meta(request: Request, store: CatalogStore = Depends(get_store)):
    return _json(
        {
            "catalog": store.meta(),
            "languages": LANGUAGES,
            "sort_keys": list(SORT_KEYS),
            "lang": resolve_lang(request),
        }
    )


@router.get("/games")
def api_games(
    request: Request,
    category: str = Query("all"),
    q: str = Query(""),
    sort: str = Query(""),
    lang: Optional[str] = Query(None),
    limit: Optional[int] = Query(None, ge=0, le=1000),
    store: CatalogStore = Depends(get_store),
):
    use_lang = resolve_lang(request, lang)
    rows = store.query(category=category, q=q, sort=sort or None, lang=use_lang, limit=limit)
    return _json({"games": _public(rows, use_lang), "count": len(rows), "lang": use_lang})


@router.post("/games")
def api_add_game(payload: GameSubmission, store: CatalogStore = Depends(get_store)):
    data = payload.model_dump() if hasattr(payload, "model_dump") else payload.dict()
    errors = validate_game_data(data)
    if errors:
        return JSONResponse(status_code=422, content={"ok": False, "errors": errors})
    game = store.add(data)
    return JSONResponse(status_code=201, content={"ok": True, "game": game.to_dict()})


@router.get("/games/{game_id}")
def api_game(request: Request, game_id: int, lang: Optional[str] = Query(None), store: CatalogStore = Depends(get_store)):
    use_lang = resolve_lang(request, lang)
    game = _require_game(store, game_id)
    return _json(
        {
            "game": game.to_public(use_lang),
            "related": _public(store.related(game), use_lang),
        }
    )


@router.get("/games/{game_id}/card", response_class=HTMLResponse)
def api_game_card(request: Request, game_id: int, lang: Optional[str] = Query(None), store: CatalogStore = Depends(get_store)):
    use_lang = resolve_lang(request, lang)
    game = _require_game(store, game_id)
    return HTMLResponse(render_game_card(game, get_i18n(request), use_lang))


@router.get("/games/{game_id}/modal", response_class=HTMLResponse)
def api_game_modal(request: Request, game_id: int, lang: Optional[str] = Query(None), store: CatalogStore = Depends(get_store)):
    use_lang = resolve_lang(request, lang)
    game = _require_game(store, game_id)
    return HTMLResponse(render_game_modal(game, store.related(game), get_i18n(request), use_lang))


@router.get("/grid", response_class=HTMLResponse)
def api_grid(
    request: Request,
    category: str = Query("all"),
    q: str = Query(""),
    sort: str = Query(""),
    lang: Optional[str] = Query(None),
    store: CatalogStore = Depends(get_store),
):
    use_lang = resolve_lang(request, lang)
    rows = store.query(category=category, q=q, sort=sort or None, lang=use_lang)
    return HTMLResponse(render_game_grid(rows, get_i18n(request), use_lang))


@router.get("/categories")
def api_categories(request: Request, lang: Optional[str] = Query(None), store: CatalogStore = Depends(get_store)):
    use_lang = resolve_lang(request, lang)
    rows = [dict(c.to_dict(), label=c.name_for(use_lang)) for c in store.categories()]
    payload = {"categories": rows}
    return _json(payload, headers=_cache_headers(request, max_age=300, etag=_etag(payload)))


@router.get("/popular")
def api_popular(request: Request, lang: Optional[str] = Query(None), store: CatalogStore = Depends(get_store)):
    use_lang = resolve_lang(request, lang)
    rows = store.popular()
    return _json({"games": _public(rows, use_lang), "count": len(rows)})


@router.get("/featured")
def api_featured(request: Request, lang: Optional[str] = Query(None), store: CatalogStore = Depends(get_store)):
    use_lang = resolve_lang(request, lang)
    rows = store.featured()
    return _json({"games": _public(rows, use_lang), "count": len(rows)})


@router.get("/stats")
def api_stats(store: CatalogStore = Depends(get_store)):
    return _json(store.stats())


@router.get("/i18n/{lang}")
def api_i18n(request: Request, lang: str):
    i18n = get_i18n(request)
    if not i18n.is_valid_language(lang):
        raise HTTPException(status_code=404, detail=f"Unsupported language: {lang}")
    payload = {"lang": lang, "fallback": i18n.fallback_lang, "translations": i18n.table(lang)}
    return _json(payload, headers=_cache_headers(request, max_age=300, etag=_etag(payload)))


@router.post("/language/{lang}")
def api_set_language(request: Request, lang: str):
    i18n = get_i18n(request)
    if not i18n.is_valid_language(lang):
        raise HTTPException(status_code=404, detail=f"Unsupported language: {lang}")
    resp: Response = _json({"ok": True, "lang": lang})
    resp.set_cookie(LANG_COOKIE, lang, max_age=365 * 24 * 3600, samesite="lax")
    return resp
