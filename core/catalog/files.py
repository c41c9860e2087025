# -*- coding: utf-8 -*-
"""Read / write catalog data files (games.json, categories.json)."""

from __future__ import annotations

import copy
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from core.catalog.fallback import FALLBACK_CATEGORIES, FALLBACK_GAMES
from core.catalog.models import CatalogError, Category, Game, unwrap_list

logger = logging.getLogger(__name__)


def _read_json(path: Path) -> Any:
    try:
        return json.loads(Path(path).read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise CatalogError(f"Data file not found: {path}") from e
    except (OSError, ValueError) as e:
        raise CatalogError(f"Cannot read data file {path}: {e}") from e


def read_games(path: Path) -> List[Game]:
    """Strict read: raise CatalogError on any problem."""
    rows = unwrap_list(_read_json(path), "games")
    if rows is None:
        raise CatalogError(f"Games file has no 'games' list: {path}")
    return [Game.from_dict(r) for r in rows]


def read_categories(path: Path) -> List[Category]:
    rows = unwrap_list(_read_json(path), "categories")
    if rows is None:
        raise CatalogError(f"Categories file has no 'categories' list: {path}")
    return [Category.from_dict(r) for r in rows]


def fallback_games() -> List[Game]:
    return [Game.from_dict(r) for r in copy.deepcopy(FALLBACK_GAMES)]


def fallback_categories() -> List[Category]:
    return [Category.from_dict(r) for r in copy.deepcopy(FALLBACK_CATEGORIES)]


def load_games(path: Optional[Path]) -> Tuple[List[Game], bool]:
    """Load games, falling back to the built-in list.

    Returns (games, used_fallback).
    """
    if path is None:
        return fallback_games(), True
    try:
        return read_games(Path(path)), False
    except CatalogError as e:
        logger.warning("Using fallback games data due to load error: %s", e)
        return fallback_games(), True


def load_categories(path: Optional[Path]) -> Tuple[List[Category], bool]:
    if path is None:
        return fallback_categories(), True
    try:
        return read_categories(Path(path)), False
    except CatalogError as e:
        logger.warning("Using fallback categories data due to load error: %s", e)
        return fallback_categories(), True


def write_games(path: Path, games: List[Game], *, meta: Optional[Dict[str, Any]] = None) -> None:
    doc: Dict[str, Any] = {"games": [g.to_dict() for g in games]}
    if meta:
        doc["meta"] = meta
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(json.dumps(doc, ensure_ascii=False, indent=2), encoding="utf-8")
