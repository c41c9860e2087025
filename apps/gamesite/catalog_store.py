# -*- coding: utf-8 -*-
from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from core.catalog import (
    Category,
    Game,
    add_game,
    catalog_stats,
    featured_games,
    filter_by_category,
    find_game,
    load_categories,
    load_games,
    popular_games,
    related_games,
    search_games,
    sort_games,
)

logger = logging.getLogger(__name__)


class CatalogStore:
    """Load + hold the game catalog for request handlers (thread-safe).

    Data source:
      - src/data/games.json       ({"games": [...]} or a bare list)
      - src/data/categories.json  ({"categories": [...]} or a bare list)

    Either file may be missing or broken; the built-in catalog is used instead
    and ``using_fallback`` reports it. A broken categories file never blocks the
    games from loading.
    """

    def __init__(self, games_path: Optional[Path], categories_path: Optional[Path] = None):
        self._games_path = Path(games_path) if games_path else None
        self._categories_path = Path(categories_path) if categories_path else None
        self._lock = threading.RLock()
        self._mtime: float = -1.0
        self._loaded = False

        self._games: List[Game] = []
        self._categories: List[Category] = []
        self._games_fallback = False
        self._categories_fallback = False
        self._by_category: Dict[str, List[int]] = {}

        self.load(force=True)

    @property
    def path(self) -> Optional[Path]:
        return self._games_path

    def _current_mtime(self) -> float:
        if self._games_path is None:
            return -1.0
        try:
            return self._games_path.stat().st_mtime
        except OSError:
            return -1.0

    # ----------------- load / reload -----------------

    def load(self, force: bool = False) -> bool:
        """Load catalog if the games file changed. Returns True if reload occurred."""
        with self._lock:
            mtime = self._current_mtime()
            if (not force) and self._loaded and self._mtime == mtime:
                return False

            games, games_fallback = load_games(self._games_path)
            categories, categories_fallback = load_categories(self._categories_path)

            self._games = games
            self._categories = categories
            self._games_fallback = games_fallback
            self._categories_fallback = categories_fallback
            self._mtime = mtime
            self._loaded = True
            self._build_indexes()
            logger.info(
                "Catalog loaded: %d games, %d categories (fallback games=%s categories=%s)",
                len(games), len(categories), games_fallback, categories_fallback,
            )
            return True

    def _build_indexes(self) -> None:
        by_category: Dict[str, List[int]] = {}
        for g in self._games:
            for cat in g.category:
                by_category.setdefault(cat, []).append(g.id)
        self._by_category = by_category

    # ----------------- reads -----------------

    def meta(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "games": len(self._games),
                "categories": len(self._categories),
                "fallback_games": self._games_fallback,
                "fallback_categories": self._categories_fallback,
                "games_path": str(self._games_path) if self._games_path else None,
                "category_counts": {k: len(v) for k, v in sorted(self._by_category.items())},
            }

    @property
    def using_fallback(self) -> bool:
        with self._lock:
            return self._games_fallback

    def games(self) -> List[Game]:
        with self._lock:
            return list(self._games)

    def categories(self) -> List[Category]:
        with self._lock:
            return list(self._categories)

    def get_game(self, game_id: int) -> Optional[Game]:
        with self._lock:
            return find_game(self._games, game_id)

    def query(
        self,
        *,
        category: Optional[str] = None,
        q: Optional[str] = None,
        sort: Optional[str] = None,
        lang: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[Game]:
        """Filter by category, then search, then sort."""
        with self._lock:
            rows = filter_by_category(self._games, category)
        rows = search_games(rows, q, lang)
        if sort:
            rows = sort_games(rows, sort)
        if limit is not None and limit >= 0:
            rows = rows[:limit]
        return rows

    def related(self, game: Game, limit: int = 3) -> List[Game]:
        with self._lock:
            return related_games(self._games, game, limit=limit)

    def popular(self) -> List[Game]:
        with self._lock:
            return popular_games(self._games)

    def featured(self) -> List[Game]:
        with self._lock:
            return featured_games(self._games)

    def stats(self) -> Dict[str, Any]:
        with self._lock:
            return catalog_stats(self._games, self._categories)

    # ----------------- writes -----------------

    def add(self, data: Mapping[str, Any]) -> Game:
        """Add a submitted game to the in-memory catalog (not persisted)."""
        with self._lock:
            game = add_game(self._games, data)
            self._build_indexes()
            logger.info("Game added in memory: id=%s title=%s", game.id, game.title_for("en"))
            return game
