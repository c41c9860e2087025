# -*- coding: utf-8 -*-
"""Catalog queries: filter / search / sort / recommend.

All functions are pure over lists of ``Game`` and never mutate their input.
"""

from __future__ import annotations

import re
from datetime import date
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from core.catalog.models import Category, Game
from core.i18n.translator import SUPPORTED_LANGUAGES

ALL_CATEGORY = "all"

SORT_RECOMMENDED = "recommended"
SORT_NEWEST = "newest"
SORT_MOST_PLAYED = "mostPlayed"
SORT_TOP_RATED = "topRated"
SORT_KEYS = (SORT_RECOMMENDED, SORT_NEWEST, SORT_MOST_PLAYED, SORT_TOP_RATED)

REQUIRED_SUBMISSION_FIELDS = ("title", "category", "description", "imageUrl", "gameUrl", "developer")

_PLAYS_RE = re.compile(r"(\d+(?:\.\d+)?)([KMB]?)\+?", re.IGNORECASE)
_PLAYS_UNITS = {"": 1, "K": 1_000, "M": 1_000_000, "B": 1_000_000_000}


def parse_plays(text: Any) -> float:
    """'1.2M' -> 1200000, '890K' -> 890000, '0+' -> 0; unparseable -> 0."""
    m = _PLAYS_RE.search(str(text or ""))
    if not m:
        return 0
    number = float(m.group(1))
    return number * _PLAYS_UNITS[m.group(2).upper()]


def _published(game: Game) -> date:
    try:
        return date.fromisoformat(str(game.published or "")[:10])
    except ValueError:
        return date.min


def recommendation_score(game: Game) -> float:
    is_new = 10 if game.has_category("new") else 0
    return is_new + game.rating * 2 + parse_plays(game.plays) / 100000


def filter_by_category(games: Sequence[Game], category: Optional[str]) -> List[Game]:
    cat = str(category or "").strip().lower()
    if not cat or cat == ALL_CATEGORY:
        return list(games)
    return [g for g in games if g.has_category(cat)]


def search_games(games: Sequence[Game], query: Optional[str], lang: Optional[str] = None) -> List[Game]:
    q = str(query or "").strip().lower()
    if not q:
        return list(games)
    out: List[Game] = []
    for g in games:
        if q in g.title_for(lang).lower() or q in g.description_for(lang).lower():
            out.append(g)
    return out


def sort_games(games: Sequence[Game], sort_by: Optional[str] = None) -> List[Game]:
    key = str(sort_by or SORT_RECOMMENDED)
    if key == SORT_NEWEST:
        return sorted(games, key=_published, reverse=True)
    if key == SORT_MOST_PLAYED:
        return sorted(games, key=lambda g: parse_plays(g.plays), reverse=True)
    if key == SORT_TOP_RATED:
        return sorted(games, key=lambda g: g.rating, reverse=True)
    return sorted(games, key=recommendation_score, reverse=True)


def find_game(games: Iterable[Game], game_id: int) -> Optional[Game]:
    for g in games:
        if g.id == game_id:
            return g
    return None


def related_games(games: Sequence[Game], game: Game, limit: int = 3) -> List[Game]:
    """Same-category games first, topped up with same-developer games."""
    cats = set(game.category)
    related = [g for g in games if g.id != game.id and cats.intersection(g.category)]
    if len(related) < 3:
        seen = {g.id for g in related}
        related += [
            g for g in games
            if g.id != game.id and g.developer == game.developer and g.id not in seen
        ]
    return related[: max(0, int(limit))]


def popular_games(games: Sequence[Game]) -> List[Game]:
    return [g for g in games if g.has_category("popular")]


def featured_games(games: Sequence[Game]) -> List[Game]:
    return [g for g in games if g.has_category("new") or g.has_category("featured")]


def catalog_stats(games: Sequence[Game], categories: Sequence[Category]) -> Dict[str, Any]:
    total = len(games)
    return {
        "totalGames": total,
        "categories": len(categories),
        "averageRating": (sum(g.rating for g in games) / total) if total else 0,
        "totalPlays": sum(parse_plays(g.plays) for g in games),
    }


def validate_game_data(data: Mapping[str, Any]) -> List[str]:
    errors: List[str] = []
    for name in REQUIRED_SUBMISSION_FIELDS:
        val = data.get(name)
        if val is None or not str(val).strip():
            errors.append(f"Please fill in the {name} field.")
    try:
        rating = float(data.get("rating"))
    except (TypeError, ValueError):
        rating = None
    if rating is None or not 1 <= rating <= 5:
        errors.append("Rating must be between 1 and 5.")
    return errors


def new_game_record(
    data: Mapping[str, Any],
    *,
    game_id: int,
    languages: Sequence[str] = SUPPORTED_LANGUAGES,
    today: Optional[date] = None,
) -> Game:
    """Build a catalog record from a submission; text is copied to every language."""
    title = str(data.get("title") or "").strip()
    description = str(data.get("description") or "").strip()
    try:
        rating = float(data.get("rating"))
    except (TypeError, ValueError):
        rating = 0.0
    return Game(
        id=int(game_id),
        title={lang: title for lang in languages},
        description={lang: description for lang in languages},
        category=[str(data.get("category") or "").strip().lower()],
        image=str(data.get("imageUrl") or data.get("image") or ""),
        url=str(data.get("gameUrl") or data.get("url") or ""),
        rating=rating,
        plays="0+",
        developer=str(data.get("developer") or ""),
        published=(today or date.today()).isoformat(),
        regions=["global"],
    )


def add_game(games: List[Game], data: Mapping[str, Any], *, today: Optional[date] = None) -> Game:
    """In-memory add: id = len + 1 (kept past the highest id), inserted first."""
    next_id = max([len(games)] + [g.id for g in games]) + 1
    game = new_game_record(data, game_id=next_id, today=today)
    games.insert(0, game)
    return game
