# -*- coding: utf-8 -*-
"""Game catalog: records, data files and queries."""

from core.catalog.files import (
    fallback_categories,
    fallback_games,
    load_categories,
    load_games,
    read_categories,
    read_games,
    write_games,
)
from core.catalog.models import CatalogError, Category, Game, localized
from core.catalog.query import (
    SORT_KEYS,
    add_game,
    catalog_stats,
    featured_games,
    filter_by_category,
    find_game,
    new_game_record,
    parse_plays,
    popular_games,
    recommendation_score,
    related_games,
    search_games,
    sort_games,
    validate_game_data,
)

__all__ = [
    "CatalogError",
    "Category",
    "Game",
    "SORT_KEYS",
    "add_game",
    "catalog_stats",
    "fallback_categories",
    "fallback_games",
    "featured_games",
    "filter_by_category",
    "find_game",
    "load_categories",
    "load_games",
    "localized",
    "new_game_record",
    "parse_plays",
    "popular_games",
    "read_categories",
    "read_games",
    "recommendation_score",
    "related_games",
    "search_games",
    "sort_games",
    "validate_game_data",
    "write_games",
]
