# -*- coding: utf-8 -*-
"""Site i18n: per-language translation tables with a fallback language.

Keys are dotted paths into nested JSON tables (``games.playNow``). Values may
carry ``{name}`` placeholders that are filled from ``params``.
"""

from __future__ import annotations

import json
import logging
import re
import threading
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

logger = logging.getLogger(__name__)

DEFAULT_LANG = "en"

LANGUAGES: List[Dict[str, str]] = [
    {"code": "en", "name": "English", "flag": "🇺🇸"},
    {"code": "zh", "name": "中文", "flag": "🇨🇳"},
    {"code": "ja", "name": "日本語", "flag": "🇯🇵"},
    {"code": "ko", "name": "한국어", "flag": "🇰🇷"},
]
SUPPORTED_LANGUAGES = tuple(x["code"] for x in LANGUAGES)

_PARAM_RE = re.compile(r"\{(\w+)\}")


def replace_params(text: str, params: Optional[Mapping[str, Any]] = None) -> str:
    """Fill ``{name}`` placeholders; unknown names are left as-is."""
    if not params:
        return text

    def _sub(m: "re.Match[str]") -> str:
        key = m.group(1)
        val = params.get(key)
        return m.group(0) if val is None else str(val)

    return _PARAM_RE.sub(_sub, text)


def fallback_table(lang: str) -> Dict[str, Any]:
    """Minimal built-in table used when a locale file cannot be loaded."""
    zh = lang == "zh"

    def pick(en: str, zh_text: str) -> str:
        return zh_text if zh else en

    return {
        "common": {
            "loading": pick("Loading...", "加载中..."),
            "play": pick("Play", "开始游戏"),
            "playNow": pick("Play Now", "立即游戏"),
            "addGame": pick("Add Game", "添加游戏"),
            "cancel": pick("Cancel", "取消"),
            "submit": pick("Submit", "提交"),
            "close": pick("Close", "关闭"),
            "search": pick("Search", "搜索"),
            "browse": pick("Browse", "浏览"),
            "featured": pick("Featured", "精选"),
            "popular": pick("Popular", "热门"),
            "new": pick("New", "新游戏"),
            "allGames": pick("All Games", "所有游戏"),
        },
        "categories": {
            "action": pick("Action", "动作"),
            "puzzle": pick("Puzzle", "益智"),
            "strategy": pick("Strategy", "策略"),
            "adventure": pick("Adventure", "冒险"),
            "arcade": pick("Arcade", "街机"),
            "card": pick("Card", "卡牌"),
            "sports": pick("Sports", "体育"),
            "educational": pick("Educational", "教育"),
        },
        "navigation": {
            "home": pick("Home", "首页"),
            "categories": pick("Categories", "分类"),
            "featuredGames": pick("Featured Games", "精选游戏"),
            "popular": pick("Popular", "热门"),
            "about": pick("About", "关于"),
        },
    }


def _lookup(table: Any, keys: List[str]) -> Any:
    value = table
    for k in keys:
        if isinstance(value, dict) and k in value:
            value = value[k]
        else:
            return None
    return value


class I18n:
    """Translation lookup with lazy per-language loading (thread-safe)."""

    def __init__(self, locales_dir: Optional[Path] = None, fallback_lang: str = DEFAULT_LANG):
        self.locales_dir = Path(locales_dir) if locales_dir else None
        self.fallback_lang = fallback_lang
        self.current_lang = fallback_lang
        self.translations: Dict[str, Dict[str, Any]] = {}
        self._lock = threading.RLock()

    @staticmethod
    def is_valid_language(lang: Optional[str]) -> bool:
        return bool(lang) and lang in SUPPORTED_LANGUAGES

    @staticmethod
    def supported_languages() -> List[str]:
        return list(SUPPORTED_LANGUAGES)

    def detect_language(
        self,
        query_lang: Optional[str] = None,
        saved_lang: Optional[str] = None,
        accept_language: Optional[str] = None,
    ) -> str:
        """Explicit parameter, then saved preference, then browser language."""
        for cand in (query_lang, saved_lang):
            c = str(cand or "").strip().lower()
            if self.is_valid_language(c):
                return c
        first = str(accept_language or "").split(",")[0].strip()
        primary = first.split(";")[0].split("-")[0].strip().lower()
        if self.is_valid_language(primary):
            return primary
        return self.fallback_lang

    def load_language(self, lang: str) -> Dict[str, Any]:
        with self._lock:
            if lang in self.translations:
                return self.translations[lang]
            table: Optional[Dict[str, Any]] = None
            if self.locales_dir is not None:
                path = self.locales_dir / f"{lang}.json"
                try:
                    doc = json.loads(path.read_text(encoding="utf-8"))
                    if isinstance(doc, dict):
                        table = doc
                    else:
                        logger.warning("Locale file is not an object: %s", path)
                except (OSError, ValueError) as e:
                    logger.warning("Using fallback language data for %s: %s", lang, e)
            if table is None:
                table = fallback_table(lang)
            self.translations[lang] = table
            return table

    def switch_language(self, lang: str) -> bool:
        if not self.is_valid_language(lang) or lang == self.current_lang:
            return False
        self.load_language(lang)
        self.current_lang = lang
        return True

    def t(self, key: str, params: Optional[Mapping[str, Any]] = None, lang: Optional[str] = None) -> str:
        use_lang = lang if self.is_valid_language(lang) else self.current_lang
        keys = str(key).split(".")
        value = _lookup(self.load_language(use_lang), keys)
        if value is None and use_lang != self.fallback_lang:
            value = _lookup(self.load_language(self.fallback_lang), keys)
        if not isinstance(value, str):
            logger.warning("Translation key not found: %s", key)
            return key
        return replace_params(value, params)

    def table(self, lang: str) -> Dict[str, Any]:
        return dict(self.load_language(lang))
