# -*- coding: utf-8 -*-
"""Game catalog records.

Records are kept close to the JSON shape of ``games.json`` /
``categories.json``: localized fields stay as ``{lang: text}`` maps and any
unknown key is preserved in ``raw`` so rewriting a data file never drops
fields added by hand.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

LocalizedText = Union[str, Dict[str, str]]

DEFAULT_LANG = "en"


class CatalogError(RuntimeError):
    pass


def localized(value: Any, lang: Optional[str], fallback: str = DEFAULT_LANG) -> str:
    """Pick the text for ``lang`` from a localized map (or return a plain string)."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if not isinstance(value, dict):
        return str(value)
    if lang and value.get(lang):
        return str(value[lang])
    if value.get(fallback):
        return str(value[fallback])
    for v in value.values():
        if v:
            return str(v)
    return ""


def _as_str_list(raw: Any) -> List[str]:
    if raw is None:
        return []
    if isinstance(raw, str):
        return [raw] if raw else []
    if isinstance(raw, (list, tuple, set)):
        return [str(x) for x in raw if x]
    return []


def _as_float(raw: Any) -> float:
    try:
        return float(raw)
    except (TypeError, ValueError):
        return 0.0


@dataclass
class Game:
    id: int
    title: LocalizedText
    description: LocalizedText
    category: List[str] = field(default_factory=list)
    image: str = ""
    url: str = ""
    rating: float = 0.0
    plays: str = "0+"
    developer: str = ""
    published: str = ""
    regions: List[str] = field(default_factory=lambda: ["global"])
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Game":
        if not isinstance(raw, dict):
            raise CatalogError(f"Game record must be an object, got {type(raw).__name__}")
        try:
            gid = int(raw.get("id"))
        except (TypeError, ValueError) as e:
            raise CatalogError(f"Game record has no usable id: {raw.get('id')!r}") from e
        regions = _as_str_list(raw.get("regions")) or ["global"]
        return cls(
            id=gid,
            title=raw.get("title") or "",
            description=raw.get("description") or "",
            category=[c.lower() for c in _as_str_list(raw.get("category"))],
            image=str(raw.get("image") or raw.get("imageUrl") or ""),
            url=str(raw.get("url") or ""),
            rating=_as_float(raw.get("rating")),
            plays=str(raw.get("plays") or "0+"),
            developer=str(raw.get("developer") or ""),
            published=str(raw.get("published") or ""),
            regions=regions,
            raw=dict(raw),
        )

    def to_dict(self) -> Dict[str, Any]:
        out = dict(self.raw)
        out.update(
            {
                "id": self.id,
                "title": self.title,
                "description": self.description,
                "category": list(self.category),
                "image": self.image,
                "url": self.url,
                "rating": self.rating,
                "plays": self.plays,
                "developer": self.developer,
                "published": self.published,
                "regions": list(self.regions),
            }
        )
        return out

    def title_for(self, lang: Optional[str]) -> str:
        return localized(self.title, lang)

    def description_for(self, lang: Optional[str]) -> str:
        return localized(self.description, lang)

    def has_category(self, category: str) -> bool:
        return category in self.category

    def to_public(self, lang: Optional[str]) -> Dict[str, Any]:
        """Flattened view for API consumers (localized text resolved)."""
        out = self.to_dict()
        out["title"] = self.title_for(lang)
        out["description"] = self.description_for(lang)
        return out


@dataclass
class Category:
    id: str
    name: LocalizedText
    color: str = "primary"
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Category":
        if not isinstance(raw, dict) or not raw.get("id"):
            raise CatalogError(f"Category record needs an id: {raw!r}")
        return cls(
            id=str(raw["id"]).lower(),
            name=raw.get("name") or str(raw["id"]),
            color=str(raw.get("color") or "primary"),
            raw=dict(raw),
        )

    def to_dict(self) -> Dict[str, Any]:
        out = dict(self.raw)
        out.update({"id": self.id, "name": self.name, "color": self.color})
        return out

    def name_for(self, lang: Optional[str]) -> str:
        return localized(self.name, lang)


def unwrap_list(doc: Any, key: str) -> Optional[List[Any]]:
    """Accept both ``{key: [...]}`` and a bare list."""
    if isinstance(doc, list):
        return doc
    if isinstance(doc, dict) and isinstance(doc.get(key), list):
        return doc[key]
    return None
