# -*- coding: utf-8 -*-
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from core.config import ConfigLoader, site_config


@dataclass(frozen=True)
class GameSiteSettings:
    """Runtime settings for the listing server.

    Notes
    - games_path / categories_path may be missing: the built-in catalog is used.
    - locales_dir holds <lang>.json tables; missing files fall back to built-in strings.
    - root_path is for reverse-proxy mount (e.g. '/games')
    - from_config reads [SERVER] for root_path, CORS origins and gzip threshold;
      create_app arguments override them.
    """

    games_path: Path
    categories_path: Path
    locales_dir: Path
    root_path: str = ""
    cors_allow_origins: Optional[List[str]] = None
    gzip_minimum_size: int = 800

    @classmethod
    def from_config(cls, config: Optional[ConfigLoader] = None) -> "GameSiteSettings":
        cfg = config or site_config
        src = cfg.path("SRC_DIR")
        origins = [x.strip() for x in (cfg.get("SERVER", "CORS_ALLOW_ORIGINS", "") or "").split(",") if x.strip()]
        try:
            gzip_min = int(cfg.get("SERVER", "GZIP_MINIMUM_SIZE", "800") or 0)
        except ValueError:
            gzip_min = 800
        return cls(
            games_path=src / "data" / "games.json",
            categories_path=src / "data" / "categories.json",
            locales_dir=src / "locales",
            root_path=cls.normalize_root_path(cfg.get("SERVER", "ROOT_PATH", "") or ""),
            cors_allow_origins=(origins or None),
            gzip_minimum_size=gzip_min,
        )

    @staticmethod
    def normalize_root_path(root_path: str) -> str:
        rp = (root_path or "").strip()
        if not rp:
            return ""
        if not rp.startswith("/"):
            rp = "/" + rp
        rp = rp.rstrip("/")
        return rp
