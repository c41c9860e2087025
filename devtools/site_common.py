#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Shared helpers for site build tools."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from rich.console import Console
from rich.logging import RichHandler

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from core.config import site_config  # noqa: E402

console = Console()

LOG_LEVELS = ["critical", "error", "warning", "info", "debug"]


def setup_logging(level: str = "info") -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False, markup=False)],
        force=True,
    )


def read_json(path: Path) -> Optional[Any]:
    if not path.exists():
        return None
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return None


def write_json(path: Path, doc: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(doc, ensure_ascii=False, indent=2), encoding="utf-8")


def seo_defaults() -> Dict[str, str]:
    """Site-wide SEO values from conf/settings.ini."""
    return {
        "site_name": site_config.get("SITE", "NAME", "PlayHTML5") or "PlayHTML5",
        "site_url": site_config.site_url(),
        "description": site_config.get("SITE", "DESCRIPTION", "") or "",
        "keywords": site_config.get("SITE", "KEYWORDS", "") or "",
        "og_image": site_config.get("SITE", "OG_IMAGE", "") or "",
    }


def public_dir() -> Path:
    return site_config.path("PUBLIC_DIR")


def src_dir() -> Path:
    return site_config.path("SRC_DIR")
