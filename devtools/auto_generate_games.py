#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Generate games.json from the game pages and cover images on disk.

File naming convention: leading ``_``-separated category tags, then the game
name, e.g. ``puzzle_action_2048.html`` -> categories ["puzzle", "action"].

Usage:
  python3 devtools/auto_generate_games.py
  python3 devtools/auto_generate_games.py --games-dir public/games --out public/data/games.json
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from core.schemas.meta import build_meta  # noqa: E402
from devtools.build_cache import dir_sig  # noqa: E402
from devtools.site_common import LOG_LEVELS, console, public_dir, setup_logging, write_json  # noqa: E402

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1

# same ids as the front-end category buttons (lowercase)
CATEGORY_LIST = [
    "all", "new", "popular", "puzzle", "action", "arcade", "strategy",
    "adventure", "card", "sports", "educational", "casual",
]

FIRST_ID = 1001


def parse_categories_from_filename(filename: str) -> List[str]:
    """Leading run of known category tags; ``["other"]`` when there is none."""
    base = str(filename).split(".")[0]
    categories: List[str] = []
    for part in base.split("_"):
        if part.lower() in CATEGORY_LIST:
            categories.append(part.lower())
        else:
            break
    return categories or ["other"]


def find_image(base: str, image_files: Sequence[str]) -> Optional[str]:
    dashed = base.replace("_", "-")
    for img in image_files:
        if img.startswith(base + ".") or img.startswith(dashed + "."):
            return img
    return None


def build_game_entry(gid: int, html_name: str, image_name: str, *, today: Optional[date] = None) -> Dict[str, Any]:
    base = Path(html_name).stem
    upper = base.upper()
    categories = parse_categories_from_filename(html_name)
    return {
        "id": gid,
        "title": {
            "en": f"{upper} Game",
            "zh": f"{upper} 小游戏",
            "ja": f"{upper} ゲーム",
            "ko": f"{upper} 게임",
        },
        "description": {
            "en": f"A brand new HTML5 {', '.join(categories)} game!",
            "zh": f"全新HTML5{'、'.join(categories)}小游戏！",
            "ja": f"新しいHTML5{'・'.join(categories)}ゲーム！",
            "ko": f"새로운 HTML5 {', '.join(categories)} 게임!",
        },
        "image": f"/images/games/{image_name}",
        "category": categories,
        "rating": 4.8,
        "developer": "AutoSync",
        "published": (today or date.today()).isoformat(),
        "plays": "0+",
        "regions": ["global"],
        "url": f"/games/{html_name}",
    }


def generate_games(games_dir: Path, images_dir: Path, *, today: Optional[date] = None) -> List[Dict[str, Any]]:
    """One entry per game page that has a matching cover image."""
    html_files = sorted(p.name for p in Path(games_dir).glob("*.html") if p.is_file())
    image_files = sorted(p.name for p in Path(images_dir).iterdir() if p.is_file()) if Path(images_dir).is_dir() else []

    games: List[Dict[str, Any]] = []
    gid = FIRST_ID - 1
    for html in html_files:
        image = find_image(Path(html).stem, image_files)
        if not image:
            logger.debug("No cover image for %s, skipped", html)
            continue
        gid += 1
        games.append(build_game_entry(gid, html, image, today=today))
    return games


def write_games_file(out_path: Path, games: List[Dict[str, Any]], *, games_dir: Path, images_dir: Path) -> None:
    meta = build_meta(
        schema=SCHEMA_VERSION,
        tool="devtools/auto_generate_games.py",
        sources={
            "games": dir_sig(games_dir, suffixes=[".html"], label="games"),
            "images": dir_sig(images_dir, label="images"),
        },
    )
    write_json(out_path, {"games": games, "meta": meta})


def run(games_dir: Path, images_dir: Path, out_path: Path) -> int:
    if not games_dir.is_dir():
        console.print(f"[red]Games directory not found: {games_dir}[/red]")
        return 2
    games = generate_games(games_dir, images_dir)
    write_games_file(out_path, games, games_dir=games_dir, images_dir=images_dir)
    console.print(f"[green]OK[/green] games.json regenerated with {len(games)} games: {out_path}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    pub = public_dir()
    p = argparse.ArgumentParser(description="Generate games.json from public/games + public/images/games")
    p.add_argument("--games-dir", default=str(pub / "games"), help="Folder with <name>.html game pages")
    p.add_argument("--images-dir", default=str(pub / "images" / "games"), help="Folder with cover images")
    p.add_argument("--out", default=str(pub / "data" / "games.json"), help="Output games.json path")
    p.add_argument("--log-level", default="info", choices=LOG_LEVELS)
    args = p.parse_args(argv)
    setup_logging(args.log_level)

    return run(
        Path(args.games_dir).expanduser().resolve(),
        Path(args.images_dir).expanduser().resolve(),
        Path(args.out).expanduser().resolve(),
    )


if __name__ == "__main__":
    raise SystemExit(main())
