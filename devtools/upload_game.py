#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Game upload / management tool.

Subcommands
  upload <json>   add one game (object with title, description, category, ...)
  batch <json>    add every game of a JSON list
  list            print the catalog
  delete <id>     remove a game plus its local html / image files

Usage:
  python3 devtools/upload_game.py upload game.json
"""

from __future__ import annotations

import argparse
import html
import json
import logging
import re
import shutil
import sys
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from core.catalog import CatalogError, Game, new_game_record, read_games, write_games  # noqa: E402
from core.schemas.meta import build_meta  # noqa: E402
from devtools.site_common import LOG_LEVELS, console, setup_logging  # noqa: E402

logger = logging.getLogger(__name__)

DEFAULT_RATING = 4.0
DEFAULT_DEVELOPER = "Unknown"

_GAME_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>__PH_TITLE__ - PlayHTML5</title>
    <style>
        body { margin: 0; padding: 20px; font-family: Arial, sans-serif; background: #f5f5f5; }
        .game-container { max-width: 1200px; margin: 0 auto; background: white; border-radius: 10px; padding: 20px; box-shadow: 0 2px 10px rgba(0,0,0,0.1); }
        .game-header { text-align: center; margin-bottom: 20px; }
        .game-title { font-size: 2em; color: #333; margin-bottom: 10px; }
        .game-description { color: #666; margin-bottom: 20px; }
        .game-frame { width: 100%; height: 600px; border: none; border-radius: 10px; background: #000; }
        .back-button { display: inline-block; padding: 10px 20px; background: #007bff; color: white; text-decoration: none; border-radius: 5px; margin-top: 20px; }
        .back-button:hover { background: #0056b3; }
    </style>
</head>
<body>
    <div class="game-container">
        <div class="game-header">
            <h1 class="game-title">__PH_TITLE__</h1>
            <p class="game-description">__PH_DESCRIPTION__</p>
        </div>
        <iframe class="game-frame" src="__PH_SRC__" allowfullscreen></iframe>
        <div style="text-align: center;">
            <a href="/" class="back-button">&larr; Back to games</a>
        </div>
    </div>
</body>
</html>
"""


def sanitize_file_name(name: str) -> str:
    s = re.sub(r"[^a-z0-9]", "-", str(name or "").lower())
    s = re.sub(r"-+", "-", s)
    return s.strip("-")


def render_game_page(data: Mapping[str, Any]) -> str:
    src = str(data.get("externalUrl") or "about:blank")
    return (
        _GAME_PAGE.replace("__PH_TITLE__", html.escape(str(data.get("title") or "")))
        .replace("__PH_DESCRIPTION__", html.escape(str(data.get("description") or "")))
        .replace("__PH_SRC__", html.escape(src, quote=True))
    )


class GameUploader:
    def __init__(self, project_root: Path = PROJECT_ROOT):
        root = Path(project_root)
        self.project_root = root
        self.public_dir = root / "public"
        self.games_dir = self.public_dir / "games"
        self.images_dir = self.public_dir / "images" / "games"
        self.data_file = root / "src" / "data" / "games.json"
        self.backup_dir = root / "backups"

    def init(self) -> None:
        for d in (self.games_dir, self.images_dir, self.backup_dir):
            d.mkdir(parents=True, exist_ok=True)

    # ---------------- data file ----------------

    def _read(self) -> List[Game]:
        if not self.data_file.exists():
            return []
        return read_games(self.data_file)

    def _write(self, games: List[Game]) -> None:
        write_games(self.data_file, games, meta=build_meta(schema=1, tool="devtools/upload_game.py"))

    def backup_data(self) -> Optional[Path]:
        if not self.data_file.exists():
            return None
        self.backup_dir.mkdir(parents=True, exist_ok=True)
        stamp = datetime.now().strftime("%Y-%m-%dT%H-%M-%S-%f")
        dst = self.backup_dir / f"games-{stamp}.json"
        shutil.copy2(self.data_file, dst)
        logger.info("Data backed up: %s", dst)
        return dst

    # ---------------- files ----------------

    def copy_game_file(self, data: Dict[str, Any], safe: str) -> str:
        dst = self.games_dir / f"{safe}.html"
        dst.parent.mkdir(parents=True, exist_ok=True)
        src = data.get("gameFilePath")
        if src and Path(src).is_file():
            shutil.copy2(src, dst)
            logger.info("Game file copied: %s", dst)
        else:
            dst.write_text(render_game_page(data), encoding="utf-8")
            logger.info("Game page created: %s", dst)
        return f"/games/{safe}.html"

    def copy_game_image(self, data: Dict[str, Any], safe: str) -> str:
        src = data.get("imageFilePath")
        if src and Path(src).is_file():
            ext = Path(src).suffix
            dst = self.images_dir / f"{safe}{ext}"
            dst.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(src, dst)
            logger.info("Game image copied: %s", dst)
            return f"/images/games/{safe}{ext}"
        return f"https://picsum.photos/seed/{safe}/400/300"

    # ---------------- operations ----------------

    @staticmethod
    def next_id(games: List[Game]) -> int:
        return max((g.id for g in games), default=0) + 1

    def upload_game(self, data: Mapping[str, Any], *, today: Optional[date] = None) -> bool:
        title = str(data.get("title") or "").strip()
        if not title:
            logger.error("Upload failed: game data has no title")
            return False
        try:
            games = self._read()
            self.backup_data()
            safe = sanitize_file_name(title)
            url = self.copy_game_file(dict(data), safe)
            image = self.copy_game_image(dict(data), safe)
            game = new_game_record(data, game_id=self.next_id(games), today=today)
            game.url = url
            game.image = image
            if game.rating <= 0:
                game.rating = DEFAULT_RATING
            game.developer = game.developer or DEFAULT_DEVELOPER
            games.insert(0, game)
            self._write(games)
        except (OSError, CatalogError) as e:
            logger.error("Upload failed for %s: %s", title, e)
            return False
        logger.info("Uploaded: %s (id %d)", title, game.id)
        return True

    def batch_upload(self, items: List[Mapping[str, Any]]) -> List[Dict[str, Any]]:
        return [{"game": str(x.get("title") or ""), "success": self.upload_game(x)} for x in items]

    def list_games(self) -> List[Game]:
        try:
            return self._read()
        except CatalogError as e:
            logger.error("Cannot list games: %s", e)
            return []

    def _local_file(self, url: str, prefix: str) -> Optional[Path]:
        if not url.startswith(prefix):
            return None
        return self.public_dir / url.lstrip("/")

    def delete_game(self, game_id: int) -> bool:
        try:
            games = self._read()
        except CatalogError as e:
            logger.error("Cannot delete game: %s", e)
            return False
        game = next((g for g in games if g.id == int(game_id)), None)
        if game is None:
            logger.warning("No game with id %s", game_id)
            return False
        for path in (self._local_file(game.url, "/games/"), self._local_file(game.image, "/images/games/")):
            if path is not None and path.is_file():
                path.unlink()
                logger.info("Removed %s", path)
        games.remove(game)
        try:
            self._write(games)
        except OSError as e:
            logger.error("Cannot write %s: %s", self.data_file, e)
            return False
        logger.info("Deleted: %s (id %d)", game.title_for("en"), game.id)
        return True


def _load_json_arg(path: str) -> Any:
    return json.loads(Path(path).expanduser().read_text(encoding="utf-8"))


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Upload / list / delete catalog games")
    p.add_argument("--root", default=str(PROJECT_ROOT), help="Site project root")
    p.add_argument("--log-level", default="info", choices=LOG_LEVELS)
    sub = p.add_subparsers(dest="command", required=True)
    sp = sub.add_parser("upload", help="Upload one game from a JSON object file")
    sp.add_argument("file")
    sp = sub.add_parser("batch", help="Upload every game from a JSON list file")
    sp.add_argument("file")
    sub.add_parser("list", help="List catalog games")
    sp = sub.add_parser("delete", help="Delete a game by id")
    sp.add_argument("id", type=int)
    args = p.parse_args(argv)
    setup_logging(args.log_level)

    uploader = GameUploader(Path(args.root).expanduser().resolve())
    uploader.init()

    if args.command in ("upload", "batch"):
        try:
            doc = _load_json_arg(args.file)
        except (OSError, ValueError) as e:
            console.print(f"[red]Cannot read {args.file}: {e}[/red]")
            return 2
        if args.command == "upload":
            if not isinstance(doc, dict):
                console.print("[red]Expected a JSON object[/red]")
                return 2
            return 0 if uploader.upload_game(doc) else 1
        if not isinstance(doc, list):
            console.print("[red]Expected a JSON list[/red]")
            return 2
        results = uploader.batch_upload([x for x in doc if isinstance(x, dict)])
        for r in results:
            mark = "[green]OK[/green]" if r["success"] else "[red]FAIL[/red]"
            console.print(f"{mark} {r['game']}")
        return 0 if all(r["success"] for r in results) else 1

    if args.command == "list":
        games = uploader.list_games()
        console.print(f"{len(games)} game(s)")
        for g in games:
            console.print(f"  - {g.title_for('en')} (ID: {g.id})")
        return 0

    return 0 if uploader.delete_game(args.id) else 1


if __name__ == "__main__":
    raise SystemExit(main())
