#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Watch source folders and keep public/ in sync.

Rules
- src/data            -> public/data   (copy on add/change, delete on unlink)
- src/assets/js       -> public/js
- public/games        -> regenerate games.json
- public/images/games -> optimize images, then regenerate games.json

Changes are detected by polling file signatures (mtime + size).

Usage:
  python3 devtools/watch_sync.py [--interval 1.0] [--once]
"""

from __future__ import annotations

import argparse
import logging
import shutil
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from devtools import auto_generate_games, image_optimize  # noqa: E402
from devtools.build_cache import Snapshot, diff_snapshots, snapshot  # noqa: E402
from devtools.site_common import LOG_LEVELS, console, setup_logging  # noqa: E402

logger = logging.getLogger(__name__)

ACTION_REGENERATE = "regenerate"
ACTION_OPTIMIZE = "optimize"


@dataclass(frozen=True)
class WatchRule:
    src: str
    dest: Optional[str] = None
    action: Optional[str] = None


WATCH_RULES: Tuple[WatchRule, ...] = (
    WatchRule("src/data", dest="public/data"),
    WatchRule("src/assets/js", dest="public/js"),
    WatchRule("public/games", action=ACTION_REGENERATE),
    WatchRule("public/images/games", action=ACTION_OPTIMIZE),
)


class WatchSync:
    def __init__(self, project_root: Path = PROJECT_ROOT, rules: Tuple[WatchRule, ...] = WATCH_RULES):
        self.root = Path(project_root)
        self.rules = rules
        self._snaps: Dict[str, Snapshot] = {}

    def prime(self) -> None:
        """Record the current state; only later changes trigger actions."""
        for rule in self.rules:
            self._snaps[rule.src] = snapshot(self.root / rule.src)

    def sync_file(self, rule: WatchRule, event: str, rel: str) -> None:
        src = self.root / rule.src / rel
        dst = self.root / str(rule.dest) / rel
        if event == "unlink":
            if dst.exists():
                dst.unlink()
                console.print(f"[yellow]deleted[/yellow] {dst.relative_to(self.root)}")
            return
        dst.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(src, dst)
        console.print(f"[green]synced[/green] {rule.src}/{rel} -> {rule.dest}/{rel}")

    def regenerate(self) -> int:
        pub = self.root / "public"
        return auto_generate_games.run(pub / "games", pub / "images" / "games", pub / "data" / "games.json")

    def optimize(self) -> bool:
        res = image_optimize.optimize_dir(self.root / "public" / "images" / "games")
        for name in res["failed"]:
            logger.warning("Image optimize failed: %s", name)
        return not res["failed"]

    def scan(self) -> List[Tuple[str, str, str]]:
        """Diff every rule once and run its actions; returns (src, event, rel)."""
        seen: List[Tuple[str, str, str]] = []
        for rule in self.rules:
            base = self.root / rule.src
            new = snapshot(base)
            events = diff_snapshots(self._snaps.get(rule.src, {}), new)
            self._snaps[rule.src] = new
            if not events:
                continue
            seen.extend((rule.src, ev, rel) for ev, rel in events)
            if rule.dest:
                for ev, rel in events:
                    try:
                        self.sync_file(rule, ev, rel)
                    except OSError as e:
                        logger.error("Sync failed for %s/%s: %s", rule.src, rel, e)
            if rule.action == ACTION_OPTIMIZE:
                self.optimize()
                # optimizer output lands in the watched folder
                self._snaps[rule.src] = snapshot(base)
                self.regenerate()
            elif rule.action == ACTION_REGENERATE:
                self.regenerate()
        return seen

    def run(self, interval: float = 1.0) -> None:
        self.prime()
        console.print("Watching " + ", ".join(r.src for r in self.rules) + " (Ctrl+C to stop)")
        try:
            while True:
                time.sleep(interval)
                self.scan()
        except KeyboardInterrupt:
            console.print("stopped")


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Sync src/ into public/ and regenerate the catalog on changes")
    p.add_argument("--root", default=str(PROJECT_ROOT), help="Site project root")
    p.add_argument("--interval", type=float, default=1.0, help="Polling interval in seconds")
    p.add_argument("--once", action="store_true", help="Sync everything once and exit")
    p.add_argument("--log-level", default="info", choices=LOG_LEVELS)
    args = p.parse_args(argv)
    setup_logging(args.log_level)

    watcher = WatchSync(Path(args.root).expanduser().resolve())
    if args.once:
        events = watcher.scan()
        console.print(f"{len(events)} change(s) processed")
        return 0
    watcher.run(max(0.1, float(args.interval)))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
