#!/usr/bin/env python3
# -*- coding: utf-8 -*-
from __future__ import annotations

import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from rich import box
from rich.align import Align
from rich.columns import Columns
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

PROJECT_ROOT = Path(__file__).resolve().parents[3]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from apps.cli.registry import get_tools  # noqa: E402
from core.catalog import catalog_stats, load_categories, load_games  # noqa: E402
from core.config import site_config  # noqa: E402
from core.version import data_version, project_version  # noqa: E402

console = Console()

PALETTE = {
    "accent": "cyan",
    "muted": "grey70",
    "good": "green",
    "warn": "yellow",
    "bad": "red",
}


def _panel(title: str, body: Any, *, border: str = "cyan") -> Panel:
    return Panel(
        body,
        title=title,
        title_align="left",
        border_style=border,
        box=box.MINIMAL,
        padding=(1, 1),
    )


def _kv_table(rows: List[Tuple[str, Any]]) -> Table:
    table = Table.grid(padding=(0, 1))
    table.add_column(justify="right", style="bold", no_wrap=True)
    table.add_column(ratio=1)
    for key, value in rows:
        table.add_row(str(key), value if value is not None else "-")
    return table


def _human_size(num: int) -> str:
    if num <= 0:
        return "-"
    for unit in ("B", "KiB", "MiB"):
        if num < 1024.0:
            return f"{num:.0f} {unit}" if unit == "B" else f"{num:.1f} {unit}"
        num /= 1024.0
    return f"{num:.1f} GiB"


def _human_mtime(ts: Optional[float]) -> str:
    if not ts:
        return "-"
    return datetime.fromtimestamp(ts).strftime("%Y-%m-%d %H:%M")


def _artifact_rows() -> List[Tuple[str, Path]]:
    src = site_config.path("SRC_DIR")
    pub = site_config.path("PUBLIC_DIR")
    dist = site_config.path("DIST_DIR")
    return [
        ("games", src / "data" / "games.json"),
        ("categories", src / "data" / "categories.json"),
        ("public games", pub / "data" / "games.json"),
        ("sitemap", pub / "sitemap.xml"),
        ("robots", pub / "robots.txt"),
        ("seo report", pub / "seo-report.json"),
        ("dist index", dist / "index.html"),
    ]


def _panel_header(ver: str, data_ver: str) -> Panel:
    title = Text("PlayHTML5 Dashboard", style="bold white")
    meta = Text(f"version {ver} | data {data_ver} | {site_config.site_url()}", style="dim")
    content = Group(Align.center(title), Align.center(meta))
    return Panel(content, border_style=PALETTE["accent"], box=box.MINIMAL_DOUBLE_HEAD, padding=(1, 1))


def _panel_overview(ver: str, data_ver: str) -> Panel:
    rows = [
        ("Site", site_config.get("SITE", "NAME", "PlayHTML5")),
        ("URL", site_config.site_url()),
        ("Version", ver),
        ("Data", data_ver),
        ("Languages", ", ".join(site_config.languages())),
        ("Root", str(PROJECT_ROOT)),
    ]
    return _panel("Overview", _kv_table(rows), border=PALETTE["accent"])


def _panel_catalog() -> Panel:
    data_dir = site_config.path("SRC_DIR") / "data"
    games, games_fb = load_games(data_dir / "games.json")
    categories, cats_fb = load_categories(data_dir / "categories.json")
    stats = catalog_stats(games, categories)
    source = Text("built-in fallback", style=f"bold {PALETTE['warn']}") if (games_fb or cats_fb) else Text(
        "data files", style=f"bold {PALETTE['good']}"
    )
    rows: List[Tuple[str, Any]] = [
        ("Source", source),
        ("Games", str(stats["totalGames"])),
        ("Categories", str(stats["categories"])),
        ("Avg rating", f"{stats['averageRating']:.2f}"),
        ("Plays", f"{stats['totalPlays']:,.0f}"),
    ]
    return _panel("Catalog", _kv_table(rows), border=PALETTE["warn"] if (games_fb or cats_fb) else PALETTE["good"])


def _panel_artifacts() -> Panel:
    table = Table(box=box.SIMPLE, show_header=True, header_style="bold")
    table.add_column("Artifact", style="bold", no_wrap=True)
    table.add_column("Size", justify="right")
    table.add_column("Updated")
    for label, path in _artifact_rows():
        if path.exists():
            st = path.stat()
            table.add_row(label, _human_size(int(st.st_size)), _human_mtime(st.st_mtime))
        else:
            table.add_row(label, Text("missing", style=PALETTE["muted"]), "-")
    return _panel("Artifacts", table, border=PALETTE["accent"])


def _render_tools(unknown: Optional[str] = None) -> None:
    table = Table(title="Commands", box=box.MINIMAL, show_header=True, header_style="bold cyan")
    table.add_column("Type", style="bold", no_wrap=True)
    table.add_column("Command", style="bold", no_wrap=True)
    table.add_column("Details", ratio=1)

    last_type = ""
    for tool in get_tools():
        name = tool.get("alias") or tool.get("file") or "-"
        kind = str(tool.get("type") or "")
        details = Text(tool.get("desc", "-"))
        usage = tool.get("usage") or ""
        if usage:
            details.append("\n")
            details.append(usage, style="dim")
        table.add_row(kind if kind != last_type else "", f"playhtml5 {name}", details)
        last_type = kind

    console.print(table)
    if unknown:
        console.print(f"[{PALETTE['bad']}]Unknown command: {unknown}[/{PALETTE['bad']}]")


def main() -> None:
    unknown = sys.argv[1] if len(sys.argv) > 1 else None
    ver = project_version()
    data_ver = data_version()

    console.print(_panel_header(ver, data_ver))
    console.print(Columns([_panel_overview(ver, data_ver), _panel_catalog()], equal=True, expand=True))
    console.print(_panel_artifacts())
    console.print("")
    _render_tools(unknown)
    console.print("\n[dim]Tips: playhtml5 gen | playhtml5 seo | playhtml5 build | playhtml5 serve[/dim]")


if __name__ == "__main__":
    main()
