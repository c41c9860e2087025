#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Run the game listing server (FastAPI + Uvicorn).

Usage:
  python3 devtools/serve_site.py --host 0.0.0.0 --port 8080 --no-open
"""

from __future__ import annotations

import argparse
import socket
import sys
import webbrowser
from pathlib import Path
from typing import List, Optional

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import uvicorn  # noqa: E402

from apps.gamesite.app import create_app  # noqa: E402
from apps.gamesite.settings import GameSiteSettings  # noqa: E402
from devtools.site_common import console  # noqa: E402


def _detect_lan_ip() -> str:
    """Best-effort LAN IP discovery (no external network required)."""
    try:
        s = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        # doesn't need to be reachable; used to pick outbound interface
        s.connect(("8.8.8.8", 80))
        ip = s.getsockname()[0]
        s.close()
        return ip
    except OSError:
        return "127.0.0.1"


def _opt_path(raw: str) -> Optional[Path]:
    return Path(raw).expanduser().resolve() if raw else None


def main(argv: Optional[List[str]] = None) -> int:
    defaults = GameSiteSettings.from_config()
    parser = argparse.ArgumentParser(description="PlayHTML5 game listing (FastAPI) server.")
    parser.add_argument("--games", default=str(defaults.games_path), help="games.json path")
    parser.add_argument("--categories", default=str(defaults.categories_path), help="categories.json path")
    parser.add_argument("--locales", default=str(defaults.locales_dir), help="Folder with <lang>.json tables")
    parser.add_argument("--static-dir", default="", help="Public folder served at /static (default: public/)")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--root-path", default=defaults.root_path, help="Reverse proxy mount path, e.g. /play")
    parser.add_argument("--reload-catalog", action="store_true", help="Auto-reload catalog when data files change")
    parser.add_argument("--no-open", action="store_true", help="Do not open browser")
    parser.add_argument("--log-level", default="info", choices=["critical", "error", "warning", "info", "debug", "trace"])
    parser.add_argument("--cors-allow-origin", action="append", default=[], help="CORS allow origin (repeatable)")
    args = parser.parse_args(argv)

    games_path = Path(args.games).expanduser().resolve()
    if not games_path.exists():
        console.print(f"[yellow]Games file not found, serving built-in catalog: {games_path}[/yellow]")

    app = create_app(
        games_path,
        categories_path=_opt_path(args.categories),
        locales_dir=_opt_path(args.locales),
        root_path=args.root_path,
        cors_allow_origins=(args.cors_allow_origin or None),
        settings=defaults,
        auto_reload_catalog=bool(args.reload_catalog),
        static_dir=_opt_path(args.static_dir),
    )

    host = str(args.host)
    port = int(args.port)

    rp = GameSiteSettings.normalize_root_path(args.root_path)
    local_url = f"http://127.0.0.1:{port}{rp}/"
    if host == "0.0.0.0":
        open_url = f"http://{_detect_lan_ip()}:{port}{rp}/"
        console.print(f"PlayHTML5: {open_url}")
        console.print(f"Open (local): {local_url}")
    else:
        open_url = f"http://{host}:{port}{rp}/"
        console.print(f"PlayHTML5: {open_url}")
    console.print(f"Catalog: {games_path}")

    if not args.no_open:
        try:
            webbrowser.open(open_url)
        except webbrowser.Error:
            pass

    uvicorn.run(
        app,
        host=host,
        port=port,
        log_level=args.log_level,
        proxy_headers=True,
        forwarded_allow_ips="*",
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
