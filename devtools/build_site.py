#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Build the static multi-language site into dist/.

Steps
1. clean dist/
2. copy public/ + src/{assets,data,locales}
3. render <lang>/<page>.html from the root index.html template
   (title + meta description per language, language switcher injected)
4. write sitemap.xml + robots.txt

Usage:
  python3 devtools/build_site.py [--dist DIR] [--site-url URL]
"""

from __future__ import annotations

import argparse
import logging
import re
import shutil
import sys
from pathlib import Path
from typing import Dict, List, Optional, Sequence

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from core.i18n import LANGUAGES, SUPPORTED_LANGUAGES  # noqa: E402
from core.schemas.meta import today_iso  # noqa: E402
from devtools.site_common import LOG_LEVELS, console, seo_defaults, setup_logging  # noqa: E402

logger = logging.getLogger(__name__)

PAGES = ("index", "games", "news", "guides", "about")

SEO_CONFIG: Dict[str, Dict[str, str]] = {
    "en": {
        "title": "PlayHTML5 - Free HTML5 Games",
        "description": "Play thousands of free HTML5 games online",
        "keywords": "HTML5 games, free games, online games",
    },
    "zh": {
        "title": "PlayHTML5 - 免费HTML5游戏",
        "description": "在线玩数千款免费HTML5游戏",
        "keywords": "HTML5游戏, 免费游戏, 在线游戏",
    },
    "ja": {
        "title": "PlayHTML5 - 無料HTML5ゲーム",
        "description": "オンラインで数千の無料HTML5ゲームをプレイ",
        "keywords": "HTML5ゲーム, 無料ゲーム, オンラインゲーム",
    },
    "ko": {
        "title": "PlayHTML5 - 무료 HTML5 게임",
        "description": "온라인에서 수천 개의 무료 HTML5 게임을 플레이하세요",
        "keywords": "HTML5게임, 무료게임, 온라인게임",
    },
}

SWITCHER_ANCHOR = '<div class="flex items-center space-x-3">'

ROBOTS_TEMPLATE = """User-agent: *
Allow: /

Sitemap: {site_url}/sitemap.xml

# Disallow admin pages
Disallow: /admin/
Disallow: /api/

# Allow static assets
Allow: /assets/
Allow: /images/
Allow: /css/
Allow: /js/
"""


class BuildError(RuntimeError):
    pass


def update_meta_tags(content: str, lang: str) -> str:
    cfg = SEO_CONFIG.get(lang) or SEO_CONFIG["en"]
    content = re.sub(
        r"<title[^>]*>.*?</title>",
        lambda _m: f"<title>{cfg['title']}</title>",
        content,
        count=1,
        flags=re.DOTALL,
    )
    content = re.sub(
        r'<meta name="description" content=".*?"',
        lambda _m: f'<meta name="description" content="{cfg["description"]}"',
        content,
        count=1,
    )
    return content


def language_switcher_html(current_lang: str) -> str:
    buttons = "".join(
        f'<button class="language-option{" active" if x["code"] == current_lang else ""}" '
        f'data-lang="{x["code"]}" onclick="i18n.switchLanguage(\'{x["code"]}\')">'
        f'<span class="flag">{x["flag"]}</span><span class="name">{x["name"]}</span></button>'
        for x in LANGUAGES
    )
    return f'<div id="languageSwitcher" class="flex items-center space-x-2">{buttons}</div>'


def add_language_switcher(content: str, current_lang: str) -> str:
    return content.replace(SWITCHER_ANCHOR, SWITCHER_ANCHOR + language_switcher_html(current_lang), 1)


def render_sitemap(site_url: str, languages: Sequence[str], pages: Sequence[str], lastmod: Optional[str] = None) -> str:
    day = lastmod or today_iso()
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">',
    ]
    for lang in languages:
        prefix = "" if lang == "en" else lang
        for page in pages:
            slug = "" if page == "index" else page
            loc = f"{site_url}/{prefix}/{slug}" if prefix else f"{site_url}/{slug}"
            lines += [
                "  <url>",
                f"    <loc>{loc}</loc>",
                f"    <lastmod>{day}</lastmod>",
                "    <changefreq>weekly</changefreq>",
                "    <priority>0.8</priority>",
                "  </url>",
            ]
    lines.append("</urlset>")
    return "\n".join(lines) + "\n"


class SiteBuilder:
    """Static site build (dist/)."""

    def __init__(
        self,
        project_root: Path = PROJECT_ROOT,
        *,
        dist_dir: Optional[Path] = None,
        site_url: Optional[str] = None,
        languages: Sequence[str] = SUPPORTED_LANGUAGES,
        pages: Sequence[str] = PAGES,
    ):
        self.project_root = Path(project_root)
        self.src_dir = self.project_root / "src"
        self.public_dir = self.project_root / "public"
        self.dist_dir = Path(dist_dir) if dist_dir else (self.project_root / "dist")
        self.template_path = self.project_root / "index.html"
        self.site_url = (site_url or seo_defaults()["site_url"]).rstrip("/")
        self.languages = list(languages)
        self.pages = list(pages)
        self.written: List[Path] = []

    def build(self) -> List[Path]:
        if not self.project_root.is_dir():
            raise BuildError(f"Project root not found: {self.project_root}")
        logger.info("Building static site into %s", self.dist_dir)
        self.clean_dist()
        self.copy_static_assets()
        self.generate_pages()
        self.generate_seo()
        logger.info("Build complete: %d pages", len(self.written))
        return self.written

    def clean_dist(self) -> None:
        if self.dist_dir.exists():
            shutil.rmtree(self.dist_dir)
        self.dist_dir.mkdir(parents=True, exist_ok=True)

    def copy_static_assets(self) -> None:
        if self.public_dir.is_dir():
            shutil.copytree(self.public_dir, self.dist_dir, dirs_exist_ok=True)
        for name in ("assets", "data", "locales"):
            src = self.src_dir / name
            if src.is_dir():
                shutil.copytree(src, self.dist_dir / name, dirs_exist_ok=True)

    def lang_dir(self, lang: str) -> Path:
        return self.dist_dir if lang == "en" else (self.dist_dir / lang)

    def generate_pages(self) -> None:
        if not self.template_path.exists():
            logger.warning("Template not found, no pages generated: %s", self.template_path)
            return
        template = self.template_path.read_text(encoding="utf-8")
        for lang in self.languages:
            out_dir = self.lang_dir(lang)
            out_dir.mkdir(parents=True, exist_ok=True)
            for page in self.pages:
                self.generate_page(template, page, lang, out_dir)

    def generate_page(self, template: str, page: str, lang: str, out_dir: Path) -> Path:
        content = update_meta_tags(template, lang)
        content = add_language_switcher(content, lang)
        out = out_dir / f"{page}.html"
        out.write_text(content, encoding="utf-8")
        self.written.append(out)
        logger.debug("page: %s", out)
        return out

    def generate_seo(self) -> None:
        (self.dist_dir / "sitemap.xml").write_text(
            render_sitemap(self.site_url, self.languages, self.pages), encoding="utf-8"
        )
        (self.dist_dir / "robots.txt").write_text(ROBOTS_TEMPLATE.format(site_url=self.site_url), encoding="utf-8")


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Build the static multi-language site (dist/)")
    p.add_argument("--root", default=str(PROJECT_ROOT), help="Site project root (index.html, public/, src/)")
    p.add_argument("--dist", default="", help="Output directory (default: <root>/dist)")
    p.add_argument("--site-url", default="", help="Absolute site URL used in sitemap/robots")
    p.add_argument("--log-level", default="info", choices=LOG_LEVELS)
    args = p.parse_args(argv)
    setup_logging(args.log_level)

    builder = SiteBuilder(
        Path(args.root).expanduser().resolve(),
        dist_dir=(Path(args.dist).expanduser().resolve() if args.dist else None),
        site_url=(args.site_url or None),
    )
    try:
        pages = builder.build()
    except (OSError, BuildError) as e:
        console.print(f"[red]Build failed: {e}[/red]")
        return 1
    console.print(f"[green]OK[/green] {len(pages)} pages written to {builder.dist_dir}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
