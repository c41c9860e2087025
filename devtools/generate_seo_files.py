#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Generate SEO files for the public site.

Outputs (into --out, default public/):
  - sitemap.xml            home, legal pages, one URL per game and category
  - robots.txt             Sitemap: line updated (or appended)
  - structured-data.json   schema.org WebSite + first 10 games
  - seo-report.json        generation summary + checklist

Usage:
  python3 devtools/generate_seo_files.py [--site-url URL] [--out DIR]
"""

from __future__ import annotations

import argparse
import logging
import re
import sys
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from core.catalog.models import localized, unwrap_list  # noqa: E402
from core.schemas.meta import now_iso, today_iso  # noqa: E402
from devtools.site_common import (  # noqa: E402
    LOG_LEVELS,
    console,
    public_dir,
    read_json,
    seo_defaults,
    setup_logging,
    src_dir,
    write_json,
)

logger = logging.getLogger(__name__)

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"
LEGAL_PAGES = ("terms.html", "privacy.html", "copyright.html")
STRUCTURED_GAMES_LIMIT = 10

# (loc, changefreq, priority)
SitemapEntry = Tuple[str, str, str]


@dataclass
class SeoConfig:
    site_url: str
    site_name: str
    description: str
    output_dir: Path
    games_path: Path
    categories_path: Path

    @classmethod
    def from_defaults(cls) -> "SeoConfig":
        d = seo_defaults()
        return cls(
            site_url=d["site_url"],
            site_name=d["site_name"],
            description=d["description"],
            output_dir=public_dir(),
            games_path=src_dir() / "data" / "games.json",
            categories_path=src_dir() / "data" / "categories.json",
        )


def _load_rows(path: Path, key: str) -> Optional[List[Dict[str, Any]]]:
    """Rows from a data file, or None (with a warning) when unusable."""
    if not path.exists():
        logger.warning("Data file not found, skipping %s URLs: %s", key, path)
        return None
    rows = unwrap_list(read_json(path), key)
    if rows is None:
        logger.warning("Data file has no usable '%s' list, skipping: %s", key, path)
        return None
    return [r for r in rows if isinstance(r, dict)]


def _absolute(site_url: str, ref: str) -> str:
    if re.match(r"^https?://", ref or ""):
        return ref
    return f"{site_url}{ref}"


def game_entries(cfg: SeoConfig) -> List[SitemapEntry]:
    rows = _load_rows(cfg.games_path, "games") or []
    return [
        (f"{cfg.site_url}/games/{g['id']}.html", "weekly", "0.8")
        for g in rows
        if g.get("id") and g.get("title")
    ]


def category_entries(cfg: SeoConfig) -> List[SitemapEntry]:
    rows = _load_rows(cfg.categories_path, "categories") or []
    return [
        (f"{cfg.site_url}/#{c['id']}", "weekly", "0.6")
        for c in rows
        if c.get("id") and c.get("name")
    ]


def sitemap_entries(cfg: SeoConfig) -> List[SitemapEntry]:
    entries: List[SitemapEntry] = [(f"{cfg.site_url}/", "daily", "1.0")]
    entries += [(f"{cfg.site_url}/{page}", "monthly", "0.3") for page in LEGAL_PAGES]
    entries += game_entries(cfg)
    entries += category_entries(cfg)
    return entries


def render_sitemap(entries: List[SitemapEntry], lastmod: Optional[str] = None) -> str:
    day = lastmod or today_iso()
    urlset = ET.Element("urlset", {"xmlns": SITEMAP_NS})
    for loc, freq, prio in entries:
        url = ET.SubElement(urlset, "url")
        ET.SubElement(url, "loc").text = loc
        ET.SubElement(url, "lastmod").text = day
        ET.SubElement(url, "changefreq").text = freq
        ET.SubElement(url, "priority").text = prio
    ET.indent(urlset, space="  ")
    body = ET.tostring(urlset, encoding="unicode")
    return '<?xml version="1.0" encoding="UTF-8"?>\n' + body + "\n"


def generate_sitemap(cfg: SeoConfig) -> Path:
    out = cfg.output_dir / "sitemap.xml"
    entries = sitemap_entries(cfg)
    out.write_text(render_sitemap(entries), encoding="utf-8")
    logger.info("sitemap.xml written (%d URLs)", len(entries))
    return out


def update_robots_txt(cfg: SeoConfig) -> bool:
    path = cfg.output_dir / "robots.txt"
    if not path.exists():
        logger.warning("robots.txt not found: %s", path)
        return False
    content = path.read_text(encoding="utf-8")
    line = f"Sitemap: {cfg.site_url}/sitemap.xml"
    pattern = re.compile(r"Sitemap: .*")
    if pattern.search(content):
        content = pattern.sub(line, content, count=1)
    else:
        if content and not content.endswith("\n"):
            content += "\n"
        content += f"\n# Sitemap\n{line}\n"
    path.write_text(content, encoding="utf-8")
    logger.info("robots.txt updated")
    return True


def structured_data(cfg: SeoConfig) -> Optional[Dict[str, Any]]:
    rows = _load_rows(cfg.games_path, "games")
    if rows is None:
        return None
    games = []
    for g in rows[:STRUCTURED_GAMES_LIMIT]:
        image = g.get("image")
        cats = g.get("category")
        games.append(
            {
                "@type": "Game",
                "name": localized(g.get("title"), "en"),
                "description": localized(g.get("description"), "en"),
                "image": _absolute(cfg.site_url, image) if image else g.get("imageUrl"),
                "url": _absolute(cfg.site_url, g.get("url") or f"/games/{g.get('id')}.html"),
                "genre": ", ".join(cats) if isinstance(cats, list) and cats else "Game",
            }
        )
    return {
        "@context": "https://schema.org",
        "@type": "WebSite",
        "name": cfg.site_name,
        "description": cfg.description,
        "url": cfg.site_url,
        "potentialAction": {
            "@type": "SearchAction",
            "target": f"{cfg.site_url}/?search={{search_term_string}}",
            "query-input": "required name=search_term_string",
        },
        "game": games,
    }


def generate_structured_data(cfg: SeoConfig) -> Optional[Path]:
    doc = structured_data(cfg)
    if doc is None:
        return None
    out = cfg.output_dir / "structured-data.json"
    write_json(out, doc)
    logger.info("structured-data.json written (%d games)", len(doc["game"]))
    return out


def seo_report(cfg: SeoConfig) -> Dict[str, Any]:
    url = cfg.site_url
    return {
        "generatedAt": now_iso(),
        "siteInfo": {"name": cfg.site_name, "url": url, "description": cfg.description},
        "files": {
            "sitemap": f"{url}/sitemap.xml",
            "robots": f"{url}/robots.txt",
            "terms": f"{url}/terms.html",
            "privacy": f"{url}/privacy.html",
            "copyright": f"{url}/copyright.html",
        },
        "seoChecklist": [
            "sitemap.xml generated",
            "robots.txt configured",
            "legal pages linked",
            "structured data added",
            "meta tags optimized",
            "canonical links set",
            "Open Graph tags configured",
        ],
        "recommendations": [
            "Update sitemap.xml regularly",
            "Monitor Google Search Console",
            "Optimize page load speed",
            "Add more internal links",
            "Create high-quality content",
            "Optimize the mobile experience",
        ],
    }


def generate_seo_report(cfg: SeoConfig) -> Path:
    out = cfg.output_dir / "seo-report.json"
    write_json(out, seo_report(cfg))
    logger.info("seo-report.json written")
    return out


def run(cfg: SeoConfig) -> None:
    cfg.output_dir.mkdir(parents=True, exist_ok=True)
    generate_sitemap(cfg)
    update_robots_txt(cfg)
    generate_structured_data(cfg)
    generate_seo_report(cfg)


def main(argv: Optional[List[str]] = None) -> int:
    cfg = SeoConfig.from_defaults()
    p = argparse.ArgumentParser(description="Generate sitemap.xml, robots.txt, structured data and SEO report")
    p.add_argument("--site-url", default=cfg.site_url)
    p.add_argument("--out", default=str(cfg.output_dir), help="Output directory (default: public/)")
    p.add_argument("--games", default=str(cfg.games_path), help="games.json path")
    p.add_argument("--categories", default=str(cfg.categories_path), help="categories.json path")
    p.add_argument("--log-level", default="info", choices=LOG_LEVELS)
    args = p.parse_args(argv)
    setup_logging(args.log_level)

    cfg.site_url = str(args.site_url).rstrip("/")
    cfg.output_dir = Path(args.out).expanduser().resolve()
    cfg.games_path = Path(args.games).expanduser().resolve()
    cfg.categories_path = Path(args.categories).expanduser().resolve()

    try:
        run(cfg)
    except OSError as e:
        console.print(f"[red]SEO file generation failed: {e}[/red]")
        return 1

    console.print("[green]OK[/green] SEO files generated:")
    for name in ("sitemap.xml", "robots.txt", "structured-data.json", "seo-report.json"):
        console.print(f"  - {cfg.output_dir / name}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
