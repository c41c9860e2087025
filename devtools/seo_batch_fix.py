#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Batch-insert missing SEO tags into static HTML pages.

Every *.html under the root directory gets a one-time .bak backup, then any
missing title / description / keywords / canonical / Open Graph tags and a
JSON-LD WebSite block are inserted right after <head>.

Usage:
  python3 devtools/seo_batch_fix.py [--root public] [--site-url URL]
"""

from __future__ import annotations

import argparse
import html
import json
import logging
import re
import shutil
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from devtools.site_common import LOG_LEVELS, console, public_dir, seo_defaults, setup_logging  # noqa: E402

logger = logging.getLogger(__name__)

_HEAD_RE = re.compile(r"<head[^>]*>", re.IGNORECASE)


@dataclass(frozen=True)
class SeoTags:
    site_url: str
    title: str
    description: str
    keywords: str
    image: str

    @classmethod
    def from_defaults(cls, site_url: Optional[str] = None) -> "SeoTags":
        d = seo_defaults()
        return cls(
            site_url=(site_url or d["site_url"]).rstrip("/"),
            title=f"{d['site_name']} - Free HTML5 Games",
            description=d["description"],
            keywords=d["keywords"],
            image=d["og_image"],
        )


def canonical_path(file_path: Path, root: Path) -> str:
    rel = file_path.relative_to(root).as_posix()
    if rel == "index.html":
        return "/"
    if rel.endswith("/index.html"):
        return "/" + rel[: -len("index.html")]
    return "/" + rel


def _esc(s: str) -> str:
    return html.escape(s, quote=True)


def _has(content: str, pattern: str) -> bool:
    return re.search(pattern, content, re.IGNORECASE) is not None


def missing_tags(content: str, url: str, tags: SeoTags) -> List[str]:
    image = tags.image if tags.image.startswith(("http://", "https://")) else tags.site_url + tags.image
    checks = [
        (r"<title[\s>]", f"<title>{_esc(tags.title)}</title>"),
        (r'<meta\b[^>]*\bname=["\']description["\']', f'<meta name="description" content="{_esc(tags.description)}">'),
        (r'<meta\b[^>]*\bname=["\']keywords["\']', f'<meta name="keywords" content="{_esc(tags.keywords)}">'),
        (r'<link\b[^>]*\brel=["\']canonical["\']', f'<link rel="canonical" href="{_esc(url)}">'),
        (r'<meta\b[^>]*\bproperty=["\']og:title["\']', f'<meta property="og:title" content="{_esc(tags.title)}">'),
        (r'<meta\b[^>]*\bproperty=["\']og:description["\']', f'<meta property="og:description" content="{_esc(tags.description)}">'),
        (r'<meta\b[^>]*\bproperty=["\']og:type["\']', '<meta property="og:type" content="website">'),
        (r'<meta\b[^>]*\bproperty=["\']og:url["\']', f'<meta property="og:url" content="{_esc(url)}">'),
        (r'<meta\b[^>]*\bproperty=["\']og:image["\']', f'<meta property="og:image" content="{_esc(image)}">'),
    ]
    out = [snippet for pattern, snippet in checks if not _has(content, pattern)]
    if not _has(content, r'<script\b[^>]*\btype=["\']application/ld\+json["\']'):
        ld = {
            "@context": "https://schema.org",
            "@type": "WebSite",
            "name": tags.title,
            "url": tags.site_url,
            "description": tags.description,
        }
        out.append(f'<script type="application/ld+json">{json.dumps(ld, ensure_ascii=False)}</script>')
    return out


def fix_content(content: str, url: str, tags: SeoTags) -> Optional[str]:
    """Return patched HTML, or None when nothing is missing (or no <head>)."""
    m = _HEAD_RE.search(content)
    if m is None:
        return None
    snippets = missing_tags(content, url, tags)
    if not snippets:
        return None
    block = "".join(f"\n    {s}" for s in snippets)
    return content[: m.end()] + block + content[m.end():]


def fix_file(path: Path, root: Path, tags: SeoTags) -> bool:
    content = path.read_text(encoding="utf-8")
    url = tags.site_url + canonical_path(path, root)
    patched = fix_content(content, url, tags)
    if patched is None:
        return False
    bak = path.with_name(path.name + ".bak")
    if not bak.exists():
        shutil.copy2(path, bak)
    path.write_text(patched, encoding="utf-8")
    return True


def fix_tree(root: Path, tags: SeoTags) -> Dict[str, List[str]]:
    changed: List[str] = []
    complete: List[str] = []
    for path in sorted(root.rglob("*.html")):
        rel = path.relative_to(root).as_posix()
        try:
            ok = fix_file(path, root, tags)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Skipping %s: %s", rel, e)
            continue
        (changed if ok else complete).append(rel)
        logger.debug("%s: %s", "fixed" if ok else "complete", rel)
    return {"changed": changed, "complete": complete}


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Insert missing SEO tags into HTML files")
    p.add_argument("--root", default="", help="Directory to scan (default: public/)")
    p.add_argument("--site-url", default="", help="Absolute site URL for canonical/og:url")
    p.add_argument("--log-level", default="info", choices=LOG_LEVELS)
    args = p.parse_args(argv)
    setup_logging(args.log_level)

    root = Path(args.root).expanduser().resolve() if args.root else public_dir()
    if not root.is_dir():
        console.print(f"[red]Directory not found: {root}[/red]")
        return 2

    res = fix_tree(root, SeoTags.from_defaults(args.site_url or None))
    for rel in res["changed"]:
        console.print(f"[green]fixed[/green] {rel}")
    console.print(f"{len(res['changed'])} file(s) fixed, {len(res['complete'])} already complete")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
