#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Compress game cover images to webp + jpg and write SEO alt texts.

Input:  public/images/games/*.{png,jpg,jpeg}
Output: <safe-name>.webp + <safe-name>.jpg (fit inside 800x600, quality 80)
        images-alt.json  (file name -> alt text)

The original image is deleted only when both outputs were written.
"""

from __future__ import annotations

import argparse
import logging
import re
import sys
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from PIL import Image

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from devtools.site_common import LOG_LEVELS, console, public_dir, setup_logging, write_json  # noqa: E402

logger = logging.getLogger(__name__)

MAX_SIZE: Tuple[int, int] = (800, 600)
QUALITY = 80
ALT_FILE = "images-alt.json"

_SOURCE_RE = re.compile(r"\.(jpg|jpeg|png)$", re.IGNORECASE)
_OPTIMIZED_RE = re.compile(r"^(.*)-[a-z0-9]+\.(webp|jpg)$", re.IGNORECASE)
_OUTPUT_RE = re.compile(r"\.(webp|jpg)$", re.IGNORECASE)
_UNSAFE_RE = re.compile(r"[^a-z0-9]+")


def safe_name(stem: str) -> str:
    return _UNSAFE_RE.sub("-", stem.lower())


def is_optimized_file(name: str) -> bool:
    return bool(_OPTIMIZED_RE.match(name))


def parse_meta(name: str) -> Dict[str, str]:
    """``puzzle-2048-game`` -> category puzzle, name 2048, keyword '2048 game'."""
    base = name.split(".")[0]
    parts = base.split("-")
    category = parts[0] or "game"
    label = " ".join(parts[1:-1])
    keyword = " ".join(parts[1:])
    return {
        "category": category,
        "name": label or category,
        "keyword": keyword or category,
    }


def alt_text(name: str) -> str:
    m = parse_meta(name)
    return (
        f"{m['category']} {m['name']} html5 game, "
        f"{m['keyword']} online play, free {m['category']} game"
    )


def _fit(img: Image.Image) -> Image.Image:
    out = img.copy()
    out.thumbnail(MAX_SIZE, Image.LANCZOS)
    return out


def _to_rgb(img: Image.Image) -> Image.Image:
    if img.mode in ("RGBA", "LA") or (img.mode == "P" and "transparency" in img.info):
        rgba = img.convert("RGBA")
        bg = Image.new("RGB", rgba.size, (255, 255, 255))
        bg.paste(rgba, mask=rgba.split()[-1])
        return bg
    return img.convert("RGB")


def optimize_image(src: Path, out_dir: Path) -> Tuple[bool, str]:
    """Write <safe>.webp and <safe>.jpg; remove ``src`` when both succeed."""
    safe = safe_name(src.stem)
    webp_path = out_dir / f"{safe}.webp"
    jpg_path = out_dir / f"{safe}.jpg"
    webp_ok = jpg_ok = False
    try:
        with Image.open(src) as im:
            im.load()
            fitted = _fit(im)
        webp_src = fitted if fitted.mode in ("RGB", "RGBA") else fitted.convert("RGBA")
        webp_src.save(webp_path, "WEBP", quality=QUALITY)
        webp_ok = True
        _to_rgb(fitted).save(jpg_path, "JPEG", quality=QUALITY, optimize=True)
        jpg_ok = True
        logger.info("[optimize] %s -> %s.webp / %s.jpg", src.name, safe, safe)
    except (OSError, ValueError) as e:
        logger.error("[optimize failed] %s: %s", src.name, e)

    if webp_ok and jpg_ok:
        # jpg output may have the same path as a .jpg source
        if src.resolve() != jpg_path.resolve():
            src.unlink()
            logger.info("[cleanup] removed original %s", src.name)
        return True, safe
    logger.warning("[kept] original image not optimized: %s", src.name)
    return False, safe


def build_alt_map(images_dir: Path) -> Dict[str, str]:
    return {
        p.name: alt_text(p.stem)
        for p in sorted(images_dir.iterdir())
        if p.is_file() and _OUTPUT_RE.search(p.name)
    }


def optimize_dir(images_dir: Path) -> Dict[str, object]:
    images_dir = Path(images_dir)
    sources = sorted(p for p in images_dir.iterdir() if p.is_file() and _SOURCE_RE.search(p.name))
    optimized: List[str] = []
    failed: List[str] = []
    for src in sources:
        if is_optimized_file(src.name):
            continue
        ok, _ = optimize_image(src, images_dir)
        (optimized if ok else failed).append(src.name)

    alt_map = build_alt_map(images_dir)
    write_json(images_dir / ALT_FILE, alt_map)
    return {"optimized": optimized, "failed": failed, "alt": alt_map}


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Optimize game cover images (webp + jpg) and write alt texts")
    p.add_argument("--images-dir", default=str(public_dir() / "images" / "games"))
    p.add_argument("--log-level", default="info", choices=LOG_LEVELS)
    args = p.parse_args(argv)
    setup_logging(args.log_level)

    images_dir = Path(args.images_dir).expanduser().resolve()
    if not images_dir.is_dir():
        console.print(f"[red]Images directory not found: {images_dir}[/red]")
        return 2

    result = optimize_dir(images_dir)
    console.print(
        f"[green]OK[/green] optimized={len(result['optimized'])} failed={len(result['failed'])} "
        f"alt entries={len(result['alt'])} -> {images_dir / ALT_FILE}"
    )
    return 1 if result["failed"] else 0


if __name__ == "__main__":
    raise SystemExit(main())
