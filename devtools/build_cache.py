#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""File signatures for change detection (watch / incremental tools)."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple

Snapshot = Dict[str, Tuple[int, int]]


def file_sig(path: Path) -> Dict[str, Any]:
    p = Path(path)
    if not p.exists():
        return {"path": str(p), "exists": False}
    try:
        st = p.stat()
        return {
            "path": str(p),
            "exists": True,
            "mtime_ns": int(st.st_mtime_ns),
            "size": int(st.st_size),
        }
    except OSError:
        return {"path": str(p), "exists": False}


def files_sig(paths: Iterable[Path], *, label: str = "") -> Dict[str, Any]:
    count = 0
    max_mtime = 0
    total_size = 0
    for p in paths:
        try:
            st = p.stat()
        except OSError:
            continue
        count += 1
        total_size += int(st.st_size)
        max_mtime = max(max_mtime, int(st.st_mtime_ns))
    return {
        "label": label,
        "count": count,
        "max_mtime_ns": max_mtime,
        "total_size": total_size,
    }


def _iter_files(path: Path, suffixes: Optional[Iterable[str]], glob: str) -> List[Path]:
    suffixes_lc = {s.lower() for s in (suffixes or [])}
    files = []
    for fp in path.rglob(glob):
        if not fp.is_file():
            continue
        if suffixes_lc and fp.suffix.lower() not in suffixes_lc:
            continue
        files.append(fp)
    return files


def dir_sig(
    path: Path,
    *,
    suffixes: Optional[Iterable[str]] = None,
    glob: str = "*",
    label: str = "",
) -> Dict[str, Any]:
    p = Path(path)
    if not p.exists() or not p.is_dir():
        return {"path": str(p), "exists": False, "label": label}
    base = files_sig(_iter_files(p, suffixes, glob), label=label)
    base["path"] = str(p)
    base["exists"] = True
    return base


def snapshot(path: Path, *, suffixes: Optional[Iterable[str]] = None) -> Snapshot:
    """Relative path -> (mtime_ns, size) for every file under ``path``."""
    p = Path(path)
    if not p.is_dir():
        return {}
    out: Snapshot = {}
    for fp in _iter_files(p, suffixes, "*"):
        try:
            st = fp.stat()
        except OSError:
            continue
        out[fp.relative_to(p).as_posix()] = (int(st.st_mtime_ns), int(st.st_size))
    return out


def diff_snapshots(old: Snapshot, new: Snapshot) -> List[Tuple[str, str]]:
    """Return sorted (event, relpath) with event in add|change|unlink."""
    events: List[Tuple[str, str]] = []
    for rel, sig in new.items():
        if rel not in old:
            events.append(("add", rel))
        elif old[rel] != sig:
            events.append(("change", rel))
    for rel in old:
        if rel not in new:
            events.append(("unlink", rel))
    events.sort(key=lambda x: (x[1], x[0]))
    return events
