"""
Small file and pattern helpers shared by the candidate sources.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator
from pathlib import Path

import pathspec

MAX_TEXT_BYTES = 2_000_000


def build_pathspec(patterns: Iterable[str]) -> pathspec.PathSpec:
    """Compile gitignore-style patterns; blank lines and ``#`` comments are ignored."""
    return pathspec.PathSpec.from_lines("gitignore", list(patterns))


def read_ignore_file(path: Path) -> list[str]:
    """Read patterns from an ignore file, skipping blanks and comments.

    A missing file yields no patterns.
    """
    if not path.is_file():
        return []
    patterns = []
    for line in path.read_text(encoding="utf-8", errors="replace").splitlines():
        line = line.strip()
        if line and not line.startswith("#"):
            patterns.append(line)
    return patterns


def normalize_relpath(path: str) -> str:
    """``./src/a.py`` -> ``src/a.py``; grep and find print the leading dot."""
    while path.startswith("./"):
        path = path[2:]
    return path


def walk_files(root: Path, prune_dirs: Iterable[str] = ()) -> Iterator[str]:
    """
    Yield project-relative POSIX paths of every file under ``root``.

    Directories named in ``prune_dirs`` are not descended into. Output order is
    deterministic (sorted per directory).
    """
    pruned = set(prune_dirs)
    for dirpath, dirnames, filenames in os.walk(root):
        # in-place so os.walk skips pruned subtrees
        dirnames[:] = sorted(d for d in dirnames if d not in pruned)
        rel_dir = Path(dirpath).relative_to(root)
        for name in sorted(filenames):
            yield (rel_dir / name).as_posix()


def read_text(path: Path, max_bytes: int = MAX_TEXT_BYTES) -> str | None:
    """
    Read a text file for scanning.

    Returns None for files over ``max_bytes`` or containing NUL bytes (binary).
    OS and decoding errors propagate so the caller can record them.
    """
    if path.stat().st_size > max_bytes:
        return None
    raw = path.read_bytes()
    if b"\x00" in raw:
        return None
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        # Latin-1 never fails; used for legacy-encoded sources
        return raw.decode("latin-1")
