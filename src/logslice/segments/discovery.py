"""Find the segment files of an archive on disk.

Segments are named LogFile-<n>.log and may sit in nested folders. They
are returned in natural order (LogFile-2 before LogFile-10), which is
the chronological order the archive is written in.
"""
from __future__ import annotations

import re
from pathlib import Path

SEGMENT_GLOB = "LogFile-*.log"

_DIGITS = re.compile(r"(\d+)")


def natural_key(path: Path) -> tuple:
    """Sort key that compares digit runs numerically, per path component."""
    return tuple(
        # split() alternates text, digits, text, ... so odd slots are numbers
        tuple(
            int(part) if i % 2 else part
            for i, part in enumerate(_DIGITS.split(component))
        )
        for component in path.parts
    )


def discover_segments(root: Path, pattern: str = SEGMENT_GLOB) -> list[Path]:
    """All files under root matching pattern, recursively, in natural order."""
    if not root.is_dir():
        raise NotADirectoryError(f"Not a directory: {root}")
    return sorted(
        (p for p in root.rglob(pattern) if p.is_file()),
        key=lambda p: natural_key(p.relative_to(root)),
    )
