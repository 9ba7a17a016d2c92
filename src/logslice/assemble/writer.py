"""Output directory handling and per-segment slice writes."""
from __future__ import annotations

import os
import shutil
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path

from logslice.assemble.cases import SegmentPlan
from logslice.domain.boundary import Boundary
from logslice.domain.errors import OutputDirectoryError, SegmentIOError
from logslice.domain.records import ExtractionRange
from logslice.domain.types import LogLine
from logslice.locate.line_boundary import locate_in_segment
from logslice.segments.reader import ENCODING, ERRORS, SegmentFile

STAGING_SUFFIX = ".partial"


def archive_root(segments: Sequence[SegmentFile]) -> Path:
    """Deepest directory that contains every segment."""
    parents = [str(s.path.absolute().parent) for s in segments]
    return Path(os.path.commonpath(parents))


def output_dir_name(prefix: str, now: datetime) -> str:
    """prefix + UTC time with millisecond precision, filesystem-safe.

    OutputLogs-2020-08-22T21-40-47-762Z
    """
    return prefix + now.strftime("%Y-%m-%dT%H-%M-%S-") + f"{now.microsecond // 1000:03d}Z"


def make_directory(path: Path) -> Path:
    """Create a fresh directory; an existing one is an error, never reused."""
    try:
        path.mkdir(parents=True, exist_ok=False)
    except OSError as exc:
        raise OutputDirectoryError(path, str(exc)) from exc
    return path


def staging_path(final: Path) -> Path:
    """Hidden sibling used when writes are staged."""
    return final.with_name(f".{final.name}{STAGING_SUFFIX}")


def promote(staging: Path, final: Path) -> None:
    """Rename a fully written staging directory into place."""
    try:
        staging.rename(final)
    except OSError as exc:
        raise OutputDirectoryError(final, str(exc)) from exc


def discard(staging: Path) -> None:
    shutil.rmtree(staging, ignore_errors=True)


def slice_segment(
    segment: SegmentFile,
    plan: SegmentPlan,
    extraction_range: ExtractionRange,
) -> list[LogLine]:
    """Lines of segment that the plan keeps.

    Head cut: from Lower(range.start). Tail cut: through Upper(range.end).
    """
    lines = segment.read_lines()
    lo = 0
    hi = len(lines)
    if plan.cut_head:
        lo = locate_in_segment(segment, extraction_range.start, Boundary.LOWER, lines)
    if plan.cut_tail:
        hi = locate_in_segment(segment, extraction_range.end, Boundary.UPPER, lines) + 1
    return lines[lo:hi]


def write_lines(target: Path, lines: Sequence[LogLine]) -> Path:
    """Write lines with "\\n" terminators, creating or truncating target."""
    try:
        with target.open("w", encoding=ENCODING, errors=ERRORS, newline="\n") as fh:
            for line in lines:
                fh.write(line)
                fh.write("\n")
    except OSError as exc:
        raise SegmentIOError(target, "write", str(exc)) from exc
    return target


def copy_segment(segment: SegmentFile, target: Path) -> Path:
    """Byte-for-byte copy for segments kept whole."""
    try:
        shutil.copyfile(segment.path, target)
    except OSError as exc:
        raise SegmentIOError(segment.path, "copy", str(exc)) from exc
    return target
