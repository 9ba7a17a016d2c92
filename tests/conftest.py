"""Shared fixtures: a fixed time origin and on-disk segment builders.

Timestamps in tests are written as integer second offsets from BASE, so
the archive from the docs reads naturally:

    A = {10, 11, 12}, B = {13, 14, 15}, C = {16, 17, 18}
"""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from logslice.segments.reader import SegmentFile
from logslice.timestamps.codec import format_instant, parse_line

BASE = datetime(2020, 8, 22, 21, 40, 0, tzinfo=timezone.utc)


def at(seconds: float) -> datetime:
    return BASE + timedelta(seconds=seconds)


def offset_of(instant: datetime) -> float:
    return (instant - BASE).total_seconds()


def make_line(seconds: float, payload: str = "payload") -> str:
    return f"{format_instant(at(seconds))},INFO,{payload}"


@pytest.fixture
def instant():
    """at(seconds) -> UTC datetime BASE + seconds."""
    return at


@pytest.fixture
def archive_dir(tmp_path: Path) -> Path:
    path = tmp_path / "archive"
    path.mkdir()
    return path


@pytest.fixture
def write_segment(archive_dir: Path):
    """Write a segment whose records sit at the given second offsets.

    Payloads are "<name>#<line>" so duplicate timestamps stay
    distinguishable in assertions.
    """
    def _write(name: str, seconds: list[float], directory: Path | None = None) -> SegmentFile:
        folder = directory or archive_dir
        folder.mkdir(parents=True, exist_ok=True)
        path = folder / name
        path.write_text(
            "".join(make_line(s, f"{name}#{i}") + "\n" for i, s in enumerate(seconds)),
            encoding="utf-8",
        )
        return SegmentFile(path)
    return _write


@pytest.fixture
def seconds_in():
    """Read a written file back as a list of second offsets."""
    def _read(path: Path) -> list[float]:
        lines = SegmentFile(path).read_lines()
        return [offset_of(parse_line(line)) for line in lines]
    return _read


@pytest.fixture
def abc_archive(write_segment) -> list[SegmentFile]:
    """Three one-record-per-second segments: 10-12, 13-15, 16-18."""
    return [
        write_segment("LogFile-1.log", [10, 11, 12]),
        write_segment("LogFile-2.log", [13, 14, 15]),
        write_segment("LogFile-3.log", [16, 17, 18]),
    ]
