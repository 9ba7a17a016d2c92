"""Read access to one segment file.

Membership probes only need the first and last record, so bounds()
reads the first line from the front and the last line by seeking
backwards from the end of the file in fixed-size blocks. A multi-GB
segment costs two short reads, not a full scan.

Line-boundary searches do need every line (the search is by index), so
read_lines() loads the file, and TimestampColumn parses timestamps only
for the indices the binary search actually touches.

Lines end at "\n" only, with one trailing "\r" dropped. Other characters
str.splitlines() treats as breaks (form feed, U+2028, ...) are payload.
Blank lines before the first record and after the last one are not
records, in both bounds() and read_lines().
"""
from __future__ import annotations

import os
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, overload

from logslice.domain.errors import SegmentIOError
from logslice.domain.types import Instant, LogLine
from logslice.timestamps.codec import parse_line

ENCODING = "utf-8"
# Payload bytes are opaque: surrogateescape round-trips invalid UTF-8
ERRORS = "surrogateescape"

_TAIL_BLOCK = 4096


@dataclass(frozen=True, slots=True)
class SegmentBounds:
    """Timestamps of the first and last record in a segment."""
    low: Instant
    high: Instant


@dataclass(frozen=True, slots=True)
class SegmentFile:
    """One file of the archive, internally sorted by timestamp."""
    path: Path

    @classmethod
    def of(cls, path: str | os.PathLike[str]) -> SegmentFile:
        return cls(Path(path))

    @property
    def name(self) -> str:
        return self.path.name

    def bounds(self) -> SegmentBounds | None:
        """First and last timestamps, or None for an empty segment."""
        try:
            with self.path.open("rb") as fh:
                head = _read_first_line(fh)
                if head is None:
                    return None
                first, first_number = head
                last = _read_last_line(fh)
        except OSError as exc:
            raise SegmentIOError(self.path, "read", str(exc)) from exc
        low = parse_line(
            first.decode(ENCODING, ERRORS), path=self.path, line_number=first_number
        )
        high = parse_line(last.decode(ENCODING, ERRORS), path=self.path)
        return SegmentBounds(low=low, high=high)

    def read_lines(self) -> list[LogLine]:
        """All records without their terminators."""
        try:
            # newline="" keeps "\r" for split_lines to handle
            with self.path.open("r", encoding=ENCODING, errors=ERRORS, newline="") as fh:
                text = fh.read()
        except OSError as exc:
            raise SegmentIOError(self.path, "read", str(exc)) from exc
        return split_lines(text)

    def timestamps(self, lines: Sequence[LogLine]) -> TimestampColumn:
        return TimestampColumn(lines, path=self.path)


class TimestampColumn(Sequence[Instant]):
    """Read-only view of a segment's timestamps, parsed on first access.

    A binary search over n lines touches O(log n) of them (plus the run
    it lands in), so parsing everything up front would waste most of
    the work.
    """

    def __init__(self, lines: Sequence[LogLine], path: Path | None = None) -> None:
        self._lines = lines
        self._path = path
        self._cache: dict[int, Instant] = {}

    def __len__(self) -> int:
        return len(self._lines)

    @overload
    def __getitem__(self, index: int) -> Instant: ...

    @overload
    def __getitem__(self, index: slice) -> list[Instant]: ...

    def __getitem__(self, index):
        if isinstance(index, slice):
            return [self[i] for i in range(*index.indices(len(self)))]
        if index < 0:
            index += len(self._lines)
        if not 0 <= index < len(self._lines):
            raise IndexError(f"line index {index} out of range")
        cached = self._cache.get(index)
        if cached is None:
            cached = parse_line(
                self._lines[index], path=self._path, line_number=index + 1
            )
            self._cache[index] = cached
        return cached

    @property
    def parsed_count(self) -> int:
        """How many lines have been parsed so far."""
        return len(self._cache)


def split_lines(text: str) -> list[LogLine]:
    """Split on "\\n", drop one trailing "\\r" per line, trim blank edges."""
    lines = [line[:-1] if line.endswith("\r") else line for line in text.split("\n")]
    start = 0
    stop = len(lines)
    while start < stop and not lines[start]:
        start += 1
    while stop > start and not lines[stop - 1]:
        stop -= 1
    return lines[start:stop]


def _read_first_line(fh: BinaryIO) -> tuple[bytes, int] | None:
    """First non-blank line and its 1-based line number, or None."""
    for number, raw in enumerate(fh, start=1):
        line = raw.rstrip(b"\r\n")
        if line:
            return line, number
    return None


def _read_last_line(fh: BinaryIO) -> bytes:
    """Walk back from EOF until a full non-empty last line is buffered."""
    fh.seek(0, os.SEEK_END)
    pos = fh.tell()
    buf = b""
    while pos > 0:
        step = min(_TAIL_BLOCK, pos)
        pos -= step
        fh.seek(pos)
        buf = fh.read(step) + buf
        stripped = buf.rstrip(b"\r\n")
        cut = stripped.rfind(b"\n")
        if cut != -1:
            return stripped[cut + 1:].rstrip(b"\r")
    # single-line file
    return buf.rstrip(b"\r\n")
