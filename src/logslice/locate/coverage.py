"""Resolve "not found" results that are not really archive edges.

The locators answer "which segment contains t". A None answer is read
by the assembler as "t lies beyond the archive edge, clamp". That
reading is only right when t really is before the first record or
after the last one. Two other situations also produce None:

  - t falls in a gap between two segments (B starts well after A ends)
  - the whole range lies before or after the archive

For a gap, the range edge snaps inward to the nearest segment that is
inside the range. For a range that misses the archive, or that sits
entirely inside one gap, there is nothing to extract.

Only runs when a locator returned None, so the common path never pays
for reading every segment's bounds.
"""
from __future__ import annotations

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from logslice.concurrency.cancellation import CancelToken
from logslice.domain.records import ExtractionRange
from logslice.domain.types import SegmentIndex
from logslice.segments.reader import SegmentBounds, SegmentFile

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Resolution:
    """Segment indices after gap resolution.

    empty is True when no record of the archive can fall in the range.
    """
    start: SegmentIndex | None
    end: SegmentIndex | None
    empty: bool = False


def read_bounds(
    segments: Sequence[SegmentFile],
    max_workers: int | None = None,
    cancel: CancelToken | None = None,
) -> list[SegmentBounds | None]:
    """First/last timestamps of every segment, read concurrently."""
    def bounds_of(segment: SegmentFile) -> SegmentBounds | None:
        if cancel is not None:
            cancel.check(f"reading bounds of {segment.name}")
        return segment.bounds()

    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        return list(pool.map(bounds_of, segments))


def resolve_uncovered(
    bounds: Sequence[SegmentBounds | None],
    extraction_range: ExtractionRange,
    start: SegmentIndex | None,
    end: SegmentIndex | None,
) -> Resolution:
    """Turn gap misses into real indices; leave true edge misses as None."""
    known = [(i, b) for i, b in enumerate(bounds) if b is not None]
    if not known:
        return Resolution(None, None, empty=True)
    earliest = known[0][1].low
    latest = known[-1][1].high

    if extraction_range.end < earliest or extraction_range.start > latest:
        log.info("range lies entirely outside the archive")
        return Resolution(None, None, empty=True)

    if start is None and extraction_range.start > earliest:
        start = next(i for i, b in known if b.low > extraction_range.start)
        log.info("from falls in a gap between segments; starting at segment %d", start)
    if end is None and extraction_range.end < latest:
        end = next(i for i, b in reversed(known) if b.high < extraction_range.end)
        log.info("to falls in a gap between segments; ending at segment %d", end)

    if start is not None and end is not None and start > end:
        log.info("range lies entirely inside a gap between segments")
        return Resolution(None, None, empty=True)
    return Resolution(start, end)
