"""Find where a range starts or ends inside one sorted segment.

Binary search for a line whose timestamp equals the target. Timestamps
repeat (a burst of records in the same millisecond is a "run"), and the
search can land anywhere inside the run, so an exact hit is widened
outward: leftward for LOWER to reach the first line of the run,
rightward for UPPER to reach the last. That walk is O(run length).

Without an exact hit, the loop exits with begin == end + 1 and the
target sits strictly between timestamps[end] and timestamps[begin]:

    LOWER -> first line after the gap (len(timestamps) if none)
    UPPER -> last line before the gap (-1 if none)

Out-of-range results are meaningful to the assembler: LOWER == len says
"the range starts in the next segment", UPPER == -1 says "the range
ended before this segment began".
"""
from __future__ import annotations

import logging
from collections.abc import Sequence

from logslice.domain.boundary import Boundary
from logslice.domain.types import Instant, LineIndex, LogLine
from logslice.segments.reader import SegmentFile
from logslice.timestamps.codec import Ordering, compare

log = logging.getLogger(__name__)


def locate_line(
    timestamps: Sequence[Instant],
    target: Instant,
    boundary: Boundary,
) -> LineIndex:
    """Index of the first (LOWER) or last (UPPER) line in range at target.

    LOWER: smallest i with timestamps[i] >= target, else len(timestamps).
    UPPER: largest i with timestamps[i] <= target, else -1.
    """
    n = len(timestamps)
    begin = 0
    end = n - 1

    while begin <= end:
        mid = (begin + end) // 2
        order = compare(target, timestamps[mid])
        if order is Ordering.EQUAL:
            return _widen_run(timestamps, mid, target, boundary)
        if order is Ordering.LESS:
            end = mid - 1
        else:
            begin = mid + 1

    # No exact match. Re-check the neighbour so an off-by-one in the
    # loop can never pull an out-of-range line in.
    if boundary.is_lower():
        if end >= 0 and target < timestamps[end]:
            return end
        return end + 1
    if begin < n and target > timestamps[begin]:
        return begin
    return begin - 1


def _widen_run(
    timestamps: Sequence[Instant],
    hit: int,
    target: Instant,
    boundary: Boundary,
) -> LineIndex:
    idx = hit
    if boundary.is_lower():
        while idx > 0 and timestamps[idx - 1] == target:
            idx -= 1
    else:
        last = len(timestamps) - 1
        while idx < last and timestamps[idx + 1] == target:
            idx += 1
    return idx


def locate_in_segment(
    segment: SegmentFile,
    target: Instant,
    boundary: Boundary,
    lines: Sequence[LogLine] | None = None,
) -> LineIndex:
    """locate_line over a segment file.

    Pass lines when the caller has already loaded them to avoid a
    second read.
    """
    if lines is None:
        lines = segment.read_lines()
    column = segment.timestamps(lines)
    index = locate_line(column, target, boundary)
    log.debug(
        "%s boundary in %s at line %d of %d (%d timestamps parsed)",
        boundary.name.lower(), segment.name, index, len(lines), column.parsed_count,
    )
    return index
