"""Could a target instant lie inside a segment?

Time only moves forward in the archive, so a segment can hold t only if
its first record is no later than t and its last record no earlier. That
needs two lines per segment regardless of how large the file is.
"""
from __future__ import annotations

from logslice.domain.types import Instant
from logslice.segments.reader import SegmentFile


def contains(low: Instant, high: Instant, target: Instant) -> bool:
    """True iff low <= target <= high."""
    return low <= target <= high


def probe(segment: SegmentFile, target: Instant) -> bool:
    """Membership test against the segment's first and last records.

    An empty segment contains nothing.
    """
    bounds = segment.bounds()
    if bounds is None:
        return False
    return contains(bounds.low, bounds.high, target)


def is_empty(segment: SegmentFile) -> bool:
    """True when the segment holds no records at all."""
    return segment.bounds() is None
