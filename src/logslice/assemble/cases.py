"""How the requested range overlaps the archive, and what to write.

The locators report the segment holding `from` (start) and the segment
holding `to` (end), each possibly None. That pair falls into exactly one
of five cases:

    SPANNING        start < end       slice start, copy middle, slice end
    SINGLE_SEGMENT  start == end      slice one segment at both ends
    CLAMPED_START   start missing     from precedes the archive: 0..end
    CLAMPED_END     end missing       to follows the archive: start..last
    ENCLOSING       both missing      range swallows the whole archive

NO_RECORDS is decided before classification (see locate.coverage): the
range misses the archive or sits inside a gap, so nothing is written.

A segment's plan says whether its head is cut at Lower(from), its tail
at Upper(to), both, or neither (verbatim copy).
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from logslice.domain.types import SegmentIndex


class RangeCase(Enum):
    SPANNING = auto()
    SINGLE_SEGMENT = auto()
    CLAMPED_START = auto()
    CLAMPED_END = auto()
    ENCLOSING = auto()
    NO_RECORDS = auto()  # range misses every record; nothing to write


@dataclass(frozen=True, slots=True)
class SegmentPlan:
    """What to write for one source segment."""
    index: SegmentIndex
    cut_head: bool = False  # drop lines before Lower(from)
    cut_tail: bool = False  # drop lines after Upper(to)

    @property
    def verbatim(self) -> bool:
        return not (self.cut_head or self.cut_tail)


def classify(start: SegmentIndex | None, end: SegmentIndex | None) -> RangeCase:
    """Pick the case for a located (start, end) pair.

    start > end cannot come from a valid range over an ordered archive;
    it raises ValueError rather than silently writing nothing.
    """
    if start is None and end is None:
        return RangeCase.ENCLOSING
    if start is None:
        return RangeCase.CLAMPED_START
    if end is None:
        return RangeCase.CLAMPED_END
    if start < end:
        return RangeCase.SPANNING
    if start == end:
        return RangeCase.SINGLE_SEGMENT
    raise ValueError(
        f"start segment {start} is after end segment {end}; "
        f"the archive is not in chronological order"
    )


def plan_segments(
    case: RangeCase,
    start: SegmentIndex | None,
    end: SegmentIndex | None,
    segment_count: int,
) -> list[SegmentPlan]:
    """Per-segment write plan for a case, in archive order."""
    if segment_count <= 0:
        raise ValueError("segment_count must be positive")
    last = segment_count - 1

    if case is RangeCase.NO_RECORDS:
        return []
    if case is RangeCase.ENCLOSING:
        return [SegmentPlan(i) for i in range(segment_count)]

    if case is RangeCase.SINGLE_SEGMENT:
        return [SegmentPlan(start, cut_head=True, cut_tail=True)]

    if case is RangeCase.CLAMPED_START:
        first, final = 0, end
    elif case is RangeCase.CLAMPED_END:
        first, final = start, last
    else:
        first, final = start, end

    cut_head = case is not RangeCase.CLAMPED_START
    cut_tail = case is not RangeCase.CLAMPED_END
    plans = []
    for i in range(first, final + 1):
        plans.append(SegmentPlan(
            i,
            cut_head=cut_head and i == first,
            cut_tail=cut_tail and i == final,
        ))
    return plans
