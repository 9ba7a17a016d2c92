"""Tests for range-case classification and per-segment plans."""
from __future__ import annotations

import pytest

from logslice.assemble.cases import RangeCase, SegmentPlan, classify, plan_segments


@pytest.mark.parametrize("start, end, expected", [
    (0, 2, RangeCase.SPANNING),
    (1, 1, RangeCase.SINGLE_SEGMENT),
    (None, 1, RangeCase.CLAMPED_START),
    (1, None, RangeCase.CLAMPED_END),
    (None, None, RangeCase.ENCLOSING),
])
def test_classify(start, end, expected):
    assert classify(start, end) is expected


def test_classify_rejects_inverted_indices():
    with pytest.raises(ValueError, match="chronological"):
        classify(2, 1)


def test_plan_spanning():
    assert plan_segments(RangeCase.SPANNING, 1, 4, 6) == [
        SegmentPlan(1, cut_head=True),
        SegmentPlan(2),
        SegmentPlan(3),
        SegmentPlan(4, cut_tail=True),
    ]


def test_plan_spanning_adjacent():
    assert plan_segments(RangeCase.SPANNING, 0, 1, 3) == [
        SegmentPlan(0, cut_head=True),
        SegmentPlan(1, cut_tail=True),
    ]


def test_plan_single_segment():
    assert plan_segments(RangeCase.SINGLE_SEGMENT, 2, 2, 3) == [
        SegmentPlan(2, cut_head=True, cut_tail=True),
    ]


def test_plan_clamped_start_copies_from_first_segment():
    assert plan_segments(RangeCase.CLAMPED_START, None, 2, 4) == [
        SegmentPlan(0),
        SegmentPlan(1),
        SegmentPlan(2, cut_tail=True),
    ]


def test_plan_clamped_end_copies_to_last_segment():
    assert plan_segments(RangeCase.CLAMPED_END, 1, None, 4) == [
        SegmentPlan(1, cut_head=True),
        SegmentPlan(2),
        SegmentPlan(3),
    ]


def test_plan_clamped_start_when_end_is_first_segment():
    assert plan_segments(RangeCase.CLAMPED_START, None, 0, 3) == [SegmentPlan(0, cut_tail=True)]


def test_plan_enclosing_is_verbatim():
    plans = plan_segments(RangeCase.ENCLOSING, None, None, 3)
    assert [p.index for p in plans] == [0, 1, 2]
    assert all(p.verbatim for p in plans)


def test_plan_no_records_is_empty():
    assert plan_segments(RangeCase.NO_RECORDS, None, None, 3) == []


def test_plan_needs_segments():
    with pytest.raises(ValueError):
        plan_segments(RangeCase.ENCLOSING, None, None, 0)
