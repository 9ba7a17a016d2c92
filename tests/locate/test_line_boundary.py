"""Tests for the line-boundary binary search.

Covers: exact hits, misses between lines, before/after the segment,
duplicate runs wherever the probe lands, empty input, and the
segment-file wrapper. Property tests pin LOWER/UPPER to bisect.
"""
from __future__ import annotations

import bisect
from datetime import datetime, timedelta, timezone

import pytest
from hypothesis import given
from hypothesis import strategies as st

from logslice.domain.boundary import Boundary
from logslice.locate.line_boundary import locate_in_segment, locate_line

_ORIGIN = datetime(2021, 1, 1, tzinfo=timezone.utc)


def _ts(*seconds: int) -> list[datetime]:
    return [_ORIGIN + timedelta(seconds=s) for s in seconds]


def _t(seconds: int) -> datetime:
    return _ORIGIN + timedelta(seconds=seconds)


# ── exact hits ──

def test_lower_exact_hit():
    assert locate_line(_ts(10, 11, 12, 13), _t(12), Boundary.LOWER) == 2


def test_upper_exact_hit():
    assert locate_line(_ts(10, 11, 12, 13), _t(12), Boundary.UPPER) == 2


# ── misses ──

def test_lower_between_lines_is_next_line():
    assert locate_line(_ts(10, 12, 14), _t(13), Boundary.LOWER) == 2


def test_upper_between_lines_is_previous_line():
    assert locate_line(_ts(10, 12, 14), _t(13), Boundary.UPPER) == 1


def test_lower_after_all_lines_is_length():
    assert locate_line(_ts(10, 11, 12), _t(20), Boundary.LOWER) == 3


def test_upper_before_all_lines_is_minus_one():
    assert locate_line(_ts(10, 11, 12), _t(5), Boundary.UPPER) == -1


def test_lower_before_all_lines_is_zero():
    assert locate_line(_ts(10, 11, 12), _t(5), Boundary.LOWER) == 0


def test_upper_after_all_lines_is_last():
    assert locate_line(_ts(10, 11, 12), _t(20), Boundary.UPPER) == 2


def test_empty_sequence():
    assert locate_line([], _t(1), Boundary.LOWER) == 0
    assert locate_line([], _t(1), Boundary.UPPER) == -1


# ── duplicate runs ──

def test_run_in_the_middle():
    ts = _ts(1, 2, 5, 5, 5, 5, 5, 9)
    assert locate_line(ts, _t(5), Boundary.LOWER) == 2
    assert locate_line(ts, _t(5), Boundary.UPPER) == 6


def test_whole_segment_is_one_run():
    ts = _ts(*([7] * 25))
    assert locate_line(ts, _t(7), Boundary.LOWER) == 0
    assert locate_line(ts, _t(7), Boundary.UPPER) == 24


@pytest.mark.parametrize("run_start", range(0, 8))
def test_run_edges_independent_of_probe_position(run_start):
    """Slide a 3-line run through a 10-line segment so the first probe
    (index 4) lands before, inside, and after it."""
    values = list(range(10))
    values[run_start:run_start + 3] = [run_start] * 3
    ts = _ts(*values)
    assert locate_line(ts, _t(run_start), Boundary.LOWER) == run_start
    assert locate_line(ts, _t(run_start), Boundary.UPPER) == run_start + 2


def test_run_at_edges_of_segment():
    ts = _ts(3, 3, 3, 4, 5, 6, 6)
    assert locate_line(ts, _t(3), Boundary.LOWER) == 0
    assert locate_line(ts, _t(3), Boundary.UPPER) == 2
    assert locate_line(ts, _t(6), Boundary.LOWER) == 5
    assert locate_line(ts, _t(6), Boundary.UPPER) == 6


# ── properties ──

sorted_offsets = st.lists(st.integers(min_value=0, max_value=30), max_size=80).map(sorted)


@given(sorted_offsets, st.integers(min_value=-3, max_value=33))
def test_lower_matches_bisect_left(values, target):
    assert locate_line(_ts(*values), _t(target), Boundary.LOWER) == bisect.bisect_left(values, target)


@given(sorted_offsets, st.integers(min_value=-3, max_value=33))
def test_upper_matches_bisect_right_minus_one(values, target):
    assert locate_line(_ts(*values), _t(target), Boundary.UPPER) == bisect.bisect_right(values, target) - 1


@given(sorted_offsets, st.integers(min_value=-3, max_value=33), st.integers(min_value=0, max_value=10))
def test_slice_is_exactly_the_range(values, start, width):
    """lines[Lower(from):Upper(to)+1] keeps every line in range and nothing else."""
    end = start + width
    ts = _ts(*values)
    lo = locate_line(ts, _t(start), Boundary.LOWER)
    hi = locate_line(ts, _t(end), Boundary.UPPER)
    assert values[lo:hi + 1] == [v for v in values if start <= v <= end]


# ── segment wrapper ──

def test_locate_in_segment_reads_file(write_segment, instant):
    seg = write_segment("LogFile-1.log", [10, 11, 11, 11, 12])
    assert locate_in_segment(seg, instant(11), Boundary.LOWER) == 1
    assert locate_in_segment(seg, instant(11), Boundary.UPPER) == 3


def test_locate_in_segment_reuses_loaded_lines(write_segment, instant):
    seg = write_segment("LogFile-1.log", [10, 11, 12])
    lines = seg.read_lines()
    seg.path.unlink()  # a second read would fail
    assert locate_in_segment(seg, instant(12), Boundary.UPPER, lines) == 2


def test_locate_in_segment_only_parses_probed_lines(write_segment, instant):
    seg = write_segment("LogFile-1.log", list(range(1024)))
    lines = seg.read_lines()
    column = seg.timestamps(lines)
    assert locate_line(column, instant(700), Boundary.LOWER) == 700
    assert column.parsed_count <= 12
