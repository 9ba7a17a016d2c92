"""Tests for the first/last-record membership test."""
from __future__ import annotations

import pytest

from logslice.locate.membership import contains, is_empty, probe


@pytest.mark.parametrize("target, expected", [
    (9, False),
    (10, True),   # inclusive low
    (14, True),
    (18, True),   # inclusive high
    (19, False),
])
def test_contains_is_inclusive(instant, target, expected):
    assert contains(instant(10), instant(18), instant(target)) is expected


def test_probe_uses_first_and_last_record(write_segment, instant):
    seg = write_segment("LogFile-1.log", [10, 11, 12])
    assert probe(seg, instant(10)) is True
    assert probe(seg, instant(12)) is True
    assert probe(seg, instant(13)) is False


def test_probe_matches_gap_inside_segment(write_segment, instant):
    """Membership is about the span, not whether a record sits exactly at t."""
    seg = write_segment("LogFile-1.log", [10, 20])
    assert probe(seg, instant(15)) is True


def test_probe_empty_segment_never_matches(archive_dir, instant):
    from logslice.segments.reader import SegmentFile

    path = archive_dir / "LogFile-1.log"
    path.write_text("")
    assert probe(SegmentFile(path), instant(0)) is False


def test_is_empty(write_segment, archive_dir):
    from logslice.segments.reader import SegmentFile

    blank = archive_dir / "LogFile-2.log"
    blank.write_text("\n\n")
    assert is_empty(SegmentFile(blank)) is True
    assert is_empty(write_segment("LogFile-1.log", [10])) is False
