"""Segment files: bounds probing, line loading, and on-disk discovery."""
from logslice.segments.discovery import SEGMENT_GLOB, discover_segments, natural_key
from logslice.segments.reader import SegmentBounds, SegmentFile, TimestampColumn, split_lines

__all__ = [
    "SEGMENT_GLOB",
    "SegmentBounds",
    "SegmentFile",
    "TimestampColumn",
    "discover_segments",
    "natural_key",
    "split_lines",
]
