"""Domain model for logslice.

Re-exports the public types:
    from logslice.domain import Boundary, ExtractionRange, LogSliceError
"""
from logslice.domain.boundary import Boundary
from logslice.domain.errors import (
    ContiguityError,
    EmptyArchiveError,
    ExtractionCancelled,
    ExtractionTimeout,
    LogSliceError,
    OutputDirectoryError,
    ParseError,
    SegmentIOError,
    TimestampParseError,
)
from logslice.domain.records import ExtractionRange, RangeEnclosesArchive
from logslice.domain.types import (
    Instant,
    LineIndex,
    LogLine,
    SegmentIndex,
    SegmentPath,
)

__all__ = [
    "Boundary",
    "ContiguityError",
    "EmptyArchiveError",
    "ExtractionCancelled",
    "ExtractionTimeout",
    "LogSliceError",
    "OutputDirectoryError",
    "ParseError",
    "SegmentIOError",
    "TimestampParseError",
    "ExtractionRange",
    "RangeEnclosesArchive",
    "Instant",
    "LineIndex",
    "LogLine",
    "SegmentIndex",
    "SegmentPath",
]
