"""Timing context and human-readable reports for extractions."""

from logslice.profiling.report import format_report
from logslice.profiling.timer import ExtractionTimer

__all__ = [
    "ExtractionTimer",
    "format_report",
]
