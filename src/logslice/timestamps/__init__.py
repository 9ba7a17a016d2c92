"""Timestamp parsing and comparison, always in UTC."""
from logslice.timestamps.codec import (
    ISO_8601,
    Ordering,
    compare,
    format_instant,
    is_iso8601,
    leading_field,
    parse,
    parse_line,
    utc_now,
)

__all__ = [
    "ISO_8601",
    "Ordering",
    "compare",
    "format_instant",
    "is_iso8601",
    "leading_field",
    "parse",
    "parse_line",
    "utc_now",
]
