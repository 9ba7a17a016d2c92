"""Parse and compare log timestamps.

Every instant leaves this module as a timezone-aware datetime in UTC,
so ordering never depends on the offset a line happened to be written
with. Text without an offset is read as UTC.
"""
from __future__ import annotations

import re
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path

from logslice.domain.errors import TimestampParseError
from logslice.domain.types import Instant

FIELD_DELIMITER = ","

# Strict form accepted on the command line: 2020-08-22T21:40:47.762Z
ISO_8601 = re.compile(
    r"^-?\d{4}-(0[1-9]|1[0-2])-(0[1-9]|[12]\d|3[01])"
    r"T([01]\d|2[0-3]):[0-5]\d:[0-5]\d(\.\d+)?Z$"
)

# datetime only keeps microseconds; drop any digits past the sixth
_EXTRA_FRACTION = re.compile(r"(\.\d{6})\d+")


class Ordering(Enum):
    LESS = -1
    EQUAL = 0
    GREATER = 1


def parse(text: str) -> Instant:
    """Parse an ISO-8601 timestamp into a UTC instant.

    Raises TimestampParseError for anything datetime.fromisoformat
    rejects, including the empty string.
    """
    raw = text.strip()
    if not raw:
        raise TimestampParseError(text)
    normalized = _EXTRA_FRACTION.sub(r"\1", raw)
    try:
        value = datetime.fromisoformat(normalized)
    except ValueError:
        raise TimestampParseError(text) from None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def compare(a: Instant, b: Instant) -> Ordering:
    if a < b:
        return Ordering.LESS
    if a > b:
        return Ordering.GREATER
    return Ordering.EQUAL


def leading_field(line: str) -> str:
    """Text before the first comma (the whole line if there is none)."""
    head, _, _ = line.partition(FIELD_DELIMITER)
    return head


def parse_line(
    line: str,
    *,
    path: Path | None = None,
    line_number: int | None = None,
) -> Instant:
    """Parse the timestamp that starts a log line.

    path and line_number are only used to make the error point at the
    offending record.
    """
    field = leading_field(line)
    try:
        return parse(field)
    except TimestampParseError:
        raise TimestampParseError(field, path=path, line_number=line_number) from None


def is_iso8601(text: str) -> bool:
    """Syntax check used by the CLI before anything is parsed."""
    return ISO_8601.match(text) is not None


def format_instant(instant: Instant) -> str:
    """Render as 2020-08-22T21:40:47.762Z (millisecond precision, UTC)."""
    utc = instant.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S") + f".{utc.microsecond // 1000:03d}Z"


def utc_now() -> Instant:
    return datetime.now(timezone.utc)
