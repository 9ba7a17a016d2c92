"""Value objects passed between the locators and the assembler."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from logslice.domain.types import Instant


@dataclass(frozen=True, slots=True)
class ExtractionRange:
    """Closed time interval [start, end] of UTC instants.

    Both endpoints are inclusive: a line is extracted when
    start <= timestamp <= end.
    """
    start: Instant
    end: Instant

    def __post_init__(self) -> None:
        if self.start.tzinfo is None or self.end.tzinfo is None:
            raise ValueError("ExtractionRange bounds must be timezone-aware")
        if self.start > self.end:
            raise ValueError(
                f"start ({self.start.isoformat()}) must be <= "
                f"end ({self.end.isoformat()})"
            )

    def contains(self, instant: Instant) -> bool:
        """Check whether an instant falls within this range (inclusive)."""
        return self.start <= instant <= self.end

    @property
    def duration(self) -> timedelta:
        return self.end - self.start


@dataclass(frozen=True, slots=True)
class RangeEnclosesArchive:
    """Handed to the confirmation callback when the range swallows the archive.

    Not an error: the requested range starts before the earliest record
    and ends after the latest one, so the output would be a verbatim
    copy of every segment.
    """
    extraction_range: ExtractionRange
    segment_count: int
