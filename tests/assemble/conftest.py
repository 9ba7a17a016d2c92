"""Fixtures for assembler tests: a pinned clock and range builder."""
from __future__ import annotations

from datetime import datetime, timezone

import pytest

from logslice.domain.records import ExtractionRange

FIXED_NOW = datetime(2024, 1, 2, 3, 4, 5, 678000, tzinfo=timezone.utc)
FIXED_DIR_NAME = "OutputLogs-2024-01-02T03-04-05-678Z"


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture
def fixed_dir_name() -> str:
    return FIXED_DIR_NAME


@pytest.fixture
def span(instant):
    """span(a, b) -> ExtractionRange over second offsets a..b."""
    def _span(start: float, end: float) -> ExtractionRange:
        return ExtractionRange(instant(start), instant(end))
    return _span
