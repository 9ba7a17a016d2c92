"""Top-level extraction: locate both ends, then assemble the output.

    segments ──► ArchiveLocator.locate_first(from) ──► start ─┐
             └─► ArchiveLocator.locate_last(to)   ──► end ───┴─► OutputAssembler

A "not found" from either locator is double-checked against every
segment's bounds first (locate.coverage): a miss caused by a gap
between segments snaps to the nearest segment inside the range, and a
range that touches no record at all ends here with case NO_RECORDS.

The two locator scans run one after the other; each is internally
parallel across segments. One ExtractionTimer spans the whole call and
its first-segment mark comes back on the result.
"""
from __future__ import annotations

import logging
import os
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from logslice.assemble.cases import RangeCase
from logslice.assemble.output import ConfirmCallback, OutputAssembler, decline
from logslice.concurrency.cancellation import CancelToken
from logslice.config import ExtractorConfig
from logslice.domain.errors import EmptyArchiveError
from logslice.domain.records import ExtractionRange
from logslice.domain.types import SegmentIndex
from logslice.locate.archive_locator import ArchiveLocator
from logslice.locate.coverage import read_bounds, resolve_uncovered
from logslice.profiling.timer import ExtractionTimer
from logslice.segments.reader import SegmentFile
from logslice.timestamps.codec import format_instant

log = logging.getLogger(__name__)

SegmentLike = SegmentFile | str | os.PathLike[str]


@dataclass(slots=True)
class ExtractionResult:
    """Outcome of one extract() call."""
    extraction_range: ExtractionRange
    segment_count: int
    start_index: SegmentIndex | None
    end_index: SegmentIndex | None
    case: RangeCase
    output_dir: Path | None
    written: list[Path] = field(default_factory=list)
    declined: bool = False
    first_segment_ms: float | None = None
    total_ms: float = 0.0

    @property
    def produced_output(self) -> bool:
        return self.output_dir is not None


def as_segments(items: Sequence[SegmentLike]) -> list[SegmentFile]:
    return [item if isinstance(item, SegmentFile) else SegmentFile.of(item) for item in items]


def extract(
    segments: Sequence[SegmentLike],
    extraction_range: ExtractionRange,
    config: ExtractorConfig | None = None,
    confirm: ConfirmCallback = decline,
    cancel: CancelToken | None = None,
) -> ExtractionResult:
    """Write the records of extraction_range into a new output directory.

    Args:
        segments: Archive segment files in chronological order.
        extraction_range: Inclusive [start, end] range to extract.
        config: Extraction settings; defaults to ExtractorConfig().
        confirm: Asked before copying the whole archive (ENCLOSING case).
        cancel: Cooperative cancellation token. When omitted and
            config.timeout is set, one is created from the timeout.

    Raises:
        EmptyArchiveError: segments is empty. Nothing is created.
        TimestampParseError, SegmentIOError, OutputDirectoryError,
        ContiguityError, ExtractionCancelled: propagated unchanged.
    """
    config = config or ExtractorConfig()
    archive = as_segments(segments)
    if not archive:
        raise EmptyArchiveError()
    if cancel is None and config.timeout is not None:
        cancel = CancelToken(timeout=config.timeout)

    timer = ExtractionTimer()
    log.info(
        "extracting %s .. %s from %d segment(s)",
        format_instant(extraction_range.start),
        format_instant(extraction_range.end),
        len(archive),
    )

    locator = ArchiveLocator(
        max_workers=config.max_workers,
        verify_contiguity=config.verify_contiguity,
    )
    start = locator.locate_first(archive, extraction_range.start, cancel)
    end = locator.locate_last(archive, extraction_range.end, cancel)
    log.debug("located start segment %s, end segment %s", start, end)

    if start is None or end is None:
        bounds = read_bounds(archive, config.max_workers, cancel)
        resolution = resolve_uncovered(bounds, extraction_range, start, end)
        if resolution.empty:
            return ExtractionResult(
                extraction_range=extraction_range,
                segment_count=len(archive),
                start_index=None,
                end_index=None,
                case=RangeCase.NO_RECORDS,
                output_dir=None,
                total_ms=timer.elapsed_ms(),
            )
        start, end = resolution.start, resolution.end

    assembler = OutputAssembler(config=config, confirm=confirm, timer=timer)
    assembly = assembler.assemble(archive, start, end, extraction_range, cancel)

    return ExtractionResult(
        extraction_range=extraction_range,
        segment_count=len(archive),
        start_index=start,
        end_index=end,
        case=assembly.case,
        output_dir=assembly.output_dir,
        written=assembly.written,
        declined=assembly.declined,
        first_segment_ms=assembly.first_segment_ms,
        total_ms=timer.elapsed_ms(),
    )
