"""Build the output archive for a located range.

Flow for one extraction:
    1. classify (start, end) into one of the five RangeCases
    2. ENCLOSING only: ask the injected confirm callback; "no" stops here
    3. create the output directory (and any nested sub-folders) once
    4. fan out one write task per planned segment on a thread pool
    5. join; the first failure aborts the phase and propagates

Per-segment writes are independent: each reads its own source and writes
its own target file, so no locking is needed between them. There is no
cross-segment atomicity by default. With ExtractorConfig.staged the
whole set goes to a hidden staging directory that is renamed into place
only after every write succeeded.
"""
from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from logslice.assemble.cases import RangeCase, SegmentPlan, classify, plan_segments
from logslice.assemble.writer import (
    archive_root,
    copy_segment,
    discard,
    make_directory,
    output_dir_name,
    promote,
    slice_segment,
    staging_path,
    write_lines,
)
from logslice.concurrency.cancellation import CancelToken
from logslice.config import ExtractorConfig
from logslice.domain.records import ExtractionRange, RangeEnclosesArchive
from logslice.domain.types import SegmentIndex
from logslice.profiling.timer import ExtractionTimer
from logslice.segments.reader import SegmentFile
from logslice.timestamps.codec import utc_now

log = logging.getLogger(__name__)

ConfirmCallback = Callable[[RangeEnclosesArchive], bool]


def decline(notice: RangeEnclosesArchive) -> bool:
    """Default confirmation: never copy the whole archive unasked."""
    return False


def accept(notice: RangeEnclosesArchive) -> bool:
    return True


@dataclass(slots=True)
class AssemblyResult:
    """What the assembler produced.

    declined is True only for an ENCLOSING range the caller chose not to
    copy; output_dir is None in that case and nothing was written.
    """
    case: RangeCase
    output_dir: Path | None
    written: list[Path] = field(default_factory=list)
    declined: bool = False
    first_segment_ms: float | None = None


class OutputAssembler:
    """Writes the sliced segments for one located range.

    Args:
        config: Extraction settings (workers, naming, staging).
        confirm: Decides whether an ENCLOSING range is copied in full.
        timer: Timing context; the first finished segment is marked on it.
        clock: Source of the UTC instant embedded in the output name.
    """

    def __init__(
        self,
        config: ExtractorConfig | None = None,
        confirm: ConfirmCallback = decline,
        timer: ExtractionTimer | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._config = config or ExtractorConfig()
        self._confirm = confirm
        self._timer = timer or ExtractionTimer()
        self._clock = clock

    @property
    def timer(self) -> ExtractionTimer:
        return self._timer

    def assemble(
        self,
        segments: Sequence[SegmentFile],
        start: SegmentIndex | None,
        end: SegmentIndex | None,
        extraction_range: ExtractionRange,
        cancel: CancelToken | None = None,
    ) -> AssemblyResult:
        if not segments:
            raise ValueError("assemble() needs at least one segment")
        case = classify(start, end)
        log.info("range case %s (start=%s, end=%s)", case.name, start, end)

        if case is RangeCase.CLAMPED_START:
            log.info("from precedes the earliest record; starting at the first segment")
        elif case is RangeCase.CLAMPED_END:
            log.info("to follows the latest record; ending at the last segment")
        elif case is RangeCase.ENCLOSING:
            notice = RangeEnclosesArchive(extraction_range, len(segments))
            log.warning(
                "range encloses the entire archive (%d segments); output would be a full copy",
                len(segments),
            )
            if not self._confirm(notice):
                log.info("full copy declined; no output generated")
                return AssemblyResult(case=case, output_dir=None, declined=True)

        plans = plan_segments(case, start, end, len(segments))
        root = archive_root(segments)
        parent = self._config.output_parent or root.parent
        final_dir = parent / output_dir_name(self._config.output_prefix, self._clock())
        work_dir = staging_path(final_dir) if self._config.staged else final_dir

        targets = self._prepare_targets(segments, plans, root, work_dir)
        try:
            written = self._write_all(segments, plans, targets, extraction_range, cancel)
        except BaseException:
            if self._config.staged:
                discard(work_dir)
            raise

        if self._config.staged:
            promote(work_dir, final_dir)
            written = [final_dir / p.relative_to(work_dir) for p in written]

        log.info("wrote %d segment(s) to %s", len(written), final_dir)
        return AssemblyResult(
            case=case,
            output_dir=final_dir,
            written=written,
            first_segment_ms=self._timer.first_segment_ms,
        )

    def _prepare_targets(
        self,
        segments: Sequence[SegmentFile],
        plans: Sequence[SegmentPlan],
        root: Path,
        work_dir: Path,
    ) -> dict[SegmentIndex, Path]:
        """Create every output folder up front and map plans to target files.

        Targets keep the source's path relative to the archive root, so a
        flat archive produces a flat output with identical file names.
        """
        make_directory(work_dir)
        targets = {}
        for plan in plans:
            source = segments[plan.index].path.absolute()
            target = work_dir / source.relative_to(root)
            if target.parent != work_dir:
                target.parent.mkdir(parents=True, exist_ok=True)
            targets[plan.index] = target
        return targets

    def _write_all(
        self,
        segments: Sequence[SegmentFile],
        plans: Sequence[SegmentPlan],
        targets: dict[SegmentIndex, Path],
        extraction_range: ExtractionRange,
        cancel: CancelToken | None,
    ) -> list[Path]:
        def write_one(plan: SegmentPlan) -> Path:
            segment = segments[plan.index]
            if cancel is not None:
                cancel.check(f"writing {segment.name}")
            target = targets[plan.index]
            if plan.verbatim:
                copy_segment(segment, target)
            else:
                write_lines(target, slice_segment(segment, plan, extraction_range))
            if self._timer.mark_first_segment():
                log.info("first file ready after %.0f ms", self._timer.first_segment_ms)
            log.debug("wrote %s", target)
            return target

        with ThreadPoolExecutor(max_workers=self._config.max_workers) as pool:
            futures = {pool.submit(write_one, plan): plan.index for plan in plans}
            try:
                for fut in as_completed(futures):
                    fut.result()
            except BaseException:
                for fut in futures:
                    fut.cancel()
                raise
        return [targets[plan.index] for plan in plans]
