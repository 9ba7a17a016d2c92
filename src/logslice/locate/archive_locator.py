"""Which segment of the archive holds a target instant?

Architecture:
    Fan-out: one membership probe per segment on a ThreadPoolExecutor
    Register: every hit is offered to a LowestIndex (election + atomic min)
    Join:     wait for all probes; the first probe error aborts the scan
    Verify:   walk backward from the elected candidate while segments
              still match, correcting it down to the lowest match

Why the walk is needed at all: a run of identical timestamps can spill
across a segment boundary, so several adjacent segments may contain t.
The scan elects whichever match reported first, which depends on thread
scheduling. Walking backward from it yields the lowest index of the
contiguous block of matches, independent of scheduling.

Empty segments hold no records, so they never match and never break a
run: the walk steps over them.

The walk assumes matches are contiguous. The atomic minimum does not,
so comparing the two catches archives where that assumption fails
(out-of-order segments) and raises ContiguityError instead of returning
a silently wrong index.

The "to" side of a range needs the LAST matching segment, which is the
first match over the reversed archive, re-mapped to forward indices.
"""
from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed

from logslice.concurrency.cancellation import CancelToken
from logslice.concurrency.lowest_index import LowestIndex
from logslice.domain.errors import ContiguityError
from logslice.domain.types import Instant, SegmentIndex
from logslice.locate.membership import is_empty as segment_is_empty
from logslice.locate.membership import probe as membership_probe
from logslice.segments.reader import SegmentFile

log = logging.getLogger(__name__)

Probe = Callable[[SegmentFile, Instant], bool]
EmptyCheck = Callable[[SegmentFile], bool]


class ArchiveLocator:
    """Concurrent segment locator.

    Args:
        max_workers: Thread pool size (default: ThreadPoolExecutor's own).
        verify_contiguity: Raise ContiguityError when the backward walk
            and the atomic minimum disagree (default True).
        probe: Membership predicate, swappable for tests.
        is_empty: Tells the backward walk which segments hold no records.
    """

    def __init__(
        self,
        max_workers: int | None = None,
        verify_contiguity: bool = True,
        probe: Probe = membership_probe,
        is_empty: EmptyCheck = segment_is_empty,
    ) -> None:
        if max_workers is not None and max_workers <= 0:
            raise ValueError(f"max_workers must be positive, got {max_workers}")
        self._max_workers = max_workers
        self._verify_contiguity = verify_contiguity
        self._probe = probe
        self._is_empty = is_empty

    def locate_first(
        self,
        segments: Sequence[SegmentFile],
        target: Instant,
        cancel: CancelToken | None = None,
    ) -> SegmentIndex | None:
        """Lowest index whose segment contains target, or None."""
        if not segments:
            return None

        register = LowestIndex()
        self._scan(segments, target, register, cancel)

        candidate = register.candidate
        if candidate is None:
            log.debug("no segment contains %s", target.isoformat())
            return None

        walked = self._walk_back(segments, target, candidate, cancel)
        lowest = register.lowest
        if walked != candidate:
            log.debug("corrected candidate %d down to %d", candidate, walked)
        if self._verify_contiguity and lowest is not None and lowest != walked:
            raise ContiguityError(candidate, walked, lowest)
        return walked

    def locate_last(
        self,
        segments: Sequence[SegmentFile],
        target: Instant,
        cancel: CancelToken | None = None,
    ) -> SegmentIndex | None:
        """Highest index whose segment contains target, or None."""
        reversed_view = list(reversed(segments))
        index = self.locate_first(reversed_view, target, cancel)
        if index is None:
            return None
        return len(segments) - 1 - index

    def _scan(
        self,
        segments: Sequence[SegmentFile],
        target: Instant,
        register: LowestIndex,
        cancel: CancelToken | None,
    ) -> None:
        def probe_one(index: int) -> None:
            segment = segments[index]
            if cancel is not None:
                cancel.check(f"probing {segment.name}")
            if self._probe(segment, target):
                if register.offer(index):
                    log.debug("segment %d elected for %s", index, target.isoformat())

        with ThreadPoolExecutor(max_workers=self._max_workers) as pool:
            futures = [pool.submit(probe_one, i) for i in range(len(segments))]
            try:
                for fut in as_completed(futures):
                    fut.result()
            except BaseException:
                # no retries: drop the probes that have not started yet
                for fut in futures:
                    fut.cancel()
                raise

    def _walk_back(
        self,
        segments: Sequence[SegmentFile],
        target: Instant,
        candidate: SegmentIndex,
        cancel: CancelToken | None,
    ) -> SegmentIndex:
        """Step down from candidate while lower segments still match.

        Empty segments are stepped over. The walk stops at the first
        segment with records that does not contain target, usually the
        one just below the candidate.
        """
        lowest = candidate
        for index in range(candidate - 1, -1, -1):
            segment = segments[index]
            if cancel is not None:
                cancel.check(f"re-probing {segment.name}")
            if self._probe(segment, target):
                lowest = index
            elif not self._is_empty(segment):
                break
        return lowest
