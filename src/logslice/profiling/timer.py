"""Per-extraction timing context.

Created when an extraction starts and handed to the assembler, which
marks the moment the first output segment lands on disk. Nothing here
is process-global: two extractions running side by side each carry
their own timer.
"""
from __future__ import annotations

import threading
import time
from collections.abc import Callable


class ExtractionTimer:
    """Stopwatch started at construction.

    Args:
        clock: Monotonic seconds source (default time.perf_counter).
    """

    def __init__(self, clock: Callable[[], float] = time.perf_counter) -> None:
        self._clock = clock
        self._start = clock()
        self._first_segment_ms: float | None = None
        self._lock = threading.Lock()  # several writers may finish at once

    def elapsed_ms(self) -> float:
        return (self._clock() - self._start) * 1000

    def mark_first_segment(self) -> bool:
        """Record elapsed time if no segment has been marked yet.

        Returns True for the call that set it.
        """
        elapsed = self.elapsed_ms()
        with self._lock:
            if self._first_segment_ms is not None:
                return False
            self._first_segment_ms = elapsed
            return True

    @property
    def first_segment_ms(self) -> float | None:
        with self._lock:
            return self._first_segment_ms
