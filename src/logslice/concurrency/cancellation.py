"""Cooperative cancellation checked at segment boundaries.

Workers call check() before they start on a segment, never in the
middle of one. A segment already being read or written always runs to
completion, so cancelling never leaves a half-written output file from
the worker that noticed it.
"""
from __future__ import annotations

import threading
import time

from logslice.domain.errors import ExtractionCancelled, ExtractionTimeout


class CancelToken:
    """Caller-owned flag plus an optional deadline.

    Args:
        timeout: Seconds from construction until check() starts raising
            ExtractionTimeout. None means no deadline.
    """

    def __init__(self, timeout: float | None = None) -> None:
        if timeout is not None and timeout <= 0:
            raise ValueError(f"timeout must be positive, got {timeout}")
        self._event = threading.Event()
        self._timeout = timeout
        self._deadline = time.monotonic() + timeout if timeout is not None else None

    def cancel(self) -> None:
        """Ask every worker to stop at its next segment boundary."""
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def expired(self) -> bool:
        return self._deadline is not None and time.monotonic() >= self._deadline

    def check(self, where: str = "") -> None:
        """Raise if cancelled or past the deadline; otherwise return."""
        suffix = f" before {where}" if where else ""
        if self.expired:
            raise ExtractionTimeout(
                f"Extraction exceeded its {self._timeout}s timeout{suffix}"
            )
        if self._event.is_set():
            raise ExtractionCancelled(f"Extraction cancelled{suffix}")
