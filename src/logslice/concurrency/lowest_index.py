"""Shared register for the lowest matching segment index.

Membership probes run concurrently and several may match at once (a run
of equal timestamps can straddle segment files). A plain
`self.found = index` from each worker is a lost-update race: whichever
thread writes last wins, not the smallest index. Every offer goes
through one lock instead, which gives two things at once:

  - election: the first offer becomes the candidate
  - atomic minimum: the register keeps the smallest index ever offered

The lock guards three ints, so it is held for a handful of bytecodes
and contention stays negligible next to the file I/O around it.
"""
from __future__ import annotations

import threading


class LowestIndex:
    """Lock-protected atomic-minimum register with first-offer election."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._candidate: int | None = None
        self._lowest: int | None = None
        self._offers = 0

    def offer(self, index: int) -> bool:
        """Record a matching index. Returns True if this offer won the election."""
        if index < 0:
            raise ValueError(f"index must be >= 0, got {index}")
        with self._lock:
            self._offers += 1
            if self._lowest is None or index < self._lowest:
                self._lowest = index
            if self._candidate is None:
                self._candidate = index
                return True
            return False

    @property
    def candidate(self) -> int | None:
        """Index of the first match reported, or None."""
        with self._lock:
            return self._candidate

    @property
    def lowest(self) -> int | None:
        """Smallest index offered so far, or None."""
        with self._lock:
            return self._lowest

    @property
    def offers(self) -> int:
        with self._lock:
            return self._offers
