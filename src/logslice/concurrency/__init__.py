"""Coordination primitives for the two parallel phases.

  - LowestIndex: election + atomic-minimum register for membership probes
  - CancelToken: cooperative cancellation / timeout, checked per segment
"""
from logslice.concurrency.cancellation import CancelToken
from logslice.concurrency.lowest_index import LowestIndex

__all__ = [
    "CancelToken",
    "LowestIndex",
]
