"""Shared type aliases used across the domain."""
from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import TypeAlias

Instant: TypeAlias = datetime  # timezone-aware, always UTC
LogLine: TypeAlias = str       # "<timestamp>,<payload>", never mutated
SegmentPath: TypeAlias = Path
SegmentIndex: TypeAlias = int
LineIndex: TypeAlias = int
