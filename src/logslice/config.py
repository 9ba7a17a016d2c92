"""Extraction settings.

One frozen dataclass instead of a config file: the CLI maps its flags
onto it, library callers construct it directly.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

DEFAULT_OUTPUT_PREFIX = "OutputLogs-"


@dataclass(frozen=True, slots=True)
class ExtractorConfig:
    """Knobs for one extraction.

    Attributes:
        max_workers: Thread pool size for both parallel phases.
            None uses ThreadPoolExecutor's default.
        output_prefix: Output directory name prefix; the UTC creation
            time is appended.
        output_parent: Where the output directory is created. None means
            next to the archive root (its sibling).
        staged: Write into a temporary directory and rename it into
            place only when every segment succeeded. Off by default,
            which can leave partial output behind on a write failure.
        timeout: Seconds before the extraction gives up at the next
            segment boundary. None means no limit.
        verify_contiguity: Fail loudly if segments matching a target are
            not contiguous (out-of-order archive).
    """
    max_workers: int | None = None
    output_prefix: str = DEFAULT_OUTPUT_PREFIX
    output_parent: Path | None = None
    staged: bool = False
    timeout: float | None = None
    verify_contiguity: bool = True

    def __post_init__(self) -> None:
        if self.max_workers is not None and self.max_workers <= 0:
            raise ValueError(f"max_workers must be positive, got {self.max_workers}")
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
        if not self.output_prefix or any(sep in self.output_prefix for sep in "/\\"):
            raise ValueError(
                f"output_prefix must be a non-empty file name, got {self.output_prefix!r}"
            )
