"""Report formatting for extraction results.

Turns an ExtractionResult into the summary the CLI prints.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from logslice.timestamps.codec import format_instant

if TYPE_CHECKING:
    from logslice.extractor import ExtractionResult


def _index(value: int | None) -> str:
    return "not found" if value is None else str(value)


def format_report(result: ExtractionResult, label: str = "Extraction") -> str:
    """Format an ExtractionResult as a readable report string."""
    rng = result.extraction_range
    lines = [
        f"=== {label} ===",
        f"Range:             {format_instant(rng.start)} .. {format_instant(rng.end)}",
        f"Segments:          {result.segment_count:,}",
        f"Start segment:     {_index(result.start_index)}",
        f"End segment:       {_index(result.end_index)}",
        f"Case:              {result.case.name}",
    ]
    if result.declined:
        lines.append("Output:            not generated (full copy declined)")
    elif result.output_dir is None:
        lines.append("Output:            not generated (no records in range)")
    else:
        lines.append(f"Output:            {result.output_dir}")
        lines.append(f"Files written:     {len(result.written):,}")
    if result.first_segment_ms is not None:
        lines.append(f"First file after:  {result.first_segment_ms:.1f} ms")
    lines.append(f"Total time:        {result.total_ms:.1f} ms")
    return "\n".join(lines)
