"""Output assembly: range-case analysis and parallel segment writes."""
from logslice.assemble.cases import RangeCase, SegmentPlan, classify, plan_segments
from logslice.assemble.output import (
    AssemblyResult,
    ConfirmCallback,
    OutputAssembler,
    accept,
    decline,
)

__all__ = [
    "AssemblyResult",
    "ConfirmCallback",
    "OutputAssembler",
    "RangeCase",
    "SegmentPlan",
    "accept",
    "classify",
    "decline",
    "plan_segments",
]
