"""Locators: map a target instant to a segment index or a line index."""
from logslice.locate.archive_locator import ArchiveLocator
from logslice.locate.coverage import Resolution, read_bounds, resolve_uncovered
from logslice.locate.line_boundary import locate_in_segment, locate_line
from logslice.locate.membership import contains, is_empty, probe

__all__ = [
    "ArchiveLocator",
    "Resolution",
    "contains",
    "is_empty",
    "locate_in_segment",
    "locate_line",
    "probe",
    "read_bounds",
    "resolve_uncovered",
]
