"""Exception hierarchy for extraction failures.

Everything the library raises on purpose derives from LogSliceError so
the CLI can catch one type. "Not found" results from the locators are
NOT errors: they come back as None and the assembler clamps to the
archive edge.
"""
from __future__ import annotations

from pathlib import Path


class LogSliceError(Exception):
    """Base class for all logslice failures."""


class ParseError(LogSliceError):
    """Input text could not be interpreted."""


class TimestampParseError(ParseError):
    """A timestamp field is malformed.

    Once a segment has an unparseable timestamp its ordering can no
    longer be trusted, so this is always fatal for the extraction.
    """

    def __init__(
        self,
        text: str,
        path: Path | None = None,
        line_number: int | None = None,
    ) -> None:
        self.text = text
        self.path = path
        self.line_number = line_number
        where = ""
        if path is not None:
            where = f" in {path}"
            if line_number is not None:
                where += f" at line {line_number}"
        super().__init__(f"Malformed timestamp {text!r}{where}")


class SegmentIOError(LogSliceError):
    """Reading or writing one segment file failed."""

    def __init__(self, path: Path, operation: str, reason: str) -> None:
        self.path = path
        self.operation = operation
        super().__init__(f"Could not {operation} segment {path}: {reason}")


class EmptyArchiveError(LogSliceError):
    """No segment files were supplied."""

    def __init__(self, message: str = "Archive contains no segment files") -> None:
        super().__init__(message)


class ContiguityError(LogSliceError):
    """Segments matching a target instant are not contiguous.

    The backward verification walk assumes every matching segment below
    the elected candidate sits in one unbroken block. When the walk and
    the atomic minimum disagree, the archive is out of order and the
    located index cannot be trusted.
    """

    def __init__(self, candidate: int, walked_to: int, lowest: int) -> None:
        self.candidate = candidate
        self.walked_to = walked_to
        self.lowest = lowest
        super().__init__(
            f"Matching segments are not contiguous: walk from candidate "
            f"{candidate} stopped at {walked_to}, but segment {lowest} "
            f"also matches"
        )


class ExtractionCancelled(LogSliceError):
    """The caller cancelled the extraction at a segment boundary."""


class ExtractionTimeout(ExtractionCancelled):
    """The extraction ran past its configured deadline."""


class OutputDirectoryError(LogSliceError):
    """The output directory could not be created or finalised."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Could not prepare output directory {path}: {reason}")
