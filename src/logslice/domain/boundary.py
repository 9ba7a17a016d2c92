"""Which end of a range a line search is looking for."""
from enum import Enum, auto


class Boundary(Enum):
    LOWER = auto()  # first line at or after the target
    UPPER = auto()  # last line at or before the target

    def is_lower(self) -> bool:
        """Returns True only for LOWER."""
        return self is Boundary.LOWER
