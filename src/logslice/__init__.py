"""logslice: cut a time range out of a sharded, time-ordered log archive.

Typical use:

    from logslice import extract, ExtractionRange
    from logslice.timestamps import parse

    result = extract(
        segment_paths,
        ExtractionRange(parse("2020-08-22T21:40:47.762Z"),
                        parse("2020-08-22T21:53:32.620Z")),
    )
"""
from logslice.config import ExtractorConfig
from logslice.domain import ExtractionRange
from logslice.extractor import ExtractionResult, extract

__version__ = "0.1.0"

__all__ = [
    "ExtractionRange",
    "ExtractionResult",
    "ExtractorConfig",
    "extract",
]
