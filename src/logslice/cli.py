"""logslice CLI entry point.

Usage: logslice extract -f 2020-08-22T21:40:47.762Z -t 2020-08-22T21:53:32.620Z -i /var/log/archive
"""
from __future__ import annotations

import argparse
import logging
import os
import subprocess
import sys
from pathlib import Path

from logslice.assemble.output import accept
from logslice.config import DEFAULT_OUTPUT_PREFIX, ExtractorConfig
from logslice.domain.errors import LogSliceError
from logslice.domain.records import ExtractionRange, RangeEnclosesArchive
from logslice.segments.discovery import SEGMENT_GLOB, discover_segments
from logslice.timestamps.codec import format_instant, is_iso8601, parse

log = logging.getLogger("logslice")

EXAMPLE = "logslice extract -f 2020-08-22T21:40:47.762Z -t 2020-08-22T21:53:32.620Z -i /data/TestLogs"


def _add_extract_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser(
        "extract",
        help="Copy the records of a time range out of a log archive.",
    )
    p.add_argument(
        "-f", "--from", dest="from_ts", required=True,
        help="Range start, ISO 8601 UTC (e.g. 2020-08-22T21:40:47.762Z)",
    )
    p.add_argument(
        "-t", "--to", dest="to_ts", required=True,
        help="Range end, ISO 8601 UTC (inclusive)",
    )
    p.add_argument(
        "-i", "--input", dest="input_dir", required=True, type=Path,
        help=f"Archive directory, searched recursively for {SEGMENT_GLOB}",
    )
    p.add_argument(
        "--pattern", default=SEGMENT_GLOB,
        help=f"Segment file name pattern (default: {SEGMENT_GLOB})",
    )
    p.add_argument(
        "--output-parent", type=Path, default=None,
        help="Create the output directory here (default: next to the archive)",
    )
    p.add_argument(
        "--prefix", default=DEFAULT_OUTPUT_PREFIX,
        help=f"Output directory name prefix (default: {DEFAULT_OUTPUT_PREFIX})",
    )
    p.add_argument(
        "--workers", type=int, default=None,
        help="Thread pool size for probing and writing (default: automatic)",
    )
    p.add_argument(
        "--timeout", type=float, default=None,
        help="Give up after this many seconds, checked between segments",
    )
    p.add_argument(
        "--staged", action="store_true",
        help="Write to a temporary folder and rename it only when all segments succeed.",
    )
    p.add_argument(
        "-y", "--yes", action="store_true",
        help="Copy the whole archive without asking when the range encloses it.",
    )
    p.add_argument(
        "--open", action="store_true",
        help="Open the output folder in the file browser when done.",
    )


def _validate(args: argparse.Namespace) -> list[str]:
    """Collect every problem with the inputs, not just the first."""
    problems = []
    if not is_iso8601(args.from_ts):
        problems.append(f"From timestamp is not in the correct format: {args.from_ts}")
    if not is_iso8601(args.to_ts):
        problems.append(f"To timestamp is not in the correct format: {args.to_ts}")
    if not args.input_dir.is_dir():
        problems.append(f"The given directory does not exist: {args.input_dir}")
    if not problems and parse(args.from_ts) > parse(args.to_ts):
        problems.append(
            "The From timestamp is greater than the To timestamp. "
            "You can exchange the two and try again."
        )
    return problems


def prompt_confirmation(notice: RangeEnclosesArchive) -> bool:
    """Ask on the terminal before copying the entire archive."""
    rng = notice.extraction_range
    print(
        f"The range {format_instant(rng.start)} .. {format_instant(rng.end)} encloses "
        f"the entire archive ({notice.segment_count} segment files). The output "
        f"would be identical to the archive."
    )
    while True:
        try:
            answer = input("Generate the output logs anyway? [y/N] ").strip().lower()
        except EOFError:
            return False
        if answer in ("y", "yes"):
            return True
        if answer in ("", "n", "no"):
            return False
        print("Please answer y or n.")


def open_in_file_browser(path: Path) -> None:
    """Post-completion hook: show the output folder to the user."""
    if sys.platform.startswith("win"):
        os.startfile(path)  # type: ignore[attr-defined]
        return
    opener = "open" if sys.platform == "darwin" else "xdg-open"
    try:
        subprocess.Popen([opener, str(path)])
    except OSError as exc:
        log.warning("could not open %s with %s: %s", path, opener, exc)


def _run_extract(args: argparse.Namespace) -> int:
    from logslice.extractor import extract
    from logslice.profiling.report import format_report

    problems = _validate(args)
    if problems:
        for problem in problems:
            print(problem, file=sys.stderr)
        print("Please check the inputs you have provided.", file=sys.stderr)
        print(f"Example of a valid input:\n  {EXAMPLE}", file=sys.stderr)
        return 2

    segments = discover_segments(args.input_dir, args.pattern)
    if not segments:
        print(f"No log files matching {args.pattern} exist in {args.input_dir}", file=sys.stderr)
        return 1

    try:
        config = ExtractorConfig(
            max_workers=args.workers,
            output_prefix=args.prefix,
            output_parent=args.output_parent,
            staged=args.staged,
            timeout=args.timeout,
        )
    except ValueError as exc:
        print(f"Invalid option: {exc}", file=sys.stderr)
        return 2

    confirm = accept if args.yes else prompt_confirmation
    try:
        result = extract(
            segments,
            ExtractionRange(parse(args.from_ts), parse(args.to_ts)),
            config=config,
            confirm=confirm,
        )
    except LogSliceError as exc:
        log.error("%s", exc)
        print("Output logs could not be generated.", file=sys.stderr)
        return 1

    print(format_report(result))
    if result.output_dir is not None:
        print(f"Check output logs at {result.output_dir}")
        if args.open:
            open_in_file_browser(result.output_dir)
    elif result.declined:
        print("Output logs have not been generated. The entire archive lies within the given time range.")
    else:
        print("No records fall within the given time range; nothing was generated.")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="logslice",
        description="Time-range extractor for sharded log archives -- pure Python, zero infrastructure.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Log locator and writer details.",
    )
    subparsers = parser.add_subparsers(dest="command")

    _add_extract_parser(subparsers)

    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        return 0

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "extract":
        return _run_extract(args)
    return 0


if __name__ == "__main__":
    sys.exit(main())
