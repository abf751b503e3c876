"""Command-line front end: parse a JSON file and print its value tree."""

import logging
import sys
from argparse import ArgumentParser
from argparse import Namespace
from pathlib import Path

import jsontree

logger = logging.getLogger(__name__)


def create_argument_parser() -> ArgumentParser:
    """Create the argument parser for the jsontree command."""
    parser = ArgumentParser(
        prog="jsontree",
        description="Parse a JSON document and print the resulting value tree.",
    )
    parser.add_argument(
        "file",
        nargs="?",
        default="-",
        help="JSON file to parse; '-' or omitted reads standard input",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=jsontree.DEFAULT_MAX_DEPTH,
        help="Maximum array/object nesting depth (default: %(default)s)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Only report errors; do not print the parsed value",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def set_up_logging(verbose: bool) -> None:
    """Configure console logging for the command."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def read_source(args: Namespace) -> str:
    """Reads the document named on the command line."""
    if args.file == "-":
        return sys.stdin.read()
    # newline="" keeps CRLF intact so reported positions match the file
    with Path(args.file).open(encoding="utf-8", newline="") as fp:
        return fp.read()


def main(argv: list[str] | None = None) -> int:
    """Entry point; returns the process exit status."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)
    set_up_logging(args.verbose)

    try:
        source = read_source(args)
    except (OSError, UnicodeDecodeError) as e:
        print(f"jsontree: cannot read {args.file}: {e}", file=sys.stderr)
        return 2

    try:
        value = jsontree.parse(source, max_depth=args.max_depth)
    except ValueError as e:
        # ParseConfig rejects a bad --max-depth with a plain ValueError
        if not isinstance(e, jsontree.ParseError):
            parser.error(str(e))
        print(f"Error: {e}", file=sys.stderr)
        print(e.render(), file=sys.stderr)
        return 1

    logger.info("Parsed %s (%d characters)", args.file, len(source))
    if not args.quiet:
        print(repr(value))
    return 0
