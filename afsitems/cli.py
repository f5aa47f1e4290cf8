"""
Argument handling shared by ``cacheitems_dump.py`` and ``volumeitems_dump.py``.
"""

from __future__ import annotations

import argparse
import json
import locale
import logging
import re
import sys
from pathlib import Path
from typing import Sequence, TextIO, Type

from .errors import ItemsFileError
from .presenter import COMPACT, STRUCTURED, record_to_dict, render, render_header
from .reader import ItemsFile
from .summary import render_summary, summarize

INDEX_PATTERN = re.compile(r"[0-9]+")
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def parse_index(text: str) -> int:
    if not INDEX_PATTERN.fullmatch(text):
        raise argparse.ArgumentTypeError(f"index must be an unsigned integer, got {text!r}")
    return int(text)


def build_parser(description: str, *, with_header: bool) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument("file", type=Path, help="Items file to decode")
    parser.add_argument(
        "index",
        nargs="?",
        type=parse_index,
        help="Record index to print (default: every record from index 1)",
    )
    parser.add_argument(
        "--oneline",
        action="store_true",
        help="Print each record on one line as key:value pairs (not with --json, --header or --summary)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Emit records as JSON instead of text (not with --header or --summary)",
    )
    if with_header:
        parser.add_argument(
            "--header",
            action="store_true",
            help="Describe the file header and record layout instead of dumping records",
        )
    parser.add_argument(
        "--summary",
        action="store_true",
        help="Print slot usage and per-volume counts instead of dumping records",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log progress to stderr (-v for info, -vv for debug)",
    )
    return parser


def parse_cli_args(parser: argparse.ArgumentParser, argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse ``argv`` and reject output flags that cannot be combined."""

    args = parser.parse_args(argv)
    reports = [flag for flag, on in (("--header", getattr(args, "header", False)), ("--summary", args.summary)) if on]
    formats = [flag for flag, on in (("--json", args.json), ("--oneline", args.oneline)) if on]
    if reports and formats:
        parser.error(f"{formats[0]} cannot be combined with {reports[0]}")
    if len(formats) > 1:
        parser.error("--json cannot be combined with --oneline")
    return args


def configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)


def _dump(items: ItemsFile, args: argparse.Namespace, out: TextIO) -> None:
    if getattr(args, "header", False) or args.summary:
        blocks = []
        if getattr(args, "header", False):
            blocks.append(render_header(items.header, items.profile, items.file_size))
        if args.summary:
            blocks.append(render_summary(summarize(items)))
        print("\n\n".join(blocks), file=out)
        return

    if args.index is not None:
        selected = [(args.index, items.record(args.index))]
    else:
        selected = items.iter_records()

    if args.json:
        payload = [record_to_dict(record, index) for index, record in selected]
        print(json.dumps(payload[0] if args.index is not None else payload, indent=2), file=out)
        return

    mode = COMPACT if args.oneline else STRUCTURED
    separator = "" if args.oneline else "\n"
    first = True
    for index, record in selected:
        if not first and separator:
            print(separator, end="", file=out)
        print(render(record, mode, index), file=out)
        first = False


def run(items_cls: Type[ItemsFile], args: argparse.Namespace, out: TextIO | None = None) -> int:
    out = out or sys.stdout
    configure_logging(args.verbose)
    try:
        locale.setlocale(locale.LC_TIME, "")
    except locale.Error:
        logging.getLogger(__name__).debug("falling back to the C locale for timestamps")
    try:
        with items_cls(args.file) as items:
            _dump(items, args, out)
    except ItemsFileError as exc:
        print(f"[error] {exc}", file=sys.stderr)
        return 1
    return 0
