#!/usr/bin/env python3
"""
Dump the CacheItems file of an AFS cache manager.

The header (magic 0x7635abaf) is read first; its version and declared
dataSize decide how wide the per-record inode field is:

    version 2/3       16-byte header, 48-byte records, u64 inode
    version 4, 48     20-byte header, 48-byte records, u64 inode
    version 4, >40    20-byte header, dataSize-byte records, opaque handle (hex)

Example usage:

    python cacheitems_dump.py /usr/vice/cache/CacheItems 17
    python cacheitems_dump.py CacheItems --oneline | grep 'fid:1.536870915.'
"""

from __future__ import annotations

import argparse
from typing import Sequence

from afsitems.cli import build_parser, parse_cli_args, run
from afsitems.reader import CacheItemsFile


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = build_parser("Decode records from an AFS CacheItems file.", with_header=True)
    return parse_cli_args(parser, argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    return run(CacheItemsFile, args)


if __name__ == "__main__":
    raise SystemExit(main())
