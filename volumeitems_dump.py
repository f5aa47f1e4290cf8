#!/usr/bin/env python3
"""
Dump the VolumeItems file of an AFS cache manager.

Records are 52 bytes with no file header (little endian):

    u32 cell, u32 volume, u32 next
    u32 x4  dotdot fid   (cell, volume, vnode, unique)
    u32 x4  mtpoint fid  (cell, volume, vnode, unique)
    u32 root vnode, u32 root unique

Index 0 is the first record on disk; a full dump starts at index 1.
"""

from __future__ import annotations

import argparse
from typing import Sequence

from afsitems.cli import build_parser, parse_cli_args, run
from afsitems.reader import VolumeItemsFile


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = build_parser("Decode records from an AFS VolumeItems file.", with_header=False)
    return parse_cli_args(parser, argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    return run(VolumeItemsFile, args)


if __name__ == "__main__":
    raise SystemExit(main())
