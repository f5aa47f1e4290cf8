"""
Text renderings of decoded records.

Both modes walk the same ordered ``(key, value)`` list, so a compact line and a
structured block always name the same fields in the same order.  Compact lines
are single ``key:value`` tokens separated by spaces, meant for grep/awk.
"""

from __future__ import annotations

import time
from typing import Any, Dict, List, Tuple

from .entities import CacheItemsHeader, CacheRecord, ItemRecord, VolumeRecord
from .locator import record_count, tail_bytes
from .profiles import FormatProfile

STRUCTURED = "structured"
COMPACT = "compact"
MODES = (STRUCTURED, COMPACT)

_LABEL_WIDTH = 11


def format_timestamp(value: int) -> str:
    """Locale-dependent rendering (``%c``) of a Unix timestamp."""

    try:
        return time.strftime("%c", time.localtime(value))
    except (OverflowError, OSError, ValueError):
        return "out of range"


def record_fields(record: ItemRecord) -> List[Tuple[str, str]]:
    if isinstance(record, CacheRecord):
        return [
            ("fid", str(record.fid)),
            ("modTime", str(record.mod_time)),
            ("versionHi", str(record.data_version_hi)),
            ("versionLo", str(record.data_version_lo)),
            ("chunk", str(record.chunk)),
            ("inode", str(record.inode)),
            ("chunkBytes", str(record.chunk_bytes)),
            ("states", f"{record.states:#x}"),
        ]
    if isinstance(record, VolumeRecord):
        return [
            ("cell", str(record.cell)),
            ("volume", str(record.volume)),
            ("next", str(record.next)),
            ("dotdot", str(record.dotdot)),
            ("mtpoint", str(record.mtpoint)),
            ("rootVnode", str(record.root_vnode)),
            ("rootUnique", str(record.root_unique)),
        ]
    raise TypeError(f"cannot render {type(record).__name__}")


def _title(record: ItemRecord, index: int | None) -> str:
    name = "CacheItems" if isinstance(record, CacheRecord) else "VolumeItems"
    return f"{name} entry" if index is None else f"{name} entry {index}"


def render(record: ItemRecord, mode: str = STRUCTURED, index: int | None = None) -> str:
    fields = record_fields(record)
    if mode == COMPACT:
        tokens = [] if index is None else [f"index:{index}"]
        tokens.extend(f"{key}:{value}" for key, value in fields)
        return " ".join(tokens)
    if mode != STRUCTURED:
        raise ValueError(f"unknown render mode {mode!r}; expected one of {MODES}")
    lines = [_title(record, index)]
    for key, value in fields:
        if key == "modTime":
            value = f"{value} ({format_timestamp(int(value))})"
        lines.append(f"  {key:<{_LABEL_WIDTH}} {value}")
    return "\n".join(lines)


def record_to_dict(record: ItemRecord, index: int | None = None) -> Dict[str, Any]:
    if isinstance(record, CacheRecord):
        data: Dict[str, Any] = {
            "fid": [record.fid.cell, record.fid.volume, record.fid.vnode, record.fid.unique],
            "modTime": record.mod_time,
            "versionHi": record.data_version_hi,
            "versionLo": record.data_version_lo,
            "chunk": record.chunk,
            "inode": record.inode,
            "chunkBytes": record.chunk_bytes,
            "states": record.states,
        }
    else:
        data = {
            "cell": record.cell,
            "volume": record.volume,
            "next": record.next,
            "dotdot": [record.dotdot.cell, record.dotdot.volume, record.dotdot.vnode, record.dotdot.unique],
            "mtpoint": [record.mtpoint.cell, record.mtpoint.volume, record.mtpoint.vnode, record.mtpoint.unique],
            "rootVnode": record.root_vnode,
            "rootUnique": record.root_unique,
        }
    if index is not None:
        data = {"index": index, **data}
    return data


def describe_layout(profile: FormatProfile) -> str:
    locator = next((spec for spec in profile.fields if spec.name == "inode"), None)
    parts = [f"header {profile.header_size} bytes", f"record {profile.record_size} bytes"]
    if locator is not None:
        parts.append(f"inode {locator.encoding} x{locator.width}")
    return f"{profile.name} ({', '.join(parts)})"


def render_header(header: CacheItemsHeader | None, profile: FormatProfile, file_size: int) -> str:
    """Describe the file header (if any) and the layout selected from it."""

    title = "CacheItems header" if header is not None else "VolumeItems layout"
    rows: List[Tuple[str, str]] = []
    if header is not None:
        rows.extend(
            [
                ("magic", f"0x{header.magic:08x}"),
                ("version", str(header.version)),
                ("dataSize", str(header.data_size)),
                ("firstCSize", str(header.first_chunk_size)),
                ("otherCSize", str(header.other_chunk_size)),
            ]
        )
    rows.extend(
        [
            ("layout", describe_layout(profile)),
            ("fileSize", str(file_size)),
            ("records", str(record_count(file_size, profile))),
            ("tailBytes", str(tail_bytes(file_size, profile))),
        ]
    )
    return "\n".join([title] + [f"  {key:<{_LABEL_WIDTH}} {value}" for key, value in rows])
