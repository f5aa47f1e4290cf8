"""
Whole-file statistics for an items file, computed over the structured array
view of every slot from index 1 onward.  A slot counts as in use when its
volume id is non-zero.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from .decoder import as_array
from .profiles import KIND_CACHE
from .reader import FIRST_RECORD, ItemsFile

DEFAULT_TOP = 5


@dataclass(frozen=True)
class ItemsSummary:
    kind: str
    slots: int
    in_use: int
    volumes: int
    cached_bytes: Optional[int]
    # (cell, volume, entries), most entries first.
    busiest: Tuple[Tuple[int, int, int], ...]


def summarize(items: ItemsFile, *, top: int = DEFAULT_TOP) -> ItemsSummary:
    profile = items.profile
    if profile is None:
        raise ValueError(f"{items.path} is not open")
    rows = as_array(profile, items.read_run(FIRST_RECORD))
    is_cache = profile.kind == KIND_CACHE
    cell_key, volume_key = ("fid_cell", "fid_volume") if is_cache else ("cell", "volume")

    live = rows[rows[volume_key] != 0]
    cached_bytes = int(live["chunk_bytes"].sum(dtype=np.uint64)) if is_cache else None
    if len(live) == 0:
        return ItemsSummary(profile.kind, len(rows), 0, 0, cached_bytes, ())

    pairs = np.stack([live[cell_key].astype(np.uint64), live[volume_key].astype(np.uint64)], axis=1)
    volumes, counts = np.unique(pairs, axis=0, return_counts=True)
    order = np.argsort(-counts, kind="stable")[:top]
    busiest = tuple((int(volumes[i, 0]), int(volumes[i, 1]), int(counts[i])) for i in order)
    return ItemsSummary(
        kind=profile.kind,
        slots=len(rows),
        in_use=len(live),
        volumes=len(volumes),
        cached_bytes=cached_bytes,
        busiest=busiest,
    )


def render_summary(summary: ItemsSummary) -> str:
    title = "CacheItems summary" if summary.kind == KIND_CACHE else "VolumeItems summary"
    lines = [
        title,
        f"  slots       {summary.slots}",
        f"  inUse       {summary.in_use}",
        f"  volumes     {summary.volumes}",
    ]
    if summary.cached_bytes is not None:
        lines.append(f"  cachedBytes {summary.cached_bytes}")
    for cell, volume, entries in summary.busiest:
        lines.append(f"  volume {cell}.{volume}: {entries} entries")
    return "\n".join(lines)
