"""
Turn raw record slots into ``CacheRecord``/``VolumeRecord`` values.

The slot bytes are viewed through the profile's numpy structured dtype, so the
field offsets live in exactly one place (``profiles.py``).  A single call to
``np.frombuffer`` covers one slot or a whole run of them; the returned records
never alias the input buffer.
"""

from __future__ import annotations

from typing import Callable, Dict, List

import numpy as np

from .entities import CacheRecord, Fid, ItemRecord, VolumeRecord
from .errors import ShortReadError
from .profiles import KIND_CACHE, KIND_VOLUME, FormatProfile

FID_PARTS = ("cell", "volume", "vnode", "unique")


def _fid(row: np.void, prefix: str) -> Fid:
    return Fid(*(int(row[f"{prefix}_{part}"]) for part in FID_PARTS))


def _locator(row: np.void, profile: FormatProfile) -> int | str:
    value = row["inode"]
    if profile.locator.encoding == "hex":
        return value.tobytes().hex()
    return int(value)


def _cache_record(row: np.void, profile: FormatProfile) -> CacheRecord:
    return CacheRecord(
        fid=_fid(row, "fid"),
        mod_time=int(row["mod_time"]),
        data_version_hi=int(row["version_hi"]),
        data_version_lo=int(row["version_lo"]),
        chunk=int(row["chunk"]),
        inode=_locator(row, profile),
        chunk_bytes=int(row["chunk_bytes"]),
        states=int(row["states"]),
    )


def _volume_record(row: np.void, profile: FormatProfile) -> VolumeRecord:
    return VolumeRecord(
        cell=int(row["cell"]),
        volume=int(row["volume"]),
        next=int(row["next"]),
        dotdot=_fid(row, "dotdot"),
        mtpoint=_fid(row, "mtpoint"),
        root_vnode=int(row["root_vnode"]),
        root_unique=int(row["root_unique"]),
    )


_BUILDERS: Dict[str, Callable[[np.void, FormatProfile], ItemRecord]] = {
    KIND_CACHE: _cache_record,
    KIND_VOLUME: _volume_record,
}


def as_array(profile: FormatProfile, blob: bytes) -> np.ndarray:
    """View every whole slot in ``blob`` as a structured array."""

    count = len(blob) // profile.record_size
    if count == 0:
        return np.zeros(0, dtype=profile.dtype)
    return np.frombuffer(blob, dtype=profile.dtype, count=count)


def decode(kind: str, profile: FormatProfile, raw: bytes) -> ItemRecord:
    if kind != profile.kind:
        raise ValueError(f"profile {profile.name} describes {profile.kind} records, not {kind}")
    if len(raw) < profile.record_size:
        raise ShortReadError(len(raw), profile.record_size)
    row = np.frombuffer(raw, dtype=profile.dtype, count=1)[0]
    return _BUILDERS[kind](row, profile)


def decode_many(profile: FormatProfile, blob: bytes) -> List[ItemRecord]:
    """Decode consecutive slots; a partial trailing slot is ignored."""

    builder = _BUILDERS[profile.kind]
    return [builder(row, profile) for row in as_array(profile, blob)]
