"""
Record layouts for the cache-manager items files.

A ``FormatProfile`` is resolved once per file from the header (or fixed, for
VolumeItems) and everything downstream works from it: the locator uses its
sizes, the decoder unpacks through its numpy dtype.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Tuple

import numpy as np

from .entities import CACHE_MAGIC, LEGACY_DATA_SIZE
from .errors import FormatError, UnsupportedLayoutError, UnsupportedVersionError

KIND_CACHE = "cache"
KIND_VOLUME = "volume"

LEGACY_HEADER_SIZE = 16
EXTENDED_HEADER_SIZE = 20
INODE64_RECORD_SIZE = 48
# Bytes of a cache record that are not the storage locator: 8 x u32 before it,
# chunkBytes + states + 3 bytes of padding after it.
CACHE_FIXED_BYTES = 40
VOLUME_RECORD_SIZE = 52

LEGACY_VERSIONS = (2, 3)
EXTENDED_VERSION = 4

_NUMPY_CODES = {"u8": "u1", "u32": "<u4", "u64": "<u8"}


@dataclass(frozen=True)
class FieldSpec:
    name: str
    width: int
    encoding: str

    def numpy_format(self) -> str:
        if self.encoding == "hex":
            return f"V{self.width}"
        return _NUMPY_CODES[self.encoding]


@dataclass(frozen=True)
class FormatProfile:
    name: str
    kind: str
    header_size: int
    record_size: int
    fields: Tuple[FieldSpec, ...]

    def __post_init__(self) -> None:
        used = sum(spec.width for spec in self.fields)
        if used > self.record_size:
            raise ValueError(f"{self.name}: fields need {used} bytes, record holds {self.record_size}")

    @property
    def dtype(self) -> np.dtype:
        return _build_dtype(self.fields, self.record_size)

    @property
    def locator(self) -> FieldSpec:
        return next(spec for spec in self.fields if spec.name == "inode")


@lru_cache(maxsize=None)
def _build_dtype(fields: Tuple[FieldSpec, ...], record_size: int) -> np.dtype:
    names, formats, offsets = [], [], []
    offset = 0
    for spec in fields:
        names.append(spec.name)
        formats.append(spec.numpy_format())
        offsets.append(offset)
        offset += spec.width
    return np.dtype({"names": names, "formats": formats, "offsets": offsets, "itemsize": record_size})


def _fid_fields(prefix: str) -> Tuple[FieldSpec, ...]:
    # Cell, volume, vnode, unique: output depends on this order.
    return tuple(FieldSpec(f"{prefix}_{part}", 4, "u32") for part in ("cell", "volume", "vnode", "unique"))


def cache_fields(record_size: int) -> Tuple[FieldSpec, ...]:
    """Field layout of a cache record whose slots are ``record_size`` bytes."""

    if record_size == INODE64_RECORD_SIZE:
        locator = FieldSpec("inode", 8, "u64")
    elif record_size > CACHE_FIXED_BYTES:
        locator = FieldSpec("inode", record_size - CACHE_FIXED_BYTES, "hex")
    else:
        raise UnsupportedLayoutError(record_size)
    return (
        *_fid_fields("fid"),
        FieldSpec("mod_time", 4, "u32"),
        FieldSpec("version_hi", 4, "u32"),
        FieldSpec("version_lo", 4, "u32"),
        FieldSpec("chunk", 4, "u32"),
        locator,
        FieldSpec("chunk_bytes", 4, "u32"),
        FieldSpec("states", 1, "u8"),
    )


LEGACY_CACHE_PROFILE = FormatProfile(
    name="cache-legacy",
    kind=KIND_CACHE,
    header_size=LEGACY_HEADER_SIZE,
    record_size=LEGACY_DATA_SIZE,
    fields=cache_fields(LEGACY_DATA_SIZE),
)

VOLUME_PROFILE = FormatProfile(
    name="volume",
    kind=KIND_VOLUME,
    header_size=0,
    record_size=VOLUME_RECORD_SIZE,
    fields=(
        FieldSpec("cell", 4, "u32"),
        FieldSpec("volume", 4, "u32"),
        FieldSpec("next", 4, "u32"),
        *_fid_fields("dotdot"),
        *_fid_fields("mtpoint"),
        FieldSpec("root_vnode", 4, "u32"),
        FieldSpec("root_unique", 4, "u32"),
    ),
)


def check_prefix(magic: int, version: int) -> None:
    if magic != CACHE_MAGIC:
        raise FormatError(f"bad magic 0x{magic:08x}, expected 0x{CACHE_MAGIC:08x}")
    if version not in LEGACY_VERSIONS and version != EXTENDED_VERSION:
        raise UnsupportedVersionError(version)


def classify(magic: int, version: int, data_size: int = LEGACY_DATA_SIZE) -> FormatProfile:
    """Select the cache profile for a header's ``(magic, version, dataSize)``."""

    check_prefix(magic, version)
    if version in LEGACY_VERSIONS:
        return LEGACY_CACHE_PROFILE
    fields = cache_fields(data_size)
    name = "cache-inode64" if data_size == INODE64_RECORD_SIZE else "cache-handle"
    return FormatProfile(
        name=name,
        kind=KIND_CACHE,
        header_size=EXTENDED_HEADER_SIZE,
        record_size=data_size,
        fields=fields,
    )
