from __future__ import annotations

from dataclasses import dataclass
from typing import Union

CACHE_MAGIC = 0x7635ABAF
LEGACY_DATA_SIZE = 48


@dataclass(frozen=True)
class Fid:
    cell: int
    volume: int
    vnode: int
    unique: int

    def __str__(self) -> str:
        return f"{self.cell}.{self.volume}.{self.vnode}.{self.unique}"


@dataclass(frozen=True)
class CacheItemsHeader:
    magic: int
    version: int
    data_size: int
    first_chunk_size: int
    other_chunk_size: int


@dataclass(frozen=True)
class CacheRecord:
    fid: Fid
    mod_time: int
    data_version_hi: int
    data_version_lo: int
    chunk: int
    # Integer inode number, or the hex dump of an opaque file handle.
    inode: Union[int, str]
    chunk_bytes: int
    states: int


@dataclass(frozen=True)
class VolumeRecord:
    cell: int
    volume: int
    next: int
    dotdot: Fid
    mtpoint: Fid
    root_vnode: int
    root_unique: int


ItemRecord = Union[CacheRecord, VolumeRecord]
