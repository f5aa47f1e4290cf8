"""
Random access to CacheItems and VolumeItems files.

Usage:

    with CacheItemsFile("/usr/vice/cache/CacheItems") as items:
        for index, record in items.iter_records():
            ...

Single-record reads seek to ``offset_of(index)`` on their own, so records can
be fetched in any order; ``iter_records`` reads the whole run of slots once.  The file is only ever opened for reading.
"""

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from itertools import count
from pathlib import Path
from typing import BinaryIO, Iterator, Optional, Tuple

from .decoder import decode, decode_many
from .entities import CacheItemsHeader, ItemRecord
from .errors import OpenError, TruncatedRecordError
from .header import read_profile
from .locator import offset_of, record_count, tail_bytes
from .profiles import KIND_CACHE, KIND_VOLUME, VOLUME_PROFILE, FormatProfile

logger = logging.getLogger(__name__)

FIRST_RECORD = 1


class ItemsFile(ABC):
    kind: str = ""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self.header: Optional[CacheItemsHeader] = None
        self.profile: Optional[FormatProfile] = None
        self.file_size = 0
        self._fh: Optional[BinaryIO] = None

    def __enter__(self) -> "ItemsFile":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @abstractmethod
    def _load_profile(self, fh: BinaryIO) -> Tuple[Optional[CacheItemsHeader], FormatProfile]:
        """Read whatever header the file has and pick its record layout."""

    def open(self) -> None:
        try:
            fh = open(self.path, "rb")
        except OSError as exc:
            raise OpenError(self.path, exc.strerror or str(exc)) from exc
        try:
            self.file_size = os.fstat(fh.fileno()).st_size
            self.header, self.profile = self._load_profile(fh)
        except BaseException:
            fh.close()
            raise
        self._fh = fh
        logger.info(
            "%s: %s layout, %d bytes, %d record slots",
            self.path,
            self.profile.name,
            self.file_size,
            self.record_count,
        )
        tail = tail_bytes(self.file_size, self.profile)
        if tail:
            logger.warning(
                "%s: %d trailing bytes do not fill a %d-byte record; file looks truncated",
                self.path,
                tail,
                self.profile.record_size,
            )

    def close(self) -> None:
        if self._fh is not None:
            self._fh.close()
            self._fh = None

    def _require_open(self) -> Tuple[BinaryIO, FormatProfile]:
        if self._fh is None or self.profile is None:
            raise ValueError(f"{self.path} is not open")
        return self._fh, self.profile

    @property
    def record_count(self) -> int:
        _, profile = self._require_open()
        return record_count(self.file_size, profile)

    def read_raw(self, index: int) -> bytes:
        fh, profile = self._require_open()
        offset = offset_of(index, profile)
        if offset >= self.file_size:
            raise TruncatedRecordError(index, offset, 0, profile.record_size)
        try:
            fh.seek(offset)
            data = fh.read(profile.record_size)
        except (OSError, ValueError) as exc:
            raise TruncatedRecordError(index, offset, 0, profile.record_size) from exc
        if len(data) < profile.record_size:
            raise TruncatedRecordError(index, offset, len(data), profile.record_size)
        return data

    def read_run(self, start: int = FIRST_RECORD) -> bytes:
        """Raw bytes of every whole slot from ``start`` to the last one."""

        fh, profile = self._require_open()
        slots = max(0, self.record_count - start)
        if slots == 0:
            return b""
        fh.seek(offset_of(start, profile))
        return fh.read(slots * profile.record_size)

    def record(self, index: int) -> ItemRecord:
        _, profile = self._require_open()
        return decode(self.kind, profile, self.read_raw(index))

    def iter_records(self, start: int = FIRST_RECORD) -> Iterator[Tuple[int, ItemRecord]]:
        """Decode every whole slot from ``start`` in a single read."""

        _, profile = self._require_open()
        return zip(count(start), decode_many(profile, self.read_run(start)))


class CacheItemsFile(ItemsFile):
    kind = KIND_CACHE

    def _load_profile(self, fh: BinaryIO) -> Tuple[Optional[CacheItemsHeader], FormatProfile]:
        return read_profile(fh)


class VolumeItemsFile(ItemsFile):
    kind = KIND_VOLUME

    def _load_profile(self, fh: BinaryIO) -> Tuple[Optional[CacheItemsHeader], FormatProfile]:
        return None, VOLUME_PROFILE
