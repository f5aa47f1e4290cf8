from __future__ import annotations

import logging
import struct
from typing import BinaryIO, Tuple

from .entities import CacheItemsHeader, LEGACY_DATA_SIZE
from .errors import FormatError
from .profiles import EXTENDED_VERSION, FormatProfile, check_prefix, classify

logger = logging.getLogger(__name__)

PREFIX = struct.Struct("<Ii")
LEGACY_TAIL = struct.Struct("<ii")
EXTENDED_TAIL = struct.Struct("<iii")


def _read_exact(stream: BinaryIO, size: int, what: str) -> bytes:
    data = stream.read(size)
    if len(data) < size:
        raise FormatError(f"file too short for {what}: got {len(data)} of {size} bytes")
    return data


def read_header(stream: BinaryIO) -> CacheItemsHeader:
    """
    Read the CacheItems header from the current position of ``stream``.

    The magic and version are validated before any version-specific bytes are
    consumed, so a foreign file fails with ``FormatError`` and an unknown
    version with ``UnsupportedVersionError`` regardless of what follows.
    """

    magic, version = PREFIX.unpack(_read_exact(stream, PREFIX.size, "magic and version"))
    check_prefix(magic, version)
    if version == EXTENDED_VERSION:
        data_size, first, other = EXTENDED_TAIL.unpack(
            _read_exact(stream, EXTENDED_TAIL.size, "extended header")
        )
    else:
        first, other = LEGACY_TAIL.unpack(_read_exact(stream, LEGACY_TAIL.size, "legacy header"))
        data_size = LEGACY_DATA_SIZE
    logger.debug("CacheItems header: version=%d dataSize=%d first=%d other=%d", version, data_size, first, other)
    return CacheItemsHeader(
        magic=magic,
        version=version,
        data_size=data_size,
        first_chunk_size=first,
        other_chunk_size=other,
    )


def read_profile(stream: BinaryIO) -> Tuple[CacheItemsHeader, FormatProfile]:
    header = read_header(stream)
    return header, classify(header.magic, header.version, header.data_size)
