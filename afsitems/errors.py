"""
Exception hierarchy for the CacheItems/VolumeItems decoders.
"""

from __future__ import annotations

from pathlib import Path


class ItemsFileError(Exception):
    """Base class for every failure while decoding an items file."""


class OpenError(ItemsFileError):
    """Raised when the items file cannot be opened or sized."""

    def __init__(self, path: Path | str, reason: str) -> None:
        super().__init__(f"cannot open {path}: {reason}")
        self.path = path
        self.reason = reason


class FormatError(ItemsFileError):
    """Raised when the header is short or the magic number mismatches."""


class UnsupportedVersionError(ItemsFileError):
    """Raised when the header declares a version with no known layout."""

    def __init__(self, version: int) -> None:
        super().__init__(f"unsupported CacheItems version {version}")
        self.version = version


class UnsupportedLayoutError(ItemsFileError):
    """Raised when the declared record size matches no inode convention."""

    def __init__(self, data_size: int) -> None:
        super().__init__(
            f"unsupported record size {data_size}: expected 48 or a size larger than 40"
        )
        self.data_size = data_size


class ShortReadError(ItemsFileError):
    """Raised when a buffer is smaller than the record it should hold."""

    def __init__(self, got: int, expected: int, message: str | None = None) -> None:
        super().__init__(message or f"short record: got {got} of {expected} bytes")
        self.got = got
        self.expected = expected


class TruncatedRecordError(ShortReadError):
    """Raised when a record slot runs past the end of the file."""

    def __init__(self, index: int, offset: int, got: int, expected: int) -> None:
        super().__init__(
            got,
            expected,
            f"record {index} at offset {offset} is truncated: got {got} of {expected} bytes",
        )
        self.index = index
        self.offset = offset
