from __future__ import annotations

from .profiles import FormatProfile


def record_count(file_size: int, profile: FormatProfile) -> int:
    """Number of whole record slots after the header (never negative)."""

    return max(0, file_size - profile.header_size) // profile.record_size


def tail_bytes(file_size: int, profile: FormatProfile) -> int:
    """Bytes of a partial final slot; anything but zero means truncation."""

    return max(0, file_size - profile.header_size) % profile.record_size


def offset_of(index: int, profile: FormatProfile) -> int:
    if index < 0:
        raise ValueError(f"record index must be non-negative, got {index}")
    return profile.header_size + profile.record_size * index
