"""
Offline decoders for AFS cache-manager record files (CacheItems, VolumeItems).
"""

from .decoder import as_array, decode, decode_many
from .entities import CACHE_MAGIC, CacheItemsHeader, CacheRecord, Fid, VolumeRecord
from .errors import (
    FormatError,
    ItemsFileError,
    OpenError,
    ShortReadError,
    TruncatedRecordError,
    UnsupportedLayoutError,
    UnsupportedVersionError,
)
from .header import read_header, read_profile
from .locator import offset_of, record_count, tail_bytes
from .presenter import COMPACT, STRUCTURED, record_to_dict, render, render_header
from .profiles import KIND_CACHE, KIND_VOLUME, VOLUME_PROFILE, FieldSpec, FormatProfile, classify
from .reader import CacheItemsFile, VolumeItemsFile
from .summary import ItemsSummary, render_summary, summarize

__all__ = [
    "as_array",
    "decode",
    "decode_many",
    "CACHE_MAGIC",
    "CacheItemsHeader",
    "CacheRecord",
    "Fid",
    "VolumeRecord",
    "FormatError",
    "ItemsFileError",
    "OpenError",
    "ShortReadError",
    "TruncatedRecordError",
    "UnsupportedLayoutError",
    "UnsupportedVersionError",
    "read_header",
    "read_profile",
    "offset_of",
    "record_count",
    "tail_bytes",
    "COMPACT",
    "STRUCTURED",
    "record_to_dict",
    "render",
    "render_header",
    "KIND_CACHE",
    "KIND_VOLUME",
    "VOLUME_PROFILE",
    "FieldSpec",
    "FormatProfile",
    "classify",
    "CacheItemsFile",
    "VolumeItemsFile",
    "ItemsSummary",
    "render_summary",
    "summarize",
]
