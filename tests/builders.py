"""Helpers that assemble synthetic CacheItems/VolumeItems images."""

import struct

CACHE_MAGIC = 0x7635ABAF


def cache_header(version=4, data_size=48, first=18, other=18, magic=CACHE_MAGIC):
    if version == 4:
        return struct.pack("<Iiiii", magic, version, data_size, first, other)
    return struct.pack("<Iiii", magic, version, first, other)


def cache_record(
    fid=(0, 0, 0, 0),
    mod_time=0,
    version_hi=0,
    version_lo=0,
    chunk=0,
    inode=0,
    chunk_bytes=0,
    states=0,
    data_size=48,
):
    head = struct.pack("<8I", *fid, mod_time, version_hi, version_lo, chunk)
    if data_size == 48:
        locator = struct.pack("<Q", inode)
    else:
        locator = bytes(inode)
        assert len(locator) == data_size - 40
    record = head + locator + struct.pack("<IB", chunk_bytes, states)
    return record + b"\x00" * (data_size - len(record))


def volume_record(cell=0, volume=0, next_=0, dotdot=(0, 0, 0, 0), mtpoint=(0, 0, 0, 0), root=(0, 0)):
    return struct.pack("<13I", cell, volume, next_, *dotdot, *mtpoint, *root)


EXAMPLE_FIELDS = dict(
    fid=(1, 2, 3, 4),
    mod_time=1700000000,
    chunk=0,
    inode=123456789,
    chunk_bytes=8192,
    states=0x05,
)


def example_cache_image():
    """v4 file, dataSize 48: empty slot 0, the example record at index 1."""

    return cache_header() + cache_record() + cache_record(**EXAMPLE_FIELDS)
