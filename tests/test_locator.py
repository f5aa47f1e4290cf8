import pytest

from afsitems.locator import offset_of, record_count, tail_bytes
from afsitems.profiles import LEGACY_CACHE_PROFILE, VOLUME_PROFILE, classify

EXTENDED_64 = classify(0x7635ABAF, 4, 64)


@pytest.mark.parametrize("profile", [LEGACY_CACHE_PROFILE, EXTENDED_64, VOLUME_PROFILE])
@pytest.mark.parametrize("slots", [0, 1, 7])
def test_count_covers_well_formed_file(profile, slots):
    size = profile.header_size + slots * profile.record_size
    assert record_count(size, profile) == slots
    assert tail_bytes(size, profile) == 0
    assert record_count(size, profile) * profile.record_size + profile.header_size == size


def test_partial_slot_is_reported_as_tail():
    size = EXTENDED_64.header_size + 3 * 64 + 10
    assert record_count(size, EXTENDED_64) == 3
    assert tail_bytes(size, EXTENDED_64) == 10


def test_file_shorter_than_header():
    assert record_count(4, LEGACY_CACHE_PROFILE) == 0


@pytest.mark.parametrize("profile", [LEGACY_CACHE_PROFILE, EXTENDED_64, VOLUME_PROFILE])
def test_offset_stride(profile):
    assert offset_of(0, profile) == profile.header_size
    for index in range(5):
        assert offset_of(index + 1, profile) - offset_of(index, profile) == profile.record_size


def test_offset_has_no_upper_bound():
    assert offset_of(10**6, VOLUME_PROFILE) == 52 * 10**6


def test_negative_index():
    with pytest.raises(ValueError):
        offset_of(-1, VOLUME_PROFILE)
