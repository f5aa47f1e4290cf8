import json

import pytest

import cacheitems_dump
import volumeitems_dump

from tests.builders import cache_header, cache_record, example_cache_image, volume_record


@pytest.fixture
def cache_path(write_file):
    return write_file("CacheItems", example_cache_image())


def test_single_index_structured(cache_path, capsys):
    assert cacheitems_dump.main([str(cache_path), "1"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("CacheItems entry 1\n")
    for literal in ("1.2.3.4", "1700000000", "123456789", "8192", "0x5"):
        assert literal in out


def test_oneline(cache_path, capsys):
    assert cacheitems_dump.main([str(cache_path), "1", "--oneline"]) == 0
    out = capsys.readouterr().out
    assert out.count("\n") == 1
    assert "fid:1.2.3.4" in out
    assert "states:0x5" in out


def test_dump_all_starts_at_one(write_file, capsys):
    blob = cache_header() + b"".join(cache_record(chunk=n) for n in range(4))
    assert cacheitems_dump.main([str(write_file("CacheItems", blob)), "--oneline"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert [line.split()[0] for line in lines] == ["index:1", "index:2", "index:3"]


def test_structured_dump_separates_blocks(write_file, capsys):
    blob = cache_header() + b"".join(cache_record(chunk=n) for n in range(3))
    assert cacheitems_dump.main([str(write_file("CacheItems", blob))]) == 0
    blocks = capsys.readouterr().out.strip().split("\n\n")
    assert [block.splitlines()[0] for block in blocks] == ["CacheItems entry 1", "CacheItems entry 2"]


@pytest.mark.parametrize("index", ["abc", "-1", "1.5", "0x10"])
def test_non_numeric_index_is_usage_error(cache_path, index, capsys):
    with pytest.raises(SystemExit) as info:
        cacheitems_dump.main([str(cache_path), index])
    assert info.value.code == 2
    assert "unsigned integer" in capsys.readouterr().err


def test_missing_file(tmp_path, capsys):
    assert cacheitems_dump.main([str(tmp_path / "nope")]) == 1
    assert capsys.readouterr().err.startswith("[error] cannot open")


def test_bad_magic(write_file, capsys):
    assert cacheitems_dump.main([str(write_file("junk", b"\x00" * 64))]) == 1
    assert "bad magic" in capsys.readouterr().err


def test_index_past_end(cache_path, capsys):
    assert cacheitems_dump.main([str(cache_path), "9"]) == 1
    err = capsys.readouterr().err
    assert "record 9" in err
    assert "offset 452" in err


def test_json(cache_path, capsys):
    assert cacheitems_dump.main([str(cache_path), "--json"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload == [
        {
            "index": 1,
            "fid": [1, 2, 3, 4],
            "modTime": 1700000000,
            "versionHi": 0,
            "versionLo": 0,
            "chunk": 0,
            "inode": 123456789,
            "chunkBytes": 8192,
            "states": 5,
        }
    ]


def test_header_and_summary(cache_path, capsys):
    assert cacheitems_dump.main([str(cache_path), "--header", "--summary"]) == 0
    out = capsys.readouterr().out
    assert "CacheItems header" in out
    assert "cache-inode64" in out
    assert "CacheItems summary" in out


def test_volume_oneline_index_zero(write_file, capsys):
    blob = volume_record(cell=1, volume=536870912, root=(1, 1)) + volume_record(cell=1, volume=7)
    path = write_file("VolumeItems", blob)
    assert volumeitems_dump.main([str(path), "0", "--oneline"]) == 0
    assert capsys.readouterr().out.startswith("index:0 cell:1 volume:536870912 next:0 ")


def test_volume_has_no_header_flag(write_file, capsys):
    path = write_file("VolumeItems", volume_record())
    with pytest.raises(SystemExit):
        volumeitems_dump.main([str(path), "--header"])


@pytest.mark.parametrize("index", [str(2**60), "99999999999999999999"])
def test_huge_index_is_truncated_record(cache_path, index, capsys):
    assert cacheitems_dump.main([str(cache_path), index]) == 1
    err = capsys.readouterr().err
    assert err.startswith("[error] ")
    assert f"record {index}" in err


@pytest.mark.parametrize(
    "flags",
    [
        ["--summary", "--json"],
        ["--header", "--oneline"],
        ["--header", "--summary", "--json"],
        ["--json", "--oneline"],
    ],
)
def test_conflicting_output_flags(cache_path, flags, capsys):
    with pytest.raises(SystemExit) as info:
        cacheitems_dump.main([str(cache_path), *flags])
    assert info.value.code == 2
    assert "cannot be combined" in capsys.readouterr().err


def test_volume_summary_rejects_oneline(write_file, capsys):
    path = write_file("VolumeItems", volume_record())
    with pytest.raises(SystemExit) as info:
        volumeitems_dump.main([str(path), "--summary", "--oneline"])
    assert info.value.code == 2
