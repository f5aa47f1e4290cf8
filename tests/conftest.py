import pytest


@pytest.fixture
def write_file(tmp_path):
    def _write(name, blob):
        path = tmp_path / name
        path.write_bytes(blob)
        return path

    return _write
