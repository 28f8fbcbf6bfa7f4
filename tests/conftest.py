import pytest


@pytest.fixture
def write_log(tmp_path):
    def _write(lines, name="access.log"):
        path = tmp_path / name
        path.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
        return path
    return _write
