import tempfile
import typing as ty
import uuid
from pathlib import Path

import pytest


@pytest.fixture
def temp_dir() -> ty.Iterator[Path]:
    with tempfile.TemporaryDirectory() as tempdir:
        yield Path(tempdir)


@pytest.fixture
def temp_file(temp_dir: Path) -> ty.Callable[..., Path]:
    def make_temp_file(contents: ty.Union[str, bytes], name: str = "") -> Path:
        p = temp_dir / (name or ("rfile-" + uuid.uuid4().hex))
        p.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(contents, str):
            p.write_text(contents)
        else:
            p.write_bytes(contents)
        return p

    return make_temp_file
