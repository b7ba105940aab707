from collections.abc import Callable
from pathlib import Path

import pytest


@pytest.fixture  # type: ignore[misc]
def write_source(tmp_path: Path) -> Callable[..., Path]:
    """Writes source text to a file under tmp_path and returns its path."""

    def _write(text: str, name: str = "program.cpp") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write
