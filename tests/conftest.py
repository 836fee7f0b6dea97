"""Shared pytest fixtures for totx tests."""

from collections.abc import Callable
from pathlib import Path

import pytest


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[[str], Path]:
    """Return a function that writes a totx.toml into ``tmp_path``."""

    def _write(body: str) -> Path:
        path = tmp_path / "totx.toml"
        path.write_text(body, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def write_script(tmp_path: Path) -> Callable[..., Path]:
    """Return a function that writes a script file into ``tmp_path``."""

    def _write(body: str, name: str = "input.isi") -> Path:
        path = tmp_path / name
        path.write_text(body, encoding="utf-8")
        return path

    return _write
