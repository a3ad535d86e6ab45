"""Shared pytest fixtures and test helpers for headr tests."""

from __future__ import annotations

import logging
from collections.abc import Callable, Generator
from pathlib import Path

import pytest
from click.testing import CliRunner


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run every test from an empty temp dir with no ``HEADR_*`` overrides.

    Relative input names in tests resolve against this directory, and no
    stray ``headr.toml`` or env var can change the default line count.
    """
    for var in ("HEADR_CONFIG", "HEADR_LINES", "HEADR_VERBOSE", "HEADR_LOG_JSON"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    headr = logging.getLogger("headr")
    headr_level = headr.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    headr.setLevel(headr_level)


@pytest.fixture
def make_file(tmp_path: Path) -> Callable[[str, str | bytes], Path]:
    """Factory writing *content* to ``tmp_path / name`` and returning the path."""

    def _make(name: str, content: str | bytes) -> Path:
        path = tmp_path / name
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
        return path

    return _make


@pytest.fixture
def ten_txt(make_file: Callable[[str, str | bytes], Path]) -> Path:
    """A file named ``ten.txt`` holding the lines ``1`` through ``10``."""
    return make_file("ten.txt", "".join(f"{i}\n" for i in range(1, 11)))
