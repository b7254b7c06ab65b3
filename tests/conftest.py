"""Shared fixtures: SQLite database builders and an isolated staging area."""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Callable

import pytest

from app.config import Settings
from app.storage.staging import StagingArea


def build_database(path: Path, statements: list[str], journal_mode: str = "DELETE") -> bytes:
    """Create a database at path by running statements and return its bytes."""
    conn = sqlite3.connect(str(path))
    try:
        conn.execute(f"PRAGMA journal_mode = {journal_mode}")
        conn.executescript("BEGIN;\n" + ";\n".join(statements) + ";\nCOMMIT;")
    finally:
        conn.close()
    return path.read_bytes()


@pytest.fixture
def make_db(tmp_path: Path) -> Callable[..., bytes]:
    """Factory returning the bytes of a freshly built database file."""
    counter = {"n": 0}

    def _make(statements: list[str], journal_mode: str = "DELETE") -> bytes:
        counter["n"] += 1
        src_dir = tmp_path / "sources"
        src_dir.mkdir(exist_ok=True)
        return build_database(src_dir / f"db_{counter['n']}.db", statements, journal_mode)

    return _make


@pytest.fixture
def staging_dir(tmp_path: Path) -> Path:
    return tmp_path / "staging"


@pytest.fixture
def staging(staging_dir: Path) -> StagingArea:
    return StagingArea(staging_dir)


@pytest.fixture
def cfg(staging_dir: Path) -> Settings:
    return Settings(staging_dir=str(staging_dir))


class _FullDiskFile:
    """File wrapper whose writes fail as if the disk were full."""

    def __init__(self, fh):
        self._fh = fh

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self._fh.close()

    def write(self, data):
        raise OSError(28, "No space left on device")

    def close(self):
        self._fh.close()


@pytest.fixture
def full_disk(monkeypatch):
    """Path.open still creates files, but every write fails."""
    real_open = Path.open
    monkeypatch.setattr(Path, "open", lambda self, *a, **k: _FullDiskFile(real_open(self, *a, **k)))
