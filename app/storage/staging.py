"""Request-scoped staging of uploaded database files on the local filesystem."""

from __future__ import annotations

import secrets
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

import structlog

from app.config import Settings, settings as default_settings

logger = structlog.get_logger(__name__)

# Files SQLite may create next to a database
SIDECAR_SUFFIXES = ("-journal", "-wal", "-shm")


class StagingArea:
    """A directory holding one staged file per in-flight conversion."""

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "StagingArea":
        cfg = settings or default_settings
        return cls(cfg.staging_dir)

    def ensure_dir(self) -> Path:
        self.directory.mkdir(parents=True, exist_ok=True)
        return self.directory

    def new_path(self) -> Path:
        """Return a fresh, unguessable path inside the staging directory."""
        return self.directory / f"sqlite_{time.time_ns()}_{secrets.token_hex(8)}.db"

    def write(self, content: bytes) -> Path:
        """Write content to a new staged file and return its path.

        The file is created exclusively, so a name collision raises
        FileExistsError instead of overwriting another request's file. A
        partially written file is removed before the error propagates.
        """
        self.ensure_dir()
        path = self.new_path()
        with path.open("xb") as fh:
            try:
                fh.write(content)
            except BaseException:
                fh.close()
                self.remove(path)
                raise
        logger.info("file_staged", path=str(path), size_bytes=len(content))
        return path

    def remove(self, path: Path) -> None:
        """Delete a staged file and its SQLite sidecars. Errors are logged only."""
        for candidate in (path, *(path.with_name(path.name + s) for s in SIDECAR_SUFFIXES)):
            try:
                candidate.unlink(missing_ok=True)
            except OSError as exc:
                logger.warning("staging_cleanup_failed", path=str(candidate), error=str(exc))

    @contextmanager
    def staged(self, content: bytes) -> Iterator[Path]:
        """Stage content for the duration of the block, then remove it."""
        path = self.write(content)
        try:
            yield path
        finally:
            self.remove(path)
