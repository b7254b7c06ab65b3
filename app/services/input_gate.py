"""Input gate — structural validation of an uploaded SQLite file.

Checks run in a fixed order and stop at the first failure:
presence, maximum size, minimum size, extension, magic header.
No I/O happens here.
"""

from __future__ import annotations

from typing import Optional

from app.config import SQLITE_MAGIC_HEADER, Settings, settings as default_settings
from app.schemas.common import ErrorCode
from app.services.errors import ConversionFailure


def get_file_extension(filename: str) -> str:
    """Return the lower-cased extension including the dot, or "" if none."""
    last_dot = filename.rfind(".")
    return filename[last_dot:].lower() if last_dot != -1 else ""


def has_sqlite_header(content: bytes) -> bool:
    return bytes(content[: len(SQLITE_MAGIC_HEADER)]) == SQLITE_MAGIC_HEADER


def validate_upload(
    content: Optional[bytes],
    filename: str,
    size: Optional[int] = None,
    settings: Settings | None = None,
) -> None:
    """Validate an upload, raising ConversionFailure on the first failed check.

    Args:
        content: Raw file bytes, or None if nothing was uploaded.
        filename: Declared file name.
        size: Declared size in bytes; defaults to len(content).
        settings: Limits to apply; defaults to the application settings.
    """
    cfg = settings or default_settings

    if content is None or not isinstance(content, (bytes, bytearray, memoryview)):
        raise ConversionFailure(
            ErrorCode.FILE_REQUIRED,
            "No file provided. Please upload a SQLite database file.",
        )

    if size is None:
        size = len(content)

    if size > cfg.max_file_size:
        raise ConversionFailure(
            ErrorCode.FILE_TOO_LARGE,
            f"File size exceeds maximum limit of {cfg.max_file_size / 1024 / 1024:g}MB.",
            f"File size: {size / 1024 / 1024:.2f}MB",
        )

    if size < cfg.min_file_size:
        raise ConversionFailure(
            ErrorCode.FILE_TOO_SMALL,
            "File is too small to be a valid SQLite database.",
        )

    extension = get_file_extension(filename)
    if extension and extension not in cfg.allowed_extensions:
        raise ConversionFailure(
            ErrorCode.INVALID_EXTENSION,
            f"Invalid file extension. Allowed: {', '.join(cfg.allowed_extensions)}",
            f"Received: {extension}",
        )

    if not has_sqlite_header(content):
        raise ConversionFailure(
            ErrorCode.INVALID_SQLITE_FORMAT,
            "File is not a valid SQLite database. Invalid file header.",
        )
