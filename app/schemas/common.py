"""Shared schema types used across the application."""

from __future__ import annotations

import enum
from typing import Optional, Union

# JSON representation of one SQLite cell (see SqlValueKind)
JsonValue = Optional[Union[int, float, str]]


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class ErrorCode(str, enum.Enum):
    FILE_REQUIRED = "FILE_REQUIRED"
    FILE_TOO_LARGE = "FILE_TOO_LARGE"
    FILE_TOO_SMALL = "FILE_TOO_SMALL"
    INVALID_EXTENSION = "INVALID_EXTENSION"
    INVALID_SQLITE_FORMAT = "INVALID_SQLITE_FORMAT"
    NO_TABLES_FOUND = "NO_TABLES_FOUND"
    TOO_MANY_TABLES = "TOO_MANY_TABLES"
    DATABASE_ERROR = "DATABASE_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class SqlValueKind(str, enum.Enum):
    """SQLite storage classes a cell value can carry."""
    NULL = "NULL"
    INTEGER = "INTEGER"
    REAL = "REAL"
    TEXT = "TEXT"
    BLOB = "BLOB"
