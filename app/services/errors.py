"""Conversion failure type and classification of unexpected errors."""

from __future__ import annotations

import sqlite3
from typing import Optional

from app.schemas.common import ErrorCode
from app.schemas.convert import ErrorInfo

DATABASE_ERROR_MESSAGE = "Failed to read database. The file may be corrupted or encrypted."
INTERNAL_ERROR_MESSAGE = "An unexpected error occurred while processing the file."

# Fallback markers for errors that do not come from the sqlite3 driver
_DATABASE_MARKERS = ("database", "SQL")


class ConversionFailure(Exception):
    """A conversion failure that already carries its error code."""

    def __init__(self, code: ErrorCode, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details

    def to_error(self) -> ErrorInfo:
        return ErrorInfo(code=self.code, message=self.message, details=self.details)


def classify_exception(exc: BaseException) -> ConversionFailure:
    """Map an unexpected exception onto DATABASE_ERROR or INTERNAL_ERROR.

    sqlite3 errors are database errors and filesystem errors are internal
    errors. Anything else is classified by its message text.
    """
    if isinstance(exc, ConversionFailure):
        return exc

    details = str(exc) or type(exc).__name__
    if isinstance(exc, sqlite3.Error):
        is_db_error = True
    elif isinstance(exc, OSError):
        is_db_error = False
    else:
        is_db_error = any(marker in details for marker in _DATABASE_MARKERS)

    if is_db_error:
        return ConversionFailure(ErrorCode.DATABASE_ERROR, DATABASE_ERROR_MESSAGE, details)
    return ConversionFailure(ErrorCode.INTERNAL_ERROR, INTERNAL_ERROR_MESSAGE, details)
