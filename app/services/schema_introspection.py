"""Open a staged SQLite file and enumerate its user tables."""

from __future__ import annotations

import sqlite3
from pathlib import Path

import structlog

from app.schemas.common import ErrorCode
from app.services.errors import ConversionFailure

logger = structlog.get_logger(__name__)

USER_TABLES_QUERY = (
    "SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite\\_%' ESCAPE '\\'"
)


def _decode_text(raw: bytes) -> str:
    return raw.decode("utf-8", errors="replace")


def quote_identifier(name: str) -> str:
    """Quote an SQL identifier, doubling embedded double quotes."""
    return '"' + name.replace('"', '""') + '"'


def open_database(path: str | Path) -> sqlite3.Connection:
    """Open a staged database file.

    Rollback journaling is used so no -wal/-shm files outlive the connection.
    """
    conn = sqlite3.connect(str(path))
    try:
        conn.text_factory = _decode_text
        conn.execute("PRAGMA journal_mode = DELETE")
    except Exception:
        conn.close()
        raise
    return conn


def list_user_tables(conn: sqlite3.Connection, max_tables: int) -> list[str]:
    """Return user table names in catalog order.

    Raises:
        ConversionFailure: NO_TABLES_FOUND or TOO_MANY_TABLES.
    """
    names = [row[0] for row in conn.execute(USER_TABLES_QUERY)]

    if not names:
        raise ConversionFailure(ErrorCode.NO_TABLES_FOUND, "The database contains no tables.")

    if len(names) > max_tables:
        raise ConversionFailure(
            ErrorCode.TOO_MANY_TABLES,
            f"Database has too many tables. Maximum allowed: {max_tables}",
            f"Found: {len(names)} tables",
        )

    logger.debug("tables_listed", count=len(names))
    return names
