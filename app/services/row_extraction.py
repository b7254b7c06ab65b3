"""Row extraction — bounded read of columns and rows for each user table."""

from __future__ import annotations

import base64
import sqlite3
from typing import NamedTuple

import structlog

from app.schemas.common import JsonValue, SqlValueKind
from app.schemas.convert import TableInfo
from app.services.schema_introspection import quote_identifier

logger = structlog.get_logger(__name__)

class ExtractedTable(NamedTuple):
    info: TableInfo
    rows: list[dict[str, JsonValue]]


# ---------------------------------------------------------------------------
# Value mapping
# ---------------------------------------------------------------------------

def value_kind(value: object) -> SqlValueKind:
    """Return the SQLite storage class of a value returned by sqlite3."""
    if value is None:
        return SqlValueKind.NULL
    if isinstance(value, int):
        return SqlValueKind.INTEGER
    if isinstance(value, float):
        return SqlValueKind.REAL
    if isinstance(value, str):
        return SqlValueKind.TEXT
    if isinstance(value, (bytes, bytearray, memoryview)):
        return SqlValueKind.BLOB
    raise TypeError(f"Unsupported SQLite value type: {type(value).__name__}")


def to_json_value(value: object) -> JsonValue:
    """Convert a cell value to its JSON representation. BLOBs become base64."""
    kind = value_kind(value)
    if kind is SqlValueKind.NULL:
        return None
    if kind is SqlValueKind.INTEGER:
        return int(value)
    if kind is SqlValueKind.REAL:
        return float(value)
    if kind is SqlValueKind.TEXT:
        return value
    return base64.b64encode(bytes(value)).decode("ascii")


# ---------------------------------------------------------------------------
# Extraction
# ---------------------------------------------------------------------------

def get_columns(conn: sqlite3.Connection, table_name: str) -> list[str]:
    """Return column names in declared order."""
    cursor = conn.execute(f"PRAGMA table_info({quote_identifier(table_name)})")
    return [row[1] for row in cursor.fetchall()]


def extract_table(conn: sqlite3.Connection, table_name: str, max_rows: int) -> ExtractedTable:
    """Read up to max_rows rows of a table in the engine's storage order."""
    columns = get_columns(conn, table_name)

    cursor = conn.execute(f"SELECT * FROM {quote_identifier(table_name)} LIMIT ?", (max_rows,))
    keys = [d[0] for d in cursor.description]
    rows = [
        {key: to_json_value(value) for key, value in zip(keys, raw)}
        for raw in cursor.fetchall()
    ]

    info = TableInfo(name=table_name, row_count=len(rows), columns=columns)
    logger.info(
        "table_extracted",
        table=table_name,
        rows=info.row_count,
        columns=len(columns),
    )
    return ExtractedTable(info=info, rows=rows)


def extract_tables(
    conn: sqlite3.Connection,
    table_names: list[str],
    max_rows: int,
) -> tuple[list[TableInfo], dict[str, list[dict[str, JsonValue]]], int]:
    """Extract every table in order.

    Returns:
        (table descriptors, table name -> rows, total extracted rows).
        Any failure propagates and aborts the remaining tables.
    """
    tables: list[TableInfo] = []
    content: dict[str, list[dict[str, JsonValue]]] = {}
    total_rows = 0

    for name in table_names:
        extracted = extract_table(conn, name, max_rows)
        tables.append(extracted.info)
        content[name] = extracted.rows
        total_rows += extracted.info.row_count

    return tables, content, total_rows
