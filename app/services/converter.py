"""SQLite-to-JSON conversion pipeline.

Steps:
1. Validate the upload (size bounds, extension, magic header)
2. Stage the bytes in a request-scoped temporary file
3. Enumerate user tables and enforce the table ceiling
4. Extract columns and a bounded set of rows per table
5. Assemble the success or error envelope

convert_sqlite() never raises: every failure is returned as a classified
error envelope, and the staged file is removed on every exit path.
"""

from __future__ import annotations

import time
from contextlib import closing
from datetime import datetime, timezone
from typing import Optional

import structlog

from app.config import Settings, settings as default_settings
from app.schemas.convert import ApiResponse, ConvertSuccessData, ErrorInfo, ResponseMeta
from app.services.errors import ConversionFailure, classify_exception
from app.services.input_gate import validate_upload
from app.services.row_extraction import extract_tables
from app.services.schema_introspection import list_user_tables, open_database
from app.storage.staging import StagingArea

logger = structlog.get_logger(__name__)


def _meta(started: float) -> ResponseMeta:
    return ResponseMeta(
        timestamp=datetime.now(timezone.utc).isoformat(),
        processing_time_ms=int((time.perf_counter() - started) * 1000),
    )


def success_response(data: ConvertSuccessData, started: float) -> ApiResponse:
    return ApiResponse(success=True, data=data, error=None, meta=_meta(started))


def error_response(error: ErrorInfo, started: float) -> ApiResponse:
    return ApiResponse(success=False, data=None, error=error, meta=_meta(started))


def run_conversion(
    content: bytes,
    filename: str,
    size: int,
    cfg: Settings,
    staging: StagingArea,
) -> ConvertSuccessData:
    """Stage, introspect and extract an already-validated upload.

    Raises:
        ConversionFailure: NO_TABLES_FOUND or TOO_MANY_TABLES.
        Exception: anything raised by the filesystem or the sqlite3 driver.
    """
    with staging.staged(content) as path:
        with closing(open_database(path)) as conn:
            table_names = list_user_tables(conn, cfg.max_tables)
            tables, table_content, total_rows = extract_tables(
                conn, table_names, cfg.max_rows_per_table
            )

    return ConvertSuccessData(
        file_name=filename,
        file_size=size,
        table_count=len(tables),
        total_rows=total_rows,
        tables=tables,
        content=table_content,
    )


def convert_sqlite(
    content: Optional[bytes],
    filename: Optional[str] = None,
    size: Optional[int] = None,
    *,
    settings: Settings | None = None,
    staging: StagingArea | None = None,
) -> ApiResponse:
    """Convert an uploaded SQLite database into a response envelope.

    Args:
        content: Uploaded bytes, or None when no file was provided.
        filename: Declared file name ("unknown" when missing).
        size: Declared size in bytes; defaults to len(content).
        settings: Limits to apply; defaults to the application settings.
        staging: Where to stage the file; defaults to settings.staging_dir.

    Returns:
        ApiResponse carrying either ConvertSuccessData or ErrorInfo.
    """
    started = time.perf_counter()
    cfg = settings or default_settings
    filename = filename or "unknown"
    if size is None and content is not None:
        size = len(content)

    log = logger.bind(filename=filename)
    log.info("convert_started", size_bytes=size)

    try:
        validate_upload(content, filename, size, cfg)
    except ConversionFailure as failure:
        log.warning("convert_rejected", code=failure.code.value, details=failure.details)
        return error_response(failure.to_error(), started)

    try:
        data = run_conversion(
            bytes(content), filename, size, cfg, staging or StagingArea.from_settings(cfg)
        )
    except ConversionFailure as failure:
        log.warning("convert_rejected", code=failure.code.value, details=failure.details)
        return error_response(failure.to_error(), started)
    except Exception as exc:
        failure = classify_exception(exc)
        log.error(
            "convert_failed",
            code=failure.code.value,
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return error_response(failure.to_error(), started)

    log.info(
        "convert_completed",
        tables=data.table_count,
        total_rows=data.total_rows,
    )
    return success_response(data, started)
