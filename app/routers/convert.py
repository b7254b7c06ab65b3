"""Router: POST /convert — convert an uploaded SQLite database to JSON."""

from __future__ import annotations

from typing import Optional

import structlog
from fastapi import APIRouter, File, UploadFile

from app.schemas.convert import ApiResponse
from app.services.converter import convert_sqlite

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["convert"])


@router.post("/convert", response_model=ApiResponse)
def convert_file(file: Optional[UploadFile] = File(None)):
    """Convert an uploaded SQLite database into tables and rows.

    Always answers with the response envelope; failures are reported in
    its error field with a classified code.
    """
    if file is None:
        return convert_sqlite(None)

    content = file.file.read()
    size = file.size if file.size is not None else len(content)
    return convert_sqlite(content, file.filename, size)
