"""Schemas for the SQLite conversion endpoint.

Field names are snake_case in Python and camelCase on the wire.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from app.schemas.common import ErrorCode, JsonValue


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TableInfo(_CamelModel):
    """Metadata for one extracted table, without its rows."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    name: str = Field(..., description="Table name as stored in sqlite_master")
    row_count: int = Field(..., ge=0, description="Rows actually extracted (capped)")
    columns: list[str] = Field(default_factory=list, description="Column names in declared order")


class ConvertSuccessData(_CamelModel):
    """Successful conversion payload."""
    file_name: str = Field(..., description="Original upload filename")
    file_size: int = Field(..., ge=0, description="Original upload size in bytes")
    table_count: int = Field(..., ge=0)
    total_rows: int = Field(..., ge=0)
    tables: list[TableInfo] = Field(default_factory=list)
    content: dict[str, list[dict[str, JsonValue]]] = Field(
        default_factory=dict, description="Table name -> extracted rows"
    )

    @model_validator(mode="after")
    def _check_consistency(self) -> "ConvertSuccessData":
        names = {t.name for t in self.tables}
        if set(self.content) != names:
            raise ValueError("content keys must match table names")
        if self.table_count != len(self.tables):
            raise ValueError("table_count must equal the number of tables")
        if self.total_rows != sum(t.row_count for t in self.tables):
            raise ValueError("total_rows must equal the sum of table row counts")
        return self


class ErrorInfo(_CamelModel):
    """Classified conversion failure."""
    code: ErrorCode
    message: str
    details: Optional[str] = None


class ResponseMeta(_CamelModel):
    timestamp: str = Field(..., description="ISO-8601 UTC time the response was built")
    processing_time_ms: int = Field(..., ge=0, description="Milliseconds since pipeline entry")


class ApiResponse(_CamelModel):
    """Response envelope: carries exactly one of data or error."""
    success: bool
    data: Optional[ConvertSuccessData] = None
    error: Optional[ErrorInfo] = None
    meta: ResponseMeta

    @model_validator(mode="after")
    def _check_exclusive(self) -> "ApiResponse":
        if self.success != (self.error is None) or self.success != (self.data is not None):
            raise ValueError("success envelopes carry data only, error envelopes carry error only")
        return self
