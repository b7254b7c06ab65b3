"""Tests for upload validation (size bounds, extension, magic header)."""

import pytest

from app.config import SQLITE_MAGIC_HEADER, Settings
from app.schemas.common import ErrorCode
from app.services.errors import ConversionFailure
from app.services.input_gate import get_file_extension, has_sqlite_header, validate_upload


def _payload(size: int = 200, header: bytes = SQLITE_MAGIC_HEADER) -> bytes:
    """Bytes of the given size starting with header."""
    return header + b"\x00" * (size - len(header))


def _code(content, filename="test.db", size=None, settings=None) -> ErrorCode | None:
    try:
        validate_upload(content, filename, size, settings)
    except ConversionFailure as failure:
        return failure.code
    return None


class TestFileExtension:
    def test_simple_extension(self):
        assert get_file_extension("data.db") == ".db"

    def test_lower_cases(self):
        assert get_file_extension("DATA.SQLITE3") == ".sqlite3"

    def test_last_dot_wins(self):
        assert get_file_extension("backup.tar.db3") == ".db3"

    def test_no_extension(self):
        assert get_file_extension("database") == ""


class TestHeader:
    def test_exact_header(self):
        assert has_sqlite_header(_payload()) is True

    def test_missing_trailing_nul(self):
        assert has_sqlite_header(b"SQLite format 3 " + b"\x00" * 100) is False

    def test_one_byte_off(self):
        bad = bytearray(_payload())
        bad[0] = ord("s")
        assert has_sqlite_header(bytes(bad)) is False


class TestValidateUpload:
    def test_valid_upload_passes(self):
        assert _code(_payload()) is None

    def test_none_content_is_file_required(self):
        assert _code(None) == ErrorCode.FILE_REQUIRED

    def test_non_bytes_content_is_file_required(self):
        assert _code("SQLite format 3\x00" + "x" * 200) == ErrorCode.FILE_REQUIRED

    def test_size_exactly_at_max_passes(self):
        cfg = Settings(max_file_size=300)
        assert _code(_payload(300), settings=cfg) is None

    def test_size_above_max_is_too_large(self):
        cfg = Settings(max_file_size=300)
        assert _code(_payload(301), settings=cfg) == ErrorCode.FILE_TOO_LARGE

    def test_too_large_uses_declared_size(self):
        with pytest.raises(ConversionFailure) as exc_info:
            validate_upload(_payload(), "big.db", 50 * 1024 * 1024 + 1)
        assert exc_info.value.code == ErrorCode.FILE_TOO_LARGE
        assert exc_info.value.message == "File size exceeds maximum limit of 50MB."
        assert exc_info.value.details == "File size: 50.00MB"

    def test_size_exactly_at_min_passes(self):
        assert _code(_payload(100)) is None

    def test_size_below_min_is_too_small(self):
        assert _code(_payload(99)) == ErrorCode.FILE_TOO_SMALL

    @pytest.mark.parametrize("size", [0, 1, 16, 50, 99])
    def test_small_inputs_ignore_content(self, size):
        assert _code(b"\xff" * size) == ErrorCode.FILE_TOO_SMALL

    @pytest.mark.parametrize("name", ["a.db", "a.sqlite", "a.sqlite3", "a.db3", "A.DB"])
    def test_allowed_extensions(self, name):
        assert _code(_payload(), filename=name) is None

    def test_missing_extension_is_allowed(self):
        assert _code(_payload(), filename="mydatabase") is None

    def test_invalid_extension_reports_received(self):
        with pytest.raises(ConversionFailure) as exc_info:
            validate_upload(_payload(), "notes.txt")
        assert exc_info.value.code == ErrorCode.INVALID_EXTENSION
        assert exc_info.value.details == "Received: .txt"

    def test_extension_checked_before_header(self):
        assert _code(b"x" * 200, filename="notes.txt") == ErrorCode.INVALID_EXTENSION

    def test_bad_header_is_invalid_format(self):
        assert _code(b"PK\x03\x04" + b"\x00" * 196) == ErrorCode.INVALID_SQLITE_FORMAT

    def test_size_checked_before_extension(self):
        assert _code(b"x" * 10, filename="notes.txt") == ErrorCode.FILE_TOO_SMALL
