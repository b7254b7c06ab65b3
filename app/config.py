"""Application configuration loaded from environment variables."""

from pydantic_settings import BaseSettings
from pydantic import Field

# First 16 bytes of every SQLite 3 database file
SQLITE_MAGIC_HEADER = b"SQLite format 3\x00"


class Settings(BaseSettings):
    """Central configuration for the SQLite conversion service."""

    # Upload limits
    max_file_size: int = Field(default=50 * 1024 * 1024, description="Maximum upload size in bytes")
    min_file_size: int = Field(default=100, description="Minimum upload size in bytes")
    allowed_extensions: list[str] = Field(
        default=[".db", ".sqlite", ".sqlite3", ".db3"],
        description="Accepted file extensions (lower-case, with leading dot)",
    )

    # Extraction limits
    max_tables: int = Field(default=1000, description="Maximum number of user tables per database")
    max_rows_per_table: int = Field(default=100000, description="Maximum rows extracted per table")

    # Storage
    staging_dir: str = Field(default="data/temp", description="Directory for request-scoped staged files")

    # Logging
    log_level: str = Field(default="INFO", description="Root log level")

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "case_sensitive": False}


# Singleton instance
settings = Settings()
