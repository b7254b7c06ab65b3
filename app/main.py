"""FastAPI application entry point."""

from __future__ import annotations

from fastapi import FastAPI

from app.logging_setup import configure_logging

# ---------------------------------------------------------------------------
# Structured logging configuration
# ---------------------------------------------------------------------------

configure_logging()

# ---------------------------------------------------------------------------
# App setup
# ---------------------------------------------------------------------------

app = FastAPI(
    title="SQLite Converter API",
    description=(
        "Converts an uploaded SQLite database into a size-bounded JSON document "
        "with table metadata and row content, or a classified error."
    ),
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# ---------------------------------------------------------------------------
# Mount routers
# ---------------------------------------------------------------------------

from app.routers.convert import router as convert_router

app.include_router(convert_router)


# ---------------------------------------------------------------------------
# Health check
# ---------------------------------------------------------------------------

@app.get("/health", tags=["system"])
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "SQLite Converter API",
        "version": "1.0.0",
    }
