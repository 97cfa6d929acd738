"""Pydantic schemas for API request/response validation."""

from app.schemas.conversion import (
    ConversionResponse,
    ConvertRequest,
    ConvertResponse,
    ExportedFile,
    ExportLink,
    HealthResponse,
    SubtitleRow,
)

__all__ = [
    "ConversionResponse",
    "ConvertRequest",
    "ConvertResponse",
    "ExportedFile",
    "ExportLink",
    "HealthResponse",
    "SubtitleRow",
]
