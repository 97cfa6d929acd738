"""Pydantic schemas for conversion API."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from app.models.export import ExportFormat


class SubtitleRow(BaseModel):
    """One row of the subtitle preview table."""

    index: int = Field(..., description="1-based position in the subtitle sequence")
    start: str = Field(..., description="Start time (HH:MM:SS.cc)")
    end: str = Field(..., description="End time (HH:MM:SS.cc)")
    content: str = Field(..., description="Caption text")


class ExportLink(BaseModel):
    """Download descriptor for one export format."""

    format: ExportFormat
    label: str = Field(..., description="Button label for the export")
    media_type: str
    url: str = Field(..., description="Relative URL that downloads the file")


class ConversionResponse(BaseModel):
    """Response model for an uploaded project file."""

    found: bool = Field(..., description="Whether any subtitles were found")
    message: str | None = Field(None, description="Message shown when nothing was found")
    conversion_id: str | None = Field(None, description="Session identifier for downloads")
    source_filename: str
    entry_count: int
    created_at: datetime | None = None
    entries: list[SubtitleRow] = Field(default_factory=list)
    exports: list[ExportLink] = Field(default_factory=list)


class ConvertRequest(BaseModel):
    """Request model for one-shot conversion of an already-parsed document."""

    document: Any = Field(..., description="Parsed BCut project JSON")
    filename: str = Field(
        "subtitles.json",
        description="Original file name used to derive export file names",
        min_length=1,
    )


class ExportedFile(BaseModel):
    """Rendered export returned inline."""

    filename: str
    media_type: str
    content: str


class ConvertResponse(BaseModel):
    """Response model for one-shot conversion."""

    entry_count: int = Field(..., description="Number of subtitle entries extracted")
    exports: dict[ExportFormat, ExportedFile] = Field(default_factory=dict)


class HealthResponse(BaseModel):
    """Response model for health check endpoint."""

    service: str
    status: str
    version: str
    authentication: str
    components: dict[str, dict[str, Any]] = Field(default_factory=dict)
    endpoints: dict[str, list[str]] = Field(default_factory=dict)
