"""Conversion API endpoints."""

import logging
from pathlib import Path
from urllib.parse import quote

from fastapi import APIRouter, File, HTTPException, Response, UploadFile, status

from app.core.config import settings
from app.models.export import ExportFormat
from app.models.subtitle import SubtitleEntry
from app.schemas import (
    ConversionResponse,
    ConvertRequest,
    ConvertResponse,
    ExportedFile,
    ExportLink,
    SubtitleRow,
)
from app.services.conversion_service import build_export, load_subtitles, preview_rows
from app.services.export_naming import generate_export_filename
from app.services.extractor import ExtractionError, caption_predicate, extract_subtitles
from app.services.formatter import render_all
from app.storage.export_store import ConversionSession, conversion_registry

router = APIRouter()
logger = logging.getLogger(__name__)


def _export_links(conversion_id: str) -> list[ExportLink]:
    return [
        ExportLink(
            format=export_format,
            label=export_format.label,
            media_type=export_format.media_type,
            url=f"/api/v1/conversions/{conversion_id}/exports/{export_format.value}",
        )
        for export_format in ExportFormat
    ]


def _session_response(session: ConversionSession) -> ConversionResponse:
    return ConversionResponse(
        found=True,
        conversion_id=session.id,
        source_filename=session.source_filename,
        entry_count=len(session.entries),
        created_at=session.created_at,
        entries=[SubtitleRow(**row) for row in preview_rows(session.entries)],
        exports=_export_links(session.id),
    )


def _get_session(conversion_id: str) -> ConversionSession:
    session = conversion_registry.get(conversion_id)
    if session is None:
        logger.warning("Conversion not found: %s", conversion_id)
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Conversion '{conversion_id}' not found",
        )
    return session


def _processing_failed(filename: str, error: Exception) -> HTTPException:
    logger.error("Error processing file %s: %s", filename, error)
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=settings.processing_failed_message,
    )


@router.post(
    "/conversions",
    response_model=ConversionResponse,
    responses={200: {"description": "No subtitles found in the uploaded file"}},
    status_code=status.HTTP_201_CREATED,
    summary="Upload a BCut project JSON file",
)
async def create_conversion(
    response: Response,
    file: UploadFile = File(..., description="BCut project JSON file"),
):
    """Extract subtitles from an uploaded project file.

    **Validation order:**
    1. File extension (400 if not .json)
    2. File size (413 if too large)
    3. JSON and project structure (400 with a generic message)

    A file without caption clips is not an error: the response has
    ``found=false`` and status 200, and no conversion session is created.

    Args:
        response: FastAPI Response object for setting status code
        file: Uploaded project file

    Returns:
        ConversionResponse with preview rows and download links

    Raises:
        HTTPException: 400 (invalid file), 413 (file too large)
    """
    filename = file.filename or "subtitles.json"

    file_ext = Path(filename).suffix.lower()
    if file_ext not in settings.allowed_upload_formats:
        logger.warning(
            "Invalid upload format: %s (allowed: %s)", file_ext, settings.allowed_upload_formats
        )
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=(
                f"Invalid file format '{file_ext}'. "
                f"Allowed formats: {', '.join(sorted(settings.allowed_upload_formats))}"
            ),
        )

    raw = await file.read(settings.max_upload_size + 1)
    if len(raw) > settings.max_upload_size:
        logger.warning("Upload too large: %s (max: %d bytes)", filename, settings.max_upload_size)
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"File exceeds maximum allowed size ({settings.max_upload_size:,} bytes)",
        )

    try:
        entries = load_subtitles(raw, caption_predicate(settings.caption_item_name))
    except ExtractionError as e:
        raise _processing_failed(filename, e) from e

    if not entries:
        logger.info("No subtitles found in %s", filename)
        response.status_code = status.HTTP_200_OK
        return ConversionResponse(
            found=False,
            message=settings.no_results_message,
            source_filename=filename,
            entry_count=0,
        )

    session = conversion_registry.create(filename, entries)
    return _session_response(session)


@router.get("/conversions/{conversion_id}", response_model=ConversionResponse)
async def get_conversion(conversion_id: str):
    """Get the subtitle preview of an existing conversion.

    Raises:
        HTTPException: 404 if the conversion is unknown or was released
    """
    return _session_response(_get_session(conversion_id))


@router.get(
    "/conversions/{conversion_id}/exports/{export_format}",
    response_class=Response,
    summary="Download a converted subtitle file",
)
async def download_export(conversion_id: str, export_format: ExportFormat):
    """Download one export of a conversion.

    The file name is ``<upload base name>_<YYYYMMDD_HHMMSS><extension>``,
    stamped when this request is handled.

    Raises:
        HTTPException: 404 if the conversion is unknown or was released
    """
    session = _get_session(conversion_id)
    buffer = build_export(session, export_format)

    return Response(
        content=buffer.content,
        media_type=f"{buffer.media_type}; charset=utf-8",
        headers={
            "Content-Disposition": f"attachment; filename*=UTF-8''{quote(buffer.filename)}"
        },
    )


@router.delete("/conversions/{conversion_id}", status_code=status.HTTP_204_NO_CONTENT)
async def discard_conversion(conversion_id: str):
    """Release a conversion and every export buffer generated for it.

    Raises:
        HTTPException: 404 if the conversion is unknown
    """
    if not conversion_registry.discard(conversion_id):
        logger.warning("Conversion not found: %s", conversion_id)
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Conversion '{conversion_id}' not found",
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/convert",
    response_model=ConvertResponse,
    summary="Convert a parsed BCut project in one request",
)
async def convert_document(request: ConvertRequest):
    """Render every export format for an already-parsed project document.

    Args:
        request: Parsed document and the original file name

    Returns:
        ConvertResponse with the rendered text of each format

    Raises:
        HTTPException: 400 (not a BCut project), 404 (no subtitles found)
    """
    try:
        entries: list[SubtitleEntry] = extract_subtitles(
            request.document, caption_predicate(settings.caption_item_name)
        )
    except ExtractionError as e:
        raise _processing_failed(request.filename, e) from e

    if not entries:
        logger.info("No subtitles found in %s", request.filename)
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=settings.no_results_message,
        )

    exports = {
        export_format: ExportedFile(
            filename=generate_export_filename(request.filename, export_format.extension),
            media_type=export_format.media_type,
            content=content,
        )
        for export_format, content in render_all(entries).items()
    }
    return ConvertResponse(entry_count=len(entries), exports=exports)
