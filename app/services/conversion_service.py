"""Conversion workflow: uploaded project file to downloadable subtitle exports."""

from collections.abc import Sequence
from datetime import datetime
import logging

from app.models.export import ExportFormat
from app.models.subtitle import SubtitleEntry
from app.services.export_naming import generate_export_filename
from app.services.extractor import (
    ClipPredicate,
    extract_subtitles,
    is_caption_clip,
    parse_document,
)
from app.services.formatter import ms_to_ass_time, render
from app.storage.export_store import ConversionSession, ExportBuffer

logger = logging.getLogger(__name__)


def load_subtitles(
    raw: str | bytes, is_caption: ClipPredicate = is_caption_clip
) -> list[SubtitleEntry]:
    """Parse an uploaded project file and extract its captions.

    Args:
        raw: Uploaded file content
        is_caption: Predicate selecting caption clips

    Returns:
        Extracted entries (possibly empty)

    Raises:
        ParseError: If the file is not valid JSON
        StructuralError: If the JSON is not a BCut project
    """
    document = parse_document(raw)
    return extract_subtitles(document, is_caption)


def preview_rows(entries: Sequence[SubtitleEntry]) -> list[dict]:
    """Rows for an on-screen table: 1-based index, ASS-style times and text."""
    return [
        {
            "index": i,
            "start": ms_to_ass_time(entry.in_point),
            "end": ms_to_ass_time(entry.out_point),
            "content": entry.content,
        }
        for i, entry in enumerate(entries, start=1)
    ]


def build_export(
    session: ConversionSession, export_format: ExportFormat, now: datetime | None = None
) -> ExportBuffer:
    """Render a session's entries and store the result under its download name.

    The file name is stamped with the time of the request. The session keeps
    one buffer per format: a download under a new file name replaces the
    previous buffer and reuses its rendered content.

    Args:
        session: Conversion session holding the entries
        export_format: Requested output format
        now: Time used for the file name (defaults to current local time)

    Returns:
        ExportBuffer with UTF-8 encoded content
    """
    filename = generate_export_filename(session.source_filename, export_format.extension, now)

    def factory() -> ExportBuffer:
        content = render(session.entries, export_format).encode("utf-8")
        logger.info(
            "Rendered %s export for conversion %s (%d entries, %d bytes)",
            export_format.value,
            session.id,
            len(session.entries),
            len(content),
        )
        return ExportBuffer(filename, content, export_format.media_type)

    return session.exports.acquire(export_format.value, filename, factory)
