"""Subtitle renderers for SRT, ASS, TXT and CSV output.

Every renderer is a pure function of the entry sequence. Line endings and
the CSV byte-order mark are fixed so the files open in common subtitle
editors and spreadsheet tools without conversion.
"""

from collections.abc import Sequence

from pysubs2.time import ms_to_times

from app.models.export import ExportFormat
from app.models.subtitle import SubtitleEntry

CRLF = "\r\n"
LF = "\n"
UTF8_BOM = "\ufeff"

ASS_HEADER = (
    "[Script Info]" + CRLF
    + CRLF
    + "[Events]" + CRLF
    + "Format: Layer, Start, End, Style, Name, MarginL, MarginR, MarginV, Effect, Text" + CRLF
)
CSV_HEADER = UTF8_BOM + "Start,End,Text" + LF


def _split_ms(ms: int):
    """Split milliseconds into (hours, minutes, seconds, milliseconds).

    Raises:
        ValueError: If ms is negative or not a whole number
    """
    if isinstance(ms, bool) or not isinstance(ms, int):
        raise ValueError(f"Timestamp must be whole milliseconds, got {ms!r}")
    if ms < 0:
        raise ValueError(f"Timestamp must not be negative, got {ms}")
    return ms_to_times(ms)


def ms_to_srt_time(ms: int) -> str:
    """Convert milliseconds to SRT timestamp format (HH:MM:SS,mmm)."""
    h, m, s, millis = _split_ms(ms)
    return f"{h:02d}:{m:02d}:{s:02d},{millis:03d}"


def ms_to_ass_time(ms: int) -> str:
    """Convert milliseconds to ASS timestamp format (HH:MM:SS.cc).

    Centiseconds are truncated, not rounded.
    """
    h, m, s, millis = _split_ms(ms)
    return f"{h:02d}:{m:02d}:{s:02d}.{millis // 10:02d}"


def render_srt(entries: Sequence[SubtitleEntry]) -> str:
    """Render numbered SRT blocks separated by blank lines."""
    return "".join(
        f"{i}{CRLF}"
        f"{ms_to_srt_time(entry.in_point)} --> {ms_to_srt_time(entry.out_point)}{CRLF}"
        f"{entry.content}{CRLF}{CRLF}"
        for i, entry in enumerate(entries, start=1)
    )


def render_ass(entries: Sequence[SubtitleEntry]) -> str:
    """Render a minimal ASS script with one Dialogue event per entry.

    Text is the last ASS field, so commas in content are kept verbatim.
    """
    return ASS_HEADER + "".join(
        f"Dialogue: 0,{ms_to_ass_time(entry.in_point)},{ms_to_ass_time(entry.out_point)},"
        f"Default,,0,0,0,,{entry.content}{CRLF}"
        for entry in entries
    )


def render_txt(entries: Sequence[SubtitleEntry]) -> str:
    """Render caption text only, one line per entry."""
    return "".join(f"{entry.content}{CRLF}" for entry in entries)


def _quote_csv(text: str) -> str:
    return '"' + text.replace('"', '""') + '"'


def render_csv(entries: Sequence[SubtitleEntry]) -> str:
    """Render a BOM-prefixed CSV with ASS-style timestamps and quoted text."""
    return CSV_HEADER + "".join(
        f"{ms_to_ass_time(entry.in_point)},{ms_to_ass_time(entry.out_point)},"
        f"{_quote_csv(entry.content)}{LF}"
        for entry in entries
    )


RENDERERS = {
    ExportFormat.SRT: render_srt,
    ExportFormat.ASS: render_ass,
    ExportFormat.TXT: render_txt,
    ExportFormat.CSV: render_csv,
}


def render(entries: Sequence[SubtitleEntry], export_format: ExportFormat) -> str:
    """Render entries in the requested export format."""
    return RENDERERS[export_format](entries)


def render_all(entries: Sequence[SubtitleEntry]) -> dict[ExportFormat, str]:
    """Render entries in every supported format.

    Args:
        entries: Subtitle entries in display order

    Returns:
        Mapping of export format to rendered document text
    """
    return {export_format: render(entries, export_format) for export_format in ExportFormat}
