"""Download file names for exported subtitles."""

from datetime import datetime
import re

# Final extension segment, never crossing a path separator
_EXTENSION_RE = re.compile(r"\.[^/.]+$")


def generate_timestamp(now: datetime | None = None) -> str:
    """Format wall-clock time as YYYYMMDD_HHMMSS."""
    return (now or datetime.now()).strftime("%Y%m%d_%H%M%S")


def generate_export_filename(
    original_filename: str, extension: str, now: datetime | None = None
) -> str:
    """Build the name of an exported file from the uploaded file's name.

    Only the last extension is removed, so ``clip.v2.json`` becomes
    ``clip.v2_<timestamp><extension>``.

    Args:
        original_filename: Name of the uploaded project file
        extension: Extension of the export including the dot (e.g. ".srt")
        now: Time to stamp into the name (defaults to the current local time)

    Returns:
        File name for the download
    """
    base_name = _EXTENSION_RE.sub("", original_filename, count=1)
    return f"{base_name}_{generate_timestamp(now)}{extension}"
