"""BCut project JSON extractor.

Parses the JSON document exported by the BCut editor and flattens the
caption clips of every track into a list of subtitle entries, keeping the
document order (tracks first, then clips within each track).
"""

from collections.abc import Callable, Mapping
import json
import logging
from typing import Any

from app.models.subtitle import SubtitleEntry

logger = logging.getLogger(__name__)

CAPTION_ITEM_NAME = "SubttCaption"

ClipPredicate = Callable[[Mapping[str, Any]], bool]


class ExtractionError(Exception):
    """Base error for documents that cannot be turned into subtitles."""

    pass


class ParseError(ExtractionError):
    """Raised when the input is not valid JSON."""

    pass


class StructuralError(ExtractionError):
    """Raised when valid JSON lacks the fields of a BCut project."""

    pass


def parse_document(raw: str | bytes) -> Any:
    """Parse the raw text of an uploaded project file.

    Args:
        raw: File content as text or UTF-8 bytes (a leading BOM is accepted)

    Returns:
        The decoded JSON value

    Raises:
        ParseError: If the content is not UTF-8 or not valid JSON
    """
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise ParseError(f"Content is not valid UTF-8: {e}") from e
    else:
        raw = raw.removeprefix("\ufeff")

    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise ParseError(f"Invalid JSON: {e}") from e
    except RecursionError as e:
        raise ParseError("Invalid JSON: nesting too deep") from e


def _asset_info(clip: Any) -> Mapping[str, Any]:
    if not isinstance(clip, Mapping):
        raise StructuralError(f"Clip must be an object, got {type(clip).__name__}")
    asset_info = clip.get("AssetInfo")
    if not isinstance(asset_info, Mapping):
        raise StructuralError("Clip is missing its AssetInfo object")
    return asset_info


def caption_predicate(item_name: str = CAPTION_ITEM_NAME) -> ClipPredicate:
    """Build a predicate accepting clips whose AssetInfo.itemName equals item_name."""

    def is_caption(clip: Mapping[str, Any]) -> bool:
        return _asset_info(clip).get("itemName") == item_name

    return is_caption


is_caption_clip = caption_predicate()


def _milliseconds(clip: Mapping[str, Any], field: str) -> int:
    value = clip.get(field)
    # bool is an int subclass but never a valid time
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise StructuralError(f"Clip field '{field}' must be a number, got {value!r}")
    if isinstance(value, float):
        if not value.is_integer():
            raise StructuralError(f"Clip field '{field}' must be whole milliseconds, got {value!r}")
        value = int(value)
    if value < 0:
        raise StructuralError(f"Clip field '{field}' must not be negative, got {value}")
    return value


def _to_entry(clip: Mapping[str, Any]) -> SubtitleEntry:
    content = _asset_info(clip).get("content")
    if not isinstance(content, str):
        raise StructuralError(f"Caption clip content must be a string, got {content!r}")

    entry = SubtitleEntry(
        in_point=_milliseconds(clip, "inPoint"),
        out_point=_milliseconds(clip, "outPoint"),
        content=content,
    )
    if entry.out_point < entry.in_point:
        logger.warning(
            "Caption ends before it starts (inPoint=%d, outPoint=%d)",
            entry.in_point,
            entry.out_point,
        )
    return entry


def extract_subtitles(
    document: Any, is_caption: ClipPredicate = is_caption_clip
) -> list[SubtitleEntry]:
    """Extract caption clips from a parsed BCut project document.

    Args:
        document: Parsed JSON value with a ``tracks`` list
        is_caption: Predicate deciding whether a clip is a caption

    Returns:
        Subtitle entries in track order, then clip order. Empty when the
        document contains no caption clips.

    Raises:
        StructuralError: If tracks or clips are missing, or a caption clip
            lacks its AssetInfo, content or time fields
    """
    if not isinstance(document, Mapping):
        raise StructuralError(f"Document must be an object, got {type(document).__name__}")

    tracks = document.get("tracks")
    if not isinstance(tracks, list):
        raise StructuralError("Document has no 'tracks' list")

    entries = []
    for track_index, track in enumerate(tracks):
        clips = track.get("clips") if isinstance(track, Mapping) else None
        if not isinstance(clips, list):
            raise StructuralError(f"Track {track_index} has no 'clips' list")

        entries.extend(_to_entry(clip) for clip in clips if is_caption(clip))

    logger.debug("Extracted %d captions from %d tracks", len(entries), len(tracks))
    return entries
