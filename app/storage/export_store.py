"""In-memory storage for conversion sessions and their generated export files.

Each uploaded project file becomes a ConversionSession that owns the
extracted entries and an ExportStore holding at most one rendered download
buffer per export format. Buffers are released explicitly: when the session
is discarded, when it is evicted to make room for a newer upload, or on
shutdown.
"""

from collections import OrderedDict
from collections.abc import Callable, Sequence
from datetime import UTC, datetime
import logging
import threading
import uuid

from app.core.config import Settings, get_settings
from app.models.subtitle import SubtitleEntry

logger = logging.getLogger(__name__)


class ExportBuffer:
    """Encoded export file ready to be sent to a client."""

    __slots__ = ("filename", "content", "media_type")

    def __init__(self, filename: str, content: bytes, media_type: str):
        self.filename = filename
        self.content = content
        self.media_type = media_type

    def __len__(self) -> int:
        return len(self.content)

    def __repr__(self) -> str:
        return f"ExportBuffer(filename={self.filename!r}, size={len(self.content)})"


class ExportStore:
    """Export buffers keyed by export kind, one buffer per key.

    The content stored under a key never changes for the lifetime of the
    store; only the download file name does.
    """

    def __init__(self):
        self._buffers: dict[str, ExportBuffer] = {}
        self._lock = threading.Lock()

    def acquire(
        self, key: str, filename: str, factory: Callable[[], ExportBuffer]
    ) -> ExportBuffer:
        """Return the buffer for key under the given download name.

        The first acquire of a key builds the buffer with factory. A later
        acquire with a new file name replaces the stored buffer with a
        renamed one that reuses the already rendered content.
        """
        with self._lock:
            buffer = self._buffers.get(key)
            if buffer is not None and buffer.filename == filename:
                return buffer

            if buffer is None:
                buffer = factory()
                logger.debug("Stored %s export buffer %s (%d bytes)", key, filename, len(buffer))
            else:
                logger.debug("Renamed %s export buffer %s -> %s", key, buffer.filename, filename)
                buffer = ExportBuffer(filename, buffer.content, buffer.media_type)

            self._buffers[key] = buffer
            return buffer

    def get(self, key: str) -> ExportBuffer | None:
        with self._lock:
            return self._buffers.get(key)

    def release(self, key: str) -> bool:
        """Drop one buffer. Returns False if nothing was stored under key."""
        with self._lock:
            return self._buffers.pop(key, None) is not None

    def release_all(self) -> int:
        """Drop every buffer and return how many were released."""
        with self._lock:
            count = len(self._buffers)
            self._buffers.clear()
            return count

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._buffers

    def __len__(self) -> int:
        with self._lock:
            return len(self._buffers)


class ConversionSession:
    """Subtitles extracted from one uploaded file and the exports generated from them."""

    def __init__(self, source_filename: str, entries: Sequence[SubtitleEntry]):
        self.id = uuid.uuid4().hex
        self.source_filename = source_filename
        self.entries = tuple(entries)
        self.exports = ExportStore()
        self.created_at = datetime.now(UTC)

    def __repr__(self) -> str:
        return (
            f"ConversionSession(id={self.id}, source={self.source_filename!r}, "
            f"entries={len(self.entries)})"
        )


class ConversionRegistry:
    """Bounded registry of active conversion sessions, oldest evicted first."""

    def __init__(self, settings: Settings | None = None):
        if settings is None:
            settings = get_settings()

        self.max_sessions = settings.max_active_conversions
        self._sessions: OrderedDict[str, ConversionSession] = OrderedDict()
        self._lock = threading.Lock()

    def create(self, source_filename: str, entries: Sequence[SubtitleEntry]) -> ConversionSession:
        """Register a new session for a freshly loaded file."""
        session = ConversionSession(source_filename, entries)
        with self._lock:
            self._sessions[session.id] = session
            while len(self._sessions) > self.max_sessions:
                _, evicted = self._sessions.popitem(last=False)
                released = evicted.exports.release_all()
                logger.info(
                    "Evicted conversion %s (%s), released %d export buffers",
                    evicted.id,
                    evicted.source_filename,
                    released,
                )
        logger.info(
            "Created conversion %s for %s with %d entries",
            session.id,
            source_filename,
            len(session.entries),
        )
        return session

    def get(self, conversion_id: str) -> ConversionSession | None:
        with self._lock:
            return self._sessions.get(conversion_id)

    def discard(self, conversion_id: str) -> bool:
        """Remove a session and release its export buffers.

        Returns:
            True if the session existed, False otherwise
        """
        with self._lock:
            session = self._sessions.pop(conversion_id, None)
        if session is None:
            return False

        released = session.exports.release_all()
        logger.info("Discarded conversion %s, released %d export buffers", conversion_id, released)
        return True

    def clear(self) -> int:
        """Discard every session and return how many were removed."""
        with self._lock:
            sessions = list(self._sessions.values())
            self._sessions.clear()
        for session in sessions:
            session.exports.release_all()
        return len(sessions)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


# Global conversion registry instance
conversion_registry = ConversionRegistry()
