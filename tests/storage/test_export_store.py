"""Tests for conversion sessions and export buffer storage."""

from unittest.mock import MagicMock

import pytest

from app.models.subtitle import SubtitleEntry
from app.storage.export_store import ConversionRegistry, ExportBuffer, ExportStore


def make_buffer(filename="a_20240101_000000.srt", content=b"data"):
    return ExportBuffer(filename, content, "text/plain")


class TestExportStore:
    """Tests for ExportStore."""

    def test_acquire_builds_once(self):
        """Test the factory runs only for the first acquire of a key."""
        store = ExportStore()
        factory = MagicMock(return_value=make_buffer())

        first = store.acquire("srt", "a_20240101_000000.srt", factory)
        second = store.acquire("srt", "a_20240101_000000.srt", factory)

        assert first is second
        factory.assert_called_once()
        assert "srt" in store
        assert len(store) == 1

    def test_new_filename_replaces_buffer(self):
        """Test a new download name keeps a single buffer for the key."""
        store = ExportStore()
        factory = MagicMock(return_value=make_buffer(content=b"rendered"))

        store.acquire("srt", "a_20240101_000000.srt", factory)
        renamed = store.acquire("srt", "a_20240101_000001.srt", factory)

        factory.assert_called_once()
        assert renamed.filename == "a_20240101_000001.srt"
        assert renamed.content == b"rendered"
        assert renamed.media_type == "text/plain"
        assert store.get("srt") is renamed
        assert len(store) == 1

    def test_many_filenames_do_not_grow_store(self):
        store = ExportStore()
        for second in range(10):
            name = f"a_20240101_0000{second:02d}.srt"
            store.acquire("srt", name, lambda name=name: make_buffer(name))
        assert len(store) == 1
        assert store.get("srt").filename == "a_20240101_000009.srt"

    def test_keys_are_independent(self):
        store = ExportStore()
        store.acquire("srt", "a.srt", lambda: make_buffer("a.srt"))
        store.acquire("csv", "a.csv", lambda: make_buffer("a.csv"))
        assert len(store) == 2
        assert store.get("csv").filename == "a.csv"

    def test_release(self):
        store = ExportStore()
        store.acquire("srt", "a.srt", make_buffer)
        assert store.release("srt") is True
        assert store.release("srt") is False
        assert store.get("srt") is None

    def test_release_all(self):
        store = ExportStore()
        store.acquire("srt", "a.srt", make_buffer)
        store.acquire("txt", "a.txt", make_buffer)
        assert store.release_all() == 2
        assert len(store) == 0

    def test_factory_error_stores_nothing(self):
        store = ExportStore()

        def failing():
            raise RuntimeError("render failed")

        with pytest.raises(RuntimeError):
            store.acquire("srt", "a.srt", failing)
        assert "srt" not in store


class TestConversionRegistry:
    """Tests for ConversionRegistry."""

    @pytest.fixture
    def registry(self):
        settings = MagicMock()
        settings.max_active_conversions = 2
        return ConversionRegistry(settings)

    def test_create_and_get(self, registry):
        entries = [SubtitleEntry(0, 1000, "Hi")]
        session = registry.create("project.json", entries)

        assert registry.get(session.id) is session
        assert session.entries == (SubtitleEntry(0, 1000, "Hi"),)
        assert session.source_filename == "project.json"
        assert len(registry) == 1

    def test_session_entries_are_a_snapshot(self, registry):
        entries = [SubtitleEntry(0, 1000, "Hi")]
        session = registry.create("project.json", entries)
        entries.append(SubtitleEntry(1000, 2000, "Later"))
        assert len(session.entries) == 1

    def test_get_unknown(self, registry):
        assert registry.get("missing") is None

    def test_discard_releases_buffers(self, registry):
        session = registry.create("project.json", [])
        session.exports.acquire("srt", "a.srt", make_buffer)

        assert registry.discard(session.id) is True
        assert len(session.exports) == 0
        assert registry.get(session.id) is None
        assert registry.discard(session.id) is False

    def test_oldest_session_evicted(self, registry):
        first = registry.create("one.json", [])
        first.exports.acquire("srt", "one.srt", make_buffer)
        second = registry.create("two.json", [])
        third = registry.create("three.json", [])

        assert registry.get(first.id) is None
        assert len(first.exports) == 0
        assert registry.get(second.id) is second
        assert registry.get(third.id) is third
        assert len(registry) == 2

    def test_clear(self, registry):
        session = registry.create("one.json", [])
        session.exports.acquire("srt", "one.srt", make_buffer)
        registry.create("two.json", [])

        assert registry.clear() == 2
        assert len(registry) == 0
        assert len(session.exports) == 0
