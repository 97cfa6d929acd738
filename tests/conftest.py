"""Pytest configuration and fixtures."""

import json
from unittest.mock import patch

from fastapi.testclient import TestClient
import pytest

from app.main import create_app
from app.models.subtitle import SubtitleEntry
from app.storage.export_store import conversion_registry

# ============================================================================
# Base Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def reset_conversion_registry():
    """Release conversion sessions left over from previous tests."""
    conversion_registry.clear()
    yield
    conversion_registry.clear()


@pytest.fixture
def client():
    """Create test client without authentication."""
    with patch("app.core.security.settings") as mock_settings:
        mock_settings.api_key = None
        app = create_app()
        yield TestClient(app)


# ============================================================================
# Sample Data Fixtures
# ============================================================================


def make_clip(item_name, content=None, in_point=0, out_point=1000):
    """Build a BCut clip dict with the given asset kind."""
    asset_info = {"itemName": item_name}
    if content is not None:
        asset_info["content"] = content
    return {"inPoint": in_point, "outPoint": out_point, "AssetInfo": asset_info}


def make_caption(content, in_point, out_point):
    """Build a caption clip."""
    return make_clip("SubttCaption", content, in_point, out_point)


@pytest.fixture
def sample_document():
    """BCut project with captions spread over two tracks and mixed clip kinds."""
    return {
        "tracks": [
            {
                "clips": [
                    make_caption("Hello world", 1000, 4000),
                    make_clip("Image", in_point=0, out_point=10000),
                    make_caption("How are you?", 5000, 8000),
                ]
            },
            {"clips": [make_clip("Audio", in_point=0, out_point=60000)]},
            {"clips": [make_caption('He said "hi", then left', 9000, 12345)]},
        ]
    }


@pytest.fixture
def sample_document_bytes(sample_document):
    """Sample project serialized the way BCut writes it (UTF-8 JSON)."""
    return json.dumps(sample_document, ensure_ascii=False).encode("utf-8")


@pytest.fixture
def empty_document():
    """BCut project without any caption clip."""
    return {"tracks": [{"clips": [make_clip("Image")]}, {"clips": []}]}


@pytest.fixture
def sample_entries():
    """Entries matching sample_document."""
    return [
        SubtitleEntry(1000, 4000, "Hello world"),
        SubtitleEntry(5000, 8000, "How are you?"),
        SubtitleEntry(9000, 12345, 'He said "hi", then left'),
    ]


# ============================================================================
# Authentication/Security Fixtures
# ============================================================================


@pytest.fixture
def client_no_auth():
    """Client with no API key configured."""
    with patch("app.core.security.settings") as mock_settings:
        mock_settings.api_key = None
        app = create_app()
        yield TestClient(app)


@pytest.fixture
def client_with_auth():
    """Client with API key configured (no default headers)."""
    with patch("app.core.security.settings") as mock_settings:
        mock_settings.api_key = "test_secret_key_12345"
        app = create_app()
        yield TestClient(app)


def upload(client, content, filename="project.json", headers=None):
    """POST a project file to the conversions endpoint."""
    return client.post(
        "/api/v1/conversions",
        files={"file": (filename, content, "application/json")},
        headers=headers,
    )
