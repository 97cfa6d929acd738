"""Tests for one-shot conversion endpoint."""

import asyncio

from fastapi import HTTPException, status
import pytest

from app.api.v1.conversions import convert_document
from app.schemas import ConvertRequest
from app.services.extractor import ExtractionError
from tests.conftest import make_caption


class TestConvertDocument:
    """Tests for POST /api/v1/convert."""

    def test_convert_success(self, client, sample_document):
        response = client.post(
            "/api/v1/convert", json={"document": sample_document, "filename": "clip.v2.json"}
        )
        assert response.status_code == status.HTTP_200_OK

        data = response.json()
        assert data["entry_count"] == 3
        assert set(data["exports"]) == {"srt", "ass", "txt", "csv"}

        srt = data["exports"]["srt"]
        assert srt["media_type"] == "text/plain"
        assert srt["filename"].startswith("clip.v2_")
        assert srt["filename"].endswith(".srt")
        assert srt["content"].startswith("1\r\n00:00:01,000 --> 00:00:04,000\r\nHello world\r\n\r\n")

        csv = data["exports"]["csv"]
        assert csv["media_type"] == "text/csv"
        assert csv["content"].startswith("\ufeffStart,End,Text\n00:00:01.00,00:00:04.00,")

    def test_convert_default_filename(self, client, sample_document):
        response = client.post("/api/v1/convert", json={"document": sample_document})
        assert response.json()["exports"]["txt"]["filename"].startswith("subtitles_")

    def test_convert_no_subtitles(self, client, empty_document):
        response = client.post("/api/v1/convert", json={"document": empty_document})
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["detail"] == "No subtitles found"

    def test_convert_wrong_structure(self, client):
        response = client.post("/api/v1/convert", json={"document": {"tracks": "nope"}})
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"].startswith("File processing failed")

    def test_convert_negative_time(self, client):
        """Test a negative clip time is reported as a processing failure."""
        document = {"tracks": [{"clips": [make_caption("Hi", -5, 1000)]}]}
        response = client.post("/api/v1/convert", json={"document": document})
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"].startswith("File processing failed")

    def test_convert_failure_keeps_cause(self):
        """Test the HTTP error is chained to the extraction error."""
        request = ConvertRequest(document={"tracks": "nope"}, filename="a.json")

        with pytest.raises(HTTPException) as exc_info:
            asyncio.run(convert_document(request))

        assert exc_info.value.status_code == status.HTTP_400_BAD_REQUEST
        assert isinstance(exc_info.value.__cause__, ExtractionError)

    def test_convert_missing_document(self, client):
        response = client.post("/api/v1/convert", json={"filename": "a.json"})
        assert response.status_code == 422
