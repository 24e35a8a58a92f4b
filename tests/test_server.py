"""Tests for the HTTP boundary."""

import pytest
from fastapi.testclient import TestClient

from media_scout.config import ExtractorSettings, Settings
from media_scout.extractor import ErrorKind, ExtractionResult, MediaItem, MediaType
from media_scout.pipeline import MediaPipeline
from media_scout.server import create_app

from conftest import RecordingSink


class StubPipeline(MediaPipeline):
    """Returns a fixed result instead of touching the network."""

    def __init__(self, result: ExtractionResult):
        super().__init__(ExtractorSettings(), RecordingSink())
        self.result = result
        self.calls = []

    async def extract(self, raw_url):
        self.calls.append(raw_url)
        return self.result


@pytest.fixture
def ok_pipeline():
    return StubPipeline(ExtractionResult.ok([
        MediaItem(type=MediaType.IMAGE, src="https://e.com/a.jpg", filename="a.jpg", extension="jpg", file_size=10),
    ]))


class TestScrapeRoute:
    """Tests for POST /api/scrape."""

    def test_success(self, ok_pipeline):
        client = TestClient(create_app(Settings(), ok_pipeline))

        response = client.post("/api/scrape", json={"url": "e.com"})

        assert response.status_code == 200
        assert response.json() == {"data": [{
            "type": "image",
            "src": "https://e.com/a.jpg",
            "filename": "a.jpg",
            "extension": "jpg",
            "fileSize": 10,
        }]}
        assert ok_pipeline.calls == ["e.com"]

    def test_failure_uses_result_status(self):
        pipeline = StubPipeline(ExtractionResult.failure(ErrorKind.FETCH_FAILED, "Static fetch: gone", status=404))
        client = TestClient(create_app(Settings(), pipeline))

        response = client.post("/api/scrape", json={"url": "e.com/missing"})

        assert response.status_code == 404
        assert response.json() == {"error": "Static fetch: gone"}

    def test_malformed_body_is_500(self, ok_pipeline):
        client = TestClient(create_app(Settings(), ok_pipeline))

        response = client.post("/api/scrape", content=b"{not json", headers={"Content-Type": "application/json"})

        assert response.status_code == 500
        assert "error" in response.json()
        assert ok_pipeline.calls == []

    def test_wrong_body_type_is_400(self, ok_pipeline):
        client = TestClient(create_app(Settings(), ok_pipeline))

        response = client.post("/api/scrape", json={"url": ["a", "b"]})

        assert response.status_code == 400
        assert response.json() == {"error": "URL is required"}

    def test_missing_url_reaches_pipeline(self):
        client = TestClient(create_app(Settings(), MediaPipeline(ExtractorSettings(), RecordingSink())))

        response = client.post("/api/scrape", json={})

        assert response.status_code == 400
        assert response.json() == {"error": "URL is required"}


class TestHealthRoute:

    def test_reports_render_service(self, ok_pipeline):
        settings = Settings(extractor=ExtractorSettings(render_service_url="http://render/api"))
        client = TestClient(create_app(settings, ok_pipeline))

        response = client.get("/api/health")

        assert response.json() == {"status": "ok", "renderService": True}

    def test_without_render_service(self, ok_pipeline):
        client = TestClient(create_app(Settings(), ok_pipeline))
        assert client.get("/api/health").json() == {"status": "ok", "renderService": False}
