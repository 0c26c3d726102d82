"""
HTTP API tests. Dependencies are overridden so no real Mistral client is built.
"""
import pytest
from fastapi.testclient import TestClient

from api.app.main import app, get_client, get_settings


@pytest.fixture
def http(settings, client):
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_client] = lambda: client
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestHealth:
    def test_health(self, http):
        response = http.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["model"] == "test-model"
        assert "timestamp" in data


class TestExtract:
    def test_extracts_text(self, http, fake_mistral, png_document):
        response = http.post("/extract", files={"file": ("scan.jpg", png_document.content, "image/jpeg")})

        assert response.status_code == 200
        data = response.json()
        assert data["text"] == "Hello\nWorld"
        assert data["file_name"] == "scan.txt"
        assert data["content_type"] == "image/jpeg"
        assert data["file_size_bytes"] == len(png_document.content)
        assert len(fake_mistral.chat.calls) == 1

    def test_rejects_non_image(self, http, fake_mistral):
        response = http.post("/extract", files={"file": ("doc.pdf", b"%PDF-1.4", "application/pdf")})

        assert response.status_code == 415
        assert response.json()["detail"] == "Invalid file type. Please upload an image file."
        assert fake_mistral.chat.calls == []

    def test_rejects_empty_image(self, http, fake_mistral):
        response = http.post("/extract", files={"file": ("empty.png", b"", "image/png")})

        assert response.status_code == 422
        assert fake_mistral.chat.calls == []

    def test_remote_failure_is_bad_gateway(self, http, fake_mistral, png_document):
        fake_mistral.fail(ConnectionError("connection reset"))

        response = http.post("/extract", files={"file": ("scan.png", png_document.content, "image/png")})

        assert response.status_code == 502
        assert response.json()["detail"].startswith("Error calling Mistral API")
        assert "connection reset" in response.json()["detail"]

    def test_requires_file(self, http):
        assert http.post("/extract").status_code == 422
