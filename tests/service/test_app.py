"""Tests for the FastAPI service mode."""

from __future__ import annotations

import io
import zipfile

import pytest
from fastapi.testclient import TestClient

from docbundle.config import DocBundleConfig
from docbundle.errors import DocBundleError
from docbundle.generation import ContentGenerator
from docbundle.llm import LLMRunner
from docbundle.pipeline import DocumentationPipeline
from docbundle.service import create_app
from tests._fixtures.llm import RecordingLLMRunner, files_response
from tests._fixtures.pipeline import base_payload, make_pipeline


def _client(*responses: str) -> tuple[TestClient, RecordingLLMRunner]:
    runner = RecordingLLMRunner(*responses)
    app = create_app(lambda: make_pipeline(runner))
    return TestClient(app), runner


@pytest.fixture
def client(urlopen_stub) -> TestClient:
    test_client, _ = _client(files_response({"README.md": "# Foo"}))
    return test_client


def test_health_endpoint(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_generate_returns_bundle(client: TestClient) -> None:
    response = client.post("/api/generate", json=base_payload())

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["error"] is None
    bundle = data["data"]["bundle"]
    assert [item["name"] for item in bundle["markdownFiles"]] == ["README.md"]
    assert bundle["markdownFiles"][0]["path"] == "/README.md"
    assert "#112233" in bundle["themeCss"]
    assert bundle["sidebar"].startswith("# Navigation")
    assert data["data"]["sourceSummary"] is None


def test_generate_reports_source_summary(urlopen_stub) -> None:
    urlopen_stub.add("https://a.example/doc", "hello")
    client, _ = _client(files_response({"README.md": "# Foo"}))

    response = client.post(
        "/api/generate",
        json=base_payload(sourcesInput="https://a.example/doc, https://b.example/missing"),
    )

    assert response.status_code == 200
    assert response.json()["data"]["sourceSummary"] == {
        "fetched": [{"url": "https://a.example/doc", "chars": 5}],
        "failed": [{"url": "https://b.example/missing", "error": "HTTP 404 Not Found"}],
    }


def test_generate_rejects_invalid_input(urlopen_stub) -> None:
    client, runner = _client()

    response = client.post("/api/generate", json={"includeSidebar": "yes", "accentColor": "#112233"})

    assert response.status_code == 400
    assert response.json() == {
        "success": False,
        "data": None,
        "error": "Project name is required, Code input is required, includeSidebar must be a boolean",
    }
    assert runner.calls == []


def test_generation_failure_is_reported(urlopen_stub) -> None:
    client, _ = _client("no json here")

    response = client.post("/api/generate", json=base_payload())

    assert response.status_code == 500
    body = response.json()
    assert body["success"] is False
    assert body["error"].startswith("Generation failed: ")


def test_bundle_failure_is_reported(urlopen_stub) -> None:
    client, _ = _client(files_response({"GUIDE.md": "# Guide"}))

    response = client.post("/api/generate", json=base_payload())

    assert response.status_code == 500
    assert response.json()["error"] == "Bundle validation failed: Missing README.md"


def test_archive_endpoint_returns_zip(urlopen_stub) -> None:
    client, _ = _client(files_response({"README.md": "# Foo"}))

    response = client.post("/api/generate/archive", json=base_payload(projectName="Foo Bar"))

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/zip"
    assert 'filename="foo-bar-docs-' in response.headers["content-disposition"]
    with zipfile.ZipFile(io.BytesIO(response.content)) as archive:
        assert sorted(archive.namelist()) == ["README.md", "_sidebar.md", "index.html", "themes/docs.css"]


class _FailingPipeline:
    def __init__(self, error: Exception) -> None:
        self.error = error

    def run(self, request, *, cancel_event=None):
        raise self.error


def test_transport_failure_is_reported_as_generation_error(monkeypatch, urlopen_stub, tmp_path) -> None:
    class DroppedResponse:
        def read(self):
            raise ConnectionResetError("Connection reset by peer")

        def __enter__(self):
            return self

        def __exit__(self, exc_type, exc, tb):
            return False

    monkeypatch.setattr("docbundle.llm.runner.urlopen", lambda request, timeout=None: DroppedResponse())
    pipeline = DocumentationPipeline(
        DocBundleConfig(root=tmp_path),
        generator=ContentGenerator(LLMRunner(api_key="secret")),
    )
    client = TestClient(create_app(lambda: pipeline))

    response = client.post("/api/generate", json=base_payload())

    assert response.status_code == 500
    assert response.headers["content-type"] == "application/json"
    assert response.json()["error"] == "Generation failed: LLM request failed: Connection reset by peer"


def test_generic_docbundle_error_is_reported() -> None:
    client = TestClient(create_app(lambda: _FailingPipeline(DocBundleError("boom"))))

    response = client.post("/api/generate", json=base_payload())

    assert response.status_code == 500
    assert response.json() == {"success": False, "data": None, "error": "Generation failed: boom"}


def test_unexpected_error_returns_json_envelope() -> None:
    app = create_app(lambda: _FailingPipeline(KeyError("secret detail")))
    client = TestClient(app, raise_server_exceptions=False)

    response = client.post("/api/generate", json=base_payload())

    assert response.status_code == 500
    assert response.json() == {
        "success": False,
        "data": None,
        "error": "Generation failed: unexpected server error",
    }
