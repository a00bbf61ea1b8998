"""Tests for the HTTP upload API."""

import io
import zipfile

import pytest
from starlette.testclient import TestClient

from codecomplexity.config import AnalysisConfig
from codecomplexity.server import create_app

BODY = """
void greet(String name) {
    if (name == null || name.isEmpty()) {
        return;
    }
    System.out.println("Hello " + name);
}
"""


def _zip(members):
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        for name, content in members.items():
            archive.writestr(name, content)
    return buffer.getvalue()


@pytest.fixture(scope="module")
def client():
    return TestClient(create_app(AnalysisConfig()))


class TestHealth:
    """GET /api/v1/health."""

    def test_ok(self, client):
        response = client.get("/api/v1/health")
        assert response.status_code == 200
        assert response.text == "OK"


class TestAnalyzeUpload:
    """POST /api/v1/analyze."""

    def test_zip_upload(self, java_class, client):
        data = _zip(
            {
                "proj/A.java": java_class(BODY, name="A"),
                "proj/B.java": java_class(BODY, name="B"),
                "proj/README.md": "# readme",
            }
        )
        response = client.post(
            "/api/v1/analyze", files={"file": ("proj.zip", data, "application/zip")}
        )
        assert response.status_code == 200
        body = response.json()
        assert body["totalFiles"] == 2
        assert [f["path"] for f in body["files"]] == ["proj/A.java", "proj/B.java"]
        assert body["files"][0]["cyclomaticComplexity"] == 3
        assert body["files"][0]["duplicatedWith"] == ["proj/B.java"]
        assert 0 <= body["averageMaintainability"] <= 100

    def test_single_file_upload(self, java_class, client):
        response = client.post(
            "/api/v1/analyze",
            files={"file": ("A.java", java_class(BODY, name="A").encode(), "text/x-java")},
        )
        assert response.status_code == 200
        assert response.json()["files"][0]["path"] == "A.java"

    def test_unrelated_file_yields_empty_report(self, client):
        response = client.post(
            "/api/v1/analyze", files={"file": ("notes.txt", b"hello", "text/plain")}
        )
        assert response.status_code == 200
        assert response.json()["totalFiles"] == 0
        assert response.json()["averageMaintainability"] == 0.0

    def test_parse_failure_listed_as_skipped(self, client):
        data = _zip({"Bad.java": "class Bad { void f( {"})
        response = client.post("/api/v1/analyze", files={"file": ("p.zip", data)})
        assert response.status_code == 200
        assert response.json()["skippedFiles"][0]["path"] == "Bad.java"

    def test_missing_file_field(self, client):
        response = client.post("/api/v1/analyze", data={"other": "x"})
        assert response.status_code == 400

    def test_corrupt_archive(self, client):
        response = client.post("/api/v1/analyze", files={"file": ("p.zip", b"garbage")})
        assert response.status_code == 400

    def test_traversal_rejected(self, java_class, client):
        data = _zip({"../../Evil.java": java_class(BODY)})
        response = client.post("/api/v1/analyze", files={"file": ("p.zip", data)})
        assert response.status_code == 400
        assert response.json()["type"] == "SecurityError"
        assert "Security violation" in response.json()["error"]

    def test_upload_too_large(self):
        client = TestClient(create_app(AnalysisConfig(max_upload_mb=0.001)))
        response = client.post(
            "/api/v1/analyze", files={"file": ("A.java", b"x" * 4096, "text/x-java")}
        )
        assert response.status_code == 413

    def test_archive_decodes_too_large(self, java_class):
        client = TestClient(create_app(AnalysisConfig(max_total_mb=0.001)))
        data = _zip({f"proj/{n}.java": java_class(BODY, name=n) * 5 for n in "ABC"})
        response = client.post("/api/v1/analyze", files={"file": ("p.zip", data)})
        assert response.status_code == 413
        assert response.json()["type"] == "ArchiveTooLargeError"

    def test_get_not_allowed(self, client):
        assert client.get("/api/v1/analyze").status_code == 405
