import pytest
from fastapi.testclient import TestClient

from station_export.api import export as export_api
from station_export.config import settings
from station_export.main import app
from station_export.services.exporters import ExportTaskError


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


def test_export_pdf(client, sample_html):
    resp = client.post("/api/export/pdf", json={"title": "Report", "html_content": sample_html})
    assert resp.status_code == 200
    assert resp.headers["content-type"] == "application/pdf"
    assert resp.headers["content-disposition"] == 'attachment; filename="report.pdf"'
    assert resp.content.startswith(b"%PDF")


def test_export_docx(client, sample_html):
    resp = client.post("/api/export/DOCX", json={"title": "Report", "html_content": sample_html})
    assert resp.status_code == 200
    assert resp.content.startswith(b"PK")
    assert 'filename="report.docx"' in resp.headers["content-disposition"]


def test_export_markdown(client, sample_html):
    resp = client.post("/api/export/md", json={"title": "Report", "html_content": sample_html})
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/markdown")
    assert resp.text == "# Report\n\n# Title\n\nHello **world**\n"


def test_unknown_format(client):
    resp = client.post("/api/export/rtf", json={"title": "Report", "html_content": "<p>x</p>"})
    assert resp.status_code == 400


def test_oversized_markup(client, monkeypatch):
    monkeypatch.setattr(settings, "max_html_chars", 10)
    body = {"title": "Report", "html_content": "<p>" + "x" * 20 + "</p>"}
    assert client.post("/api/export/pdf", json=body).status_code == 413
    assert client.post("/api/documents/stats", json={"html_content": body["html_content"]}).status_code == 413


def test_export_failure_is_500(client, monkeypatch):
    async def boom(title, html, fmt):
        raise ExportTaskError("Export task failed: boom")

    monkeypatch.setattr(export_api, "export_document", boom)
    resp = client.post("/api/export/pdf", json={"title": "Report", "html_content": ""})
    assert resp.status_code == 500
    assert resp.json()["detail"] == "Export task failed: boom"


def test_document_stats(client, sample_html):
    resp = client.post("/api/documents/stats", json={"html_content": sample_html})
    assert resp.status_code == 200
    assert resp.json() == {"word_count": 3, "character_count": 16, "reading_time_minutes": 1}


def test_health(client):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "healthy"
    assert sorted(data["formats"]) == ["docx", "html", "md", "pdf"]


def test_metrics(client, sample_html):
    client.post("/api/export/md", json={"title": "Report", "html_content": sample_html})
    resp = client.get("/metrics")
    assert resp.status_code == 200
    assert "export_requests_total" in resp.text


def test_request_id_is_echoed(client):
    resp = client.get("/api/health", headers={"X-Request-ID": "abc123"})
    assert resp.headers["x-request-id"] == "abc123"
    assert len(client.get("/api/health").headers["x-request-id"]) == 32


def test_export_html(client, sample_html):
    resp = client.post("/api/export/html", json={"title": "Report", "html_content": sample_html})
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/html")
    assert resp.text.endswith(f"<body>{sample_html}</body></html>")
