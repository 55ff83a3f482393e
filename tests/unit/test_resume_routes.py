"""
Unit tests for api/resume_router.py.

The resume service runs against a temporary database; storage is mocked.
"""
import base64
from unittest.mock import MagicMock, patch

import pytest

from api.main import app
from api.resume_router import get_service
from core.resume.repository import ResumeRepository
from core.resume.service import ResumeService

BUCKET_URL = "https://storage.googleapis.com/resume-bucket/resumes/"
PDF_BASE64 = base64.b64encode(b"%PDF-1.4 client").decode()


@pytest.fixture
def storage():
    mock = MagicMock()
    mock.upload_pdf.side_effect = lambda data, filename: BUCKET_URL + filename
    return mock


@pytest.fixture
def service(tmp_path, storage):
    return ResumeService(repository=ResumeRepository(str(tmp_path / "resumes.db")), storage=storage)


@pytest.fixture
def client(app_client, service):
    app.dependency_overrides[get_service] = lambda: service
    return app_client


@pytest.fixture
def resume_id(client, auth_headers, full_payload):
    resp = client.post("/api/resume", json={"title": "Backend CV", "data": full_payload}, headers=auth_headers)
    assert resp.status_code == 201
    return resp.json()["id"]


class TestAuthRequired:

    @pytest.mark.parametrize("method, path", [
        ("get", "/api/resume"),
        ("post", "/api/resume"),
        ("get", "/api/resume/abc"),
        ("patch", "/api/resume/abc"),
        ("delete", "/api/resume/abc"),
        ("get", "/api/resume/abc/pdf"),
        ("post", "/api/resume/abc/export"),
    ])
    def test_missing_token(self, client, method, path):
        resp = getattr(client, method)(path)
        assert resp.status_code == 401
        assert resp.json()["detail"] == "Unauthorized"

    def test_bad_token(self, client):
        resp = client.get("/api/resume", headers={"Authorization": "Bearer not-a-jwt"})
        assert resp.status_code == 401


class TestCrudRoutes:

    def test_create_returns_camel_case(self, client, auth_headers, full_payload):
        resp = client.post(
            "/api/resume",
            json={"title": "CV", "versionName": "v1", "data": full_payload},
            headers=auth_headers,
        )
        assert resp.status_code == 201
        body = resp.json()
        assert body["versionName"] == "v1"
        assert body["pdfUrl"] is None
        assert body["data"]["contact"]["fullName"] == "Jane Doe"
        assert body["isActive"] is True

    def test_create_validates_title(self, client, auth_headers, full_payload):
        resp = client.post("/api/resume", json={"title": "", "data": full_payload}, headers=auth_headers)
        assert resp.status_code == 422

    def test_list(self, client, auth_headers, resume_id):
        resp = client.get("/api/resume", headers=auth_headers)
        assert resp.status_code == 200
        assert [r["id"] for r in resp.json()] == [resume_id]

    def test_get_and_missing(self, client, auth_headers, resume_id):
        assert client.get(f"/api/resume/{resume_id}", headers=auth_headers).status_code == 200
        resp = client.get("/api/resume/missing", headers=auth_headers)
        assert resp.status_code == 404
        assert resp.json()["detail"] == "Resume not found"

    def test_other_users_cannot_see_resume(self, client, auth_service, resume_id):
        from core.auth.models import UserCreate

        _, tokens = auth_service.register_user(UserCreate(email="other@example.com", password="another-password"))
        headers = {"Authorization": f"Bearer {tokens.access_token}"}
        assert client.get(f"/api/resume/{resume_id}", headers=headers).status_code == 404
        assert client.get("/api/resume", headers=headers).json() == []

    def test_patch(self, client, auth_headers, resume_id):
        resp = client.patch(f"/api/resume/{resume_id}", json={"title": "Renamed"}, headers=auth_headers)
        assert resp.status_code == 200
        assert resp.json()["title"] == "Renamed"
        assert resp.json()["data"]["contact"]["fullName"] == "Jane Doe"

    def test_patch_missing(self, client, auth_headers):
        resp = client.patch("/api/resume/missing", json={"title": "x"}, headers=auth_headers)
        assert resp.status_code == 404

    def test_delete(self, client, auth_headers, resume_id):
        resp = client.delete(f"/api/resume/{resume_id}", headers=auth_headers)
        assert resp.status_code == 200
        assert resp.json() == {"message": "Resume deleted successfully"}
        assert client.delete(f"/api/resume/{resume_id}", headers=auth_headers).status_code == 404

    def test_duplicate(self, client, auth_headers, resume_id):
        resp = client.post(f"/api/resume/{resume_id}/duplicate", headers=auth_headers)
        assert resp.status_code == 201
        assert resp.json()["title"] == "Backend CV (Copy)"
        assert resp.json()["id"] != resume_id


class TestPreviewAndPdf:

    def test_preview_html(self, client, auth_headers, resume_id):
        resp = client.get(f"/api/resume/{resume_id}/preview?layout=compact", headers=auth_headers)
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/html")
        assert 'data-layout="compact"' in resp.text

    def test_preview_rejects_unknown_layout(self, client, auth_headers, resume_id):
        resp = client.get(f"/api/resume/{resume_id}/preview?layout=fancy", headers=auth_headers)
        assert resp.status_code == 422

    def test_vector_pdf_download(self, client, auth_headers, resume_id):
        resp = client.get(f"/api/resume/{resume_id}/pdf?layout=executive", headers=auth_headers)
        assert resp.status_code == 200
        assert resp.headers["content-type"] == "application/pdf"
        assert resp.headers["content-disposition"] == 'attachment; filename="Backend CV.pdf"'
        assert resp.content.startswith(b"%PDF")

    def test_unknown_mode(self, client, auth_headers, resume_id):
        resp = client.get(f"/api/resume/{resume_id}/pdf?mode=sepia", headers=auth_headers)
        assert resp.status_code == 400

    def test_pdf_missing_resume(self, client, auth_headers):
        assert client.get("/api/resume/missing/pdf", headers=auth_headers).status_code == 404

    def test_raster_failure_is_generic(self, client, auth_headers, resume_id):
        from core.export import GENERIC_FAILURE, ExportError

        with patch("core.resume.service.export_document", side_effect=ExportError()):
            resp = client.get(f"/api/resume/{resume_id}/pdf?mode=raster", headers=auth_headers)
        assert resp.status_code == 500
        assert resp.json()["detail"] == GENERIC_FAILURE


class TestExportRoute:

    def test_export(self, client, auth_headers, resume_id):
        resp = client.post(f"/api/resume/{resume_id}/export", json={"pdfBase64": PDF_BASE64}, headers=auth_headers)
        assert resp.status_code == 200
        body = resp.json()
        assert body["message"] == "PDF exported successfully"
        assert body["pdfUrl"].startswith(BUCKET_URL + resume_id)
        assert body["resume"]["pdfUrl"] == body["pdfUrl"]

    def test_export_missing_payload(self, client, auth_headers, resume_id):
        resp = client.post(f"/api/resume/{resume_id}/export", json={}, headers=auth_headers)
        assert resp.status_code == 400
        assert resp.json()["detail"] == "PDF data is required"

    def test_export_missing_resume(self, client, auth_headers):
        resp = client.post("/api/resume/missing/export", json={}, headers=auth_headers)
        assert resp.status_code == 404
        assert resp.json()["detail"] == "Resume not found"

    def test_export_without_storage(self, client, auth_headers, resume_id, storage):
        storage.upload_pdf.side_effect = None
        storage.upload_pdf.return_value = None
        resp = client.post(f"/api/resume/{resume_id}/export", json={"pdfBase64": PDF_BASE64}, headers=auth_headers)
        assert resp.status_code == 500
        assert resp.json()["detail"] == "Failed to upload PDF. Storage not configured."

    def test_export_storage_rejected(self, client, auth_headers, resume_id, storage):
        from core.storage import StorageError

        storage.upload_pdf.side_effect = StorageError("Upload rejected (403)")
        resp = client.post(f"/api/resume/{resume_id}/export", json={"pdfBase64": PDF_BASE64}, headers=auth_headers)
        assert resp.status_code == 500
        assert resp.json()["detail"] == "Failed to upload PDF"

    def test_export_in_progress(self, client, auth_headers, resume_id, service):
        with service._exclusive(resume_id):
            resp = client.post(f"/api/resume/{resume_id}/export", json={"pdfBase64": PDF_BASE64},
                               headers=auth_headers)
        assert resp.status_code == 409

    def test_share_vector(self, client, auth_headers, resume_id, storage):
        resp = client.post(f"/api/resume/{resume_id}/share?mode=vector&layout=minimal", headers=auth_headers)
        assert resp.status_code == 200
        assert resp.json()["pdfUrl"].startswith(BUCKET_URL)
        assert storage.upload_pdf.call_args.args[0].startswith(b"%PDF")


class TestLayoutsRoute:

    def test_list_layouts(self, client):
        resp = client.get("/api/layouts")
        assert resp.status_code == 200
        body = resp.json()
        assert body["default"] == "classic"
        assert [layout["id"] for layout in body["layouts"]] == [
            "classic", "modern", "professional", "minimal", "executive", "compact",
        ]
