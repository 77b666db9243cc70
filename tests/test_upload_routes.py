"""Tests for resume uploads and stored file downloads."""

from __future__ import annotations

from io import BytesIO

from resume_wizard.main import create_app

from conftest import TEST_CONFIG, fixture_workflows

TXT = "text/plain"
PDF = "application/pdf"
DOCX = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


def _upload(client, session_id, content=b"Jane Doe\nSoftware Engineer", name="resume.txt", mime=TXT):
    data = {"file": (BytesIO(content), name, mime)}
    if session_id is not None:
        data["sessionId"] = session_id
    return client.post("/api/upload", data=data, content_type="multipart/form-data")


def test_upload_stores_file_and_updates_session(client, session_id, mongo_db):
    response = _upload(client, session_id)

    assert response.status_code == 200
    body = response.get_json()
    assert body["success"] is True
    assert body["fileName"] == "resume.txt"
    assert body["path"].startswith(f"{session_id}/")
    assert body["path"].endswith(".txt")
    assert body["url"].endswith(f"/api/files/{body['path']}")

    stored = mongo_db.resume_files.find_one({"path": body["path"]})
    assert stored is not None
    assert stored["size"] == len(b"Jane Doe\nSoftware Engineer")

    session = mongo_db.sessions.find_one({"_id": session_id})
    resume_data = session["resume_data"]
    assert resume_data["file_url"] == body["path"]
    assert resume_data["file_name"] == "resume.txt"
    assert resume_data["file_type"] == TXT
    assert resume_data["raw_text"] == "Jane Doe\nSoftware Engineer"


def test_uploaded_file_can_be_downloaded(client, session_id):
    body = _upload(client, session_id).get_json()

    response = client.get(f"/api/files/{body['path']}")

    assert response.status_code == 200
    assert response.data == b"Jane Doe\nSoftware Engineer"
    assert response.mimetype == TXT


def test_download_unknown_file_is_404(client):
    response = client.get("/api/files/nobody/123.pdf")

    assert response.status_code == 404


def test_upload_requires_file(client, session_id):
    response = client.post(
        "/api/upload", data={"sessionId": session_id}, content_type="multipart/form-data"
    )

    assert response.status_code == 400
    assert response.get_json()["error"] == "No file provided"


def test_upload_requires_session_id(client):
    response = _upload(client, None)

    assert response.status_code == 400
    assert response.get_json()["error"] == "Session ID is required"


def test_upload_rejects_disallowed_type(client, session_id):
    response = _upload(client, session_id, content=b"\x89PNG", name="photo.png", mime="image/png")

    assert response.status_code == 400
    assert response.get_json()["error"] == "Invalid file type. Please upload PDF, DOCX, or TXT files."


def test_upload_rejects_file_over_ten_megabytes(client, session_id, mongo_db):
    oversized = b"0" * (15 * 1024 * 1024)

    response = _upload(client, session_id, content=oversized, name="resume.pdf", mime=PDF)

    assert response.status_code == 400
    assert response.get_json()["error"] == "File too large. Maximum size is 10MB."
    assert mongo_db.resume_files.count_documents({}) == 0


def test_request_over_body_limit_reports_file_too_large(session_id):
    config = dict(TEST_CONFIG, MAX_CONTENT_LENGTH=1024)
    small_app = create_app(config=config, workflows=fixture_workflows())
    small_client = small_app.test_client()

    response = _upload(small_client, session_id, content=b"x" * 4096)

    assert response.status_code == 400
    assert response.get_json()["error"] == "File too large. Maximum size is 10MB."


def test_upload_unknown_session_is_404(client):
    response = _upload(client, "missing-session")

    assert response.status_code == 404


def test_unreadable_pdf_is_still_stored(client, session_id, mongo_db):
    response = _upload(client, session_id, content=b"%PDF-1.4 not really a pdf", name="cv.pdf", mime=PDF)

    assert response.status_code == 200
    session = mongo_db.sessions.find_one({"_id": session_id})
    assert session["resume_data"]["file_type"] == PDF
    assert session["resume_data"]["raw_text"] == ""
