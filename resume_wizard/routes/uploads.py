"""/api/upload and /api/files routes for resume file storage."""

from __future__ import annotations

from io import BytesIO

from flask import Blueprint, current_app, jsonify, request, send_file, url_for

from resume_wizard.services import session_service, upload_service
from resume_wizard.utils.clock import utcnow
from resume_wizard.utils.text import (
    DOCX_MIME_TYPE,
    PDF_MIME_TYPE,
    TXT_MIME_TYPE,
    extract_text_from_upload,
    make_text_excerpt,
)

bp = Blueprint("uploads", __name__, url_prefix="/api")

ALLOWED_MIME_TYPES = (PDF_MIME_TYPE, DOCX_MIME_TYPE, TXT_MIME_TYPE)


@bp.post("/upload")
def upload_resume():
    """Validate and store an uploaded resume, then attach it to the session."""
    storage = request.files.get("file")
    session_id = (request.form.get("sessionId") or "").strip()

    if storage is None or storage.filename == "":
        return jsonify(error="No file provided"), 400

    if not session_id:
        return jsonify(error="Session ID is required"), 400

    if storage.mimetype not in ALLOWED_MIME_TYPES:
        return jsonify(error="Invalid file type. Please upload PDF, DOCX, or TXT files."), 400

    raw_bytes = storage.read()
    if len(raw_bytes) > current_app.config["UPLOAD_LIMIT_BYTES"]:
        return jsonify(error="File too large. Maximum size is 10MB."), 400

    try:
        if session_service.get_session(session_id) is None:
            return jsonify(error="Session not found"), 404

        path = upload_service.build_storage_path(session_id, storage.filename)
        saved = upload_service.save_file(
            path=path,
            session_id=session_id,
            name=storage.filename,
            mime_type=storage.mimetype,
            raw_bytes=raw_bytes,
        )
        if not saved:
            return jsonify(error="Failed to upload file"), 500

        text_content = extract_text_from_upload(raw_bytes, storage.filename, storage.mimetype)

        try:
            session_service.update_session(
                session_id,
                {
                    "resume_data": {
                        "file_url": path,
                        "file_name": storage.filename,
                        "file_type": storage.mimetype,
                        "file_size": len(raw_bytes),
                        "uploaded_at": utcnow().isoformat(),
                        "raw_text": text_content,
                        "text_excerpt": make_text_excerpt(text_content),
                    }
                },
            )
        except Exception:
            # The file is stored; the session can still be patched later.
            current_app.logger.exception("Session update error after upload")

        return (
            jsonify(
                success=True,
                path=path,
                url=url_for("uploads.download_file", path=path, _external=True),
                fileName=storage.filename,
            ),
            200,
        )
    except Exception:
        current_app.logger.exception("Upload error")
        return jsonify(error="Internal server error"), 500


@bp.get("/files/<path:path>")
def download_file(path: str):
    """Serve a previously uploaded file by its storage path."""
    record = upload_service.get_file(path)
    if record is None:
        return jsonify(error="File not found."), 404

    return send_file(
        BytesIO(record["data"]),
        mimetype=record["mime_type"],
        as_attachment=False,
        download_name=record["name"],
    )
