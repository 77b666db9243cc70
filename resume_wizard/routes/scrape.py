"""/api/scrape route: job description lookup through the cache or scrape workflow."""

from __future__ import annotations

from typing import Any, Dict

import validators
from flask import Blueprint, current_app, jsonify, request

from resume_wizard.services import cache_service, session_service
from resume_wizard.services.workflow_service import WorkflowError, current_workflows

bp = Blueprint("scrape", __name__, url_prefix="/api")


@bp.post("/scrape")
def scrape_job():
    """Return parsed job content for a URL, preferring a fresh cache entry."""
    payload = request.get_json(silent=True) or {}
    if not isinstance(payload, dict):
        return jsonify(error="Request body must be a JSON object"), 400

    url = str(payload.get("url") or "").strip()
    session_id = str(payload.get("sessionId") or "").strip() or None

    if not url:
        return jsonify(error="URL is required"), 400

    if not validators.url(url):
        return jsonify(error="Invalid URL format"), 400

    try:
        if session_id and session_service.get_session(session_id) is None:
            return jsonify(error="Session not found"), 404

        cached = cache_service.get_cached_job(url)
        if cached:
            current_app.logger.info(f"Job cache hit for {url}")
            if session_id:
                session_service.update_session(session_id, {"job_description": cached["parsed_content"]})
            return jsonify(success=True, data=cached["parsed_content"], cached=True), 200

        workflow = current_workflows().scrape
        try:
            result = workflow.run({"url": url, "sessionId": session_id})
        except WorkflowError:
            current_app.logger.exception(f"Scrape workflow failed for {url}")
            return jsonify(error="Failed to scrape job description"), 500

        if not result.mock:
            cache_service.cache_job(url, result.data, ttl_hours=current_app.config["JOB_CACHE_TTL_HOURS"])

        if session_id:
            session_service.update_session(session_id, {"job_description": result.data})

        body: Dict[str, Any] = {"success": True, "data": result.data}
        if result.mock:
            body["mock"] = True
        return jsonify(body), 200
    except Exception:
        current_app.logger.exception("Scrape error")
        return jsonify(error="Internal server error"), 500
