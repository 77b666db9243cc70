"""/api/analyze and /api/optimize routes forwarding session data to workflows."""

from __future__ import annotations

from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request

from resume_wizard.services import optimization_service, session_service
from resume_wizard.services.workflow_service import WorkflowError, current_workflows

bp = Blueprint("analyze", __name__, url_prefix="/api")

ANALYSIS_STEP = 3
REVIEW_STEP = 4


def _load_session():
    """Resolve ``sessionId`` from the JSON body into a session document or an error response."""
    payload = request.get_json(silent=True) or {}
    if not isinstance(payload, dict):
        return None, (jsonify(error="Request body must be a JSON object"), 400)

    session_id = str(payload.get("sessionId") or "").strip()

    if not session_id:
        return None, (jsonify(error="Session ID is required"), 400)

    session = session_service.get_session(session_id)
    if session is None:
        return None, (jsonify(error="Session not found"), 404)

    return session, None


@bp.post("/analyze")
def analyze_resume():
    """Run skill-gap analysis for the session's job description and resume."""
    try:
        session, error_response = _load_session()
        if error_response is not None:
            return error_response

        if not session.get("job_description") or not session.get("resume_data"):
            return jsonify(error="Missing job description or resume data"), 400

        session_id = session["_id"]
        try:
            result = current_workflows().analyze.run(
                {
                    "sessionId": session_id,
                    "jobDescription": session["job_description"],
                    "resumeData": session["resume_data"],
                }
            )
        except WorkflowError:
            current_app.logger.exception(f"Analyze workflow failed for session {session_id}")
            return jsonify(error="Failed to analyze resume"), 500

        session_service.update_session(
            session_id,
            {"analysis_data": result.data, "current_step": ANALYSIS_STEP},
        )

        body: Dict[str, Any] = {"success": True, "analysis": result.data}
        if result.mock:
            body["mock"] = True
        return jsonify(body), 200
    except Exception:
        current_app.logger.exception("Analysis error")
        return jsonify(error="Internal server error"), 500


@bp.post("/optimize")
def optimize_resume():
    """Rewrite the resume using the analysis and the user's answers."""
    try:
        session, error_response = _load_session()
        if error_response is not None:
            return error_response

        if not session.get("analysis_data"):
            return jsonify(error="Missing analysis data"), 400

        session_id = session["_id"]
        try:
            result = current_workflows().optimize.run(
                {
                    "sessionId": session_id,
                    "jobDescription": session.get("job_description"),
                    "resumeData": session.get("resume_data"),
                    "analysis": session["analysis_data"],
                    "answers": session.get("answers") or {},
                }
            )
        except WorkflowError:
            current_app.logger.exception(f"Optimize workflow failed for session {session_id}")
            return jsonify(error="Failed to optimize resume"), 500

        updated = session_service.update_session(
            session_id,
            {"optimized_resume": result.data, "current_step": REVIEW_STEP},
        )
        optimization_service.record_optimization(updated or session, result.data)

        body: Dict[str, Any] = {"success": True, "optimizedResume": result.data}
        if result.mock:
            body["mock"] = True
        return jsonify(body), 200
    except Exception:
        current_app.logger.exception("Optimization error")
        return jsonify(error="Internal server error"), 500


@bp.get("/optimizations")
def list_optimizations():
    """Return the optimization history of the session named by ``sessionId``, newest first."""
    session_id = request.args.get("sessionId", "").strip()
    if not session_id:
        return jsonify(error="Session ID is required"), 400

    try:
        if session_service.get_session(session_id) is None:
            return jsonify(error="Session not found"), 404
        history = optimization_service.get_optimizations_for_session(session_id)
    except Exception:
        current_app.logger.exception("Optimization history error")
        return jsonify(error="Internal server error"), 500

    return jsonify(optimizations=history), 200
