"""/api/session routes for creating, reading and updating wizard sessions."""

from __future__ import annotations

from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request

from resume_wizard.services import session_service

bp = Blueprint("sessions", __name__, url_prefix="/api/session")


@bp.post("")
def create_session():
    """Create an empty session for a new wizard run."""
    try:
        session = session_service.create_session(ttl_days=current_app.config["SESSION_TTL_DAYS"])
    except Exception:
        current_app.logger.exception("Session creation error")
        return jsonify(error="Failed to create session"), 500

    return jsonify(session=session_service.serialize_session(session)), 200


@bp.get("")
def get_session():
    """Return the session identified by the ``id`` query parameter."""
    session_id = request.args.get("id", "").strip()
    if not session_id:
        return jsonify(error="Session ID is required"), 400

    try:
        session = session_service.get_session(session_id)
    except Exception:
        current_app.logger.exception("Session fetch error")
        return jsonify(error="Internal server error"), 500

    if session is None:
        return jsonify(error="Session not found"), 404

    return jsonify(session=session_service.serialize_session(session)), 200


@bp.patch("")
def update_session():
    """Merge the provided fields into an existing session."""
    payload = request.get_json(silent=True) or {}
    if not isinstance(payload, dict):
        return jsonify(error="Request body must be a JSON object"), 400

    updates: Dict[str, Any] = dict(payload)
    session_id = str(updates.pop("sessionId", "") or "").strip()

    if not session_id:
        return jsonify(error="Session ID is required"), 400

    rejected = session_service.unknown_fields(updates)
    if rejected:
        return jsonify(error=f"Unknown session field(s): {', '.join(rejected)}"), 400

    if "current_step" in updates and not session_service.is_valid_step(updates["current_step"]):
        return jsonify(error="current_step must be an integer from 1 to 5"), 400

    try:
        session = session_service.update_session(session_id, updates)
    except Exception:
        current_app.logger.exception("Session update error")
        return jsonify(error="Failed to update session"), 500

    if session is None:
        return jsonify(error="Session not found"), 404

    return jsonify(session=session_service.serialize_session(session)), 200
