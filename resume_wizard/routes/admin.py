"""Admin utilities for inspecting stored wizard data."""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify

from resume_wizard.services import cache_service, optimization_service, session_service, upload_service

bp = Blueprint("admin", __name__, url_prefix="/api/admin")


@bp.get("/stats")
def get_stats():
    """Get overall system statistics."""
    try:
        stats = {
            "total_sessions": session_service.count_sessions(),
            "total_files": upload_service.count_files(),
            "cached_jobs": cache_service.count_entries(include_expired=False),
            "total_optimizations": optimization_service.count_optimizations(),
        }
        workflows = current_app.extensions["workflows"]
        stats["live_workflows"] = {
            name: getattr(workflows, name).is_live for name in ("scrape", "analyze", "optimize")
        }
        return jsonify(stats), 200
    except Exception:
        current_app.logger.exception("Failed to collect stats")
        return jsonify(error="Internal server error"), 500
