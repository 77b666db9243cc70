"""Flask application setup and blueprint wiring."""

from __future__ import annotations

import os
from typing import Any, Dict, Optional

from flask import Flask, jsonify
from flask_cors import CORS

from resume_wizard.routes import register_routes
from resume_wizard.services.cache_service import DEFAULT_CACHE_TTL_HOURS
from resume_wizard.services.session_service import DEFAULT_SESSION_TTL_DAYS
from resume_wizard.services.workflow_service import build_workflows

UPLOAD_LIMIT_BYTES = 10 * 1024 * 1024  # 10 MB per resume file
# Request bodies may exceed the per-file limit so oversized files still reach
# the upload handler and get its validation message.
REQUEST_LIMIT_BYTES = 20 * 1024 * 1024


def _optional_float(value: Optional[str]) -> Optional[float]:
    if value in (None, ""):
        return None
    return float(value)


def load_config() -> Dict[str, Any]:
    """Read application settings from the environment."""
    return {
        "MAX_CONTENT_LENGTH": REQUEST_LIMIT_BYTES,
        "UPLOAD_LIMIT_BYTES": UPLOAD_LIMIT_BYTES,
        "N8N_SCRAPE_WEBHOOK_URL": os.getenv("N8N_SCRAPE_WEBHOOK_URL", ""),
        "N8N_ANALYZE_WEBHOOK_URL": os.getenv("N8N_ANALYZE_WEBHOOK_URL", ""),
        "N8N_OPTIMIZE_WEBHOOK_URL": os.getenv("N8N_OPTIMIZE_WEBHOOK_URL", ""),
        "WEBHOOK_TIMEOUT_SECONDS": _optional_float(os.getenv("WEBHOOK_TIMEOUT_SECONDS")),
        "JOB_CACHE_TTL_HOURS": float(os.getenv("JOB_CACHE_TTL_HOURS", DEFAULT_CACHE_TTL_HOURS)),
        "SESSION_TTL_DAYS": int(os.getenv("SESSION_TTL_DAYS", DEFAULT_SESSION_TTL_DAYS)),
        "CORS_ORIGINS": os.getenv("CORS_ORIGINS", "*"),
        "CREATE_INDEXES": os.getenv("CREATE_INDEXES", "true").lower() == "true",
    }


def create_app(config: Optional[Dict[str, Any]] = None, workflows=None) -> Flask:
    """Configure and return the Flask application instance.

    ``config`` overrides environment settings; ``workflows`` replaces the
    webhook/fixture selection, which tests use to stub external calls.
    """
    app = Flask(__name__)
    app.config.update(load_config())
    if config:
        app.config.update(config)

    CORS(app, resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}})

    app.extensions["workflows"] = workflows or build_workflows(app.config)

    @app.errorhandler(413)
    def _request_too_large(_error):
        return jsonify(error="File too large. Maximum size is 10MB."), 400

    register_routes(app)

    if app.config["CREATE_INDEXES"]:
        try:
            from resume_wizard import database

            database.create_indexes()
            app.logger.info("MongoDB indexes created successfully")
        except Exception as e:
            app.logger.warning(f"Failed to create MongoDB indexes: {e}")

    return app
