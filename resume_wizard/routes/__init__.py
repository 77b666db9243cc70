"""Blueprint registration helper."""

from __future__ import annotations

from flask import Flask, jsonify

from .admin import bp as admin_bp
from .analyze import bp as analyze_bp
from .scrape import bp as scrape_bp
from .sessions import bp as sessions_bp
from .uploads import bp as uploads_bp


def register_routes(app: Flask) -> None:
    """Register all application blueprints on the provided Flask app."""
    app.register_blueprint(sessions_bp)
    app.register_blueprint(uploads_bp)
    app.register_blueprint(scrape_bp)
    app.register_blueprint(analyze_bp)
    app.register_blueprint(admin_bp)

    @app.get("/")
    def index():
        return jsonify(message="Hello from the Resume Wizard API"), 200
