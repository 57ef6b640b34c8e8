"""
HTTP API routes.
"""
import logging

from flask import jsonify, request
from werkzeug.exceptions import HTTPException

from onlineexam.api.auth import auth_bp
from onlineexam.api.exams import exams_bp
from onlineexam.api.monitor import monitor_bp
from onlineexam.api.students import students_bp
from onlineexam.api.submissions import submissions_bp
from onlineexam.config import API_NAME, API_VERSION

logger = logging.getLogger(__name__)

BODY_METHODS = ("POST", "PUT", "PATCH")


def register_routes(app, enable_monitor=True):
    """Register all HTTP routes on the Flask app."""

    @app.before_request
    def parse_json_body():
        # Parse eagerly so oversized or malformed bodies fail before any handler runs
        if request.method in BODY_METHODS and request.is_json and request.content_length:
            request.get_json()

    @app.get("/")
    def root():
        return jsonify({"ok": True, "message": "OnlineExam API is running!"})

    @app.get("/api/health")
    def health():
        return jsonify({"ok": True})

    @app.get("/api")
    def api_info():
        return jsonify({"ok": True, "name": API_NAME, "version": API_VERSION})

    app.register_blueprint(auth_bp, url_prefix="/api/auth")
    app.register_blueprint(exams_bp, url_prefix="/api/exams")
    app.register_blueprint(submissions_bp, url_prefix="/api/submissions")
    app.register_blueprint(students_bp, url_prefix="/api/students")

    if enable_monitor:
        app.register_blueprint(monitor_bp, url_prefix="/api/monitor")
    else:
        logger.info("[HTTP] monitor routes disabled")

    @app.errorhandler(Exception)
    def handle_error(e):
        if isinstance(e, HTTPException):
            logger.warning("[HTTP] %s %s -> %s %s", request.method, request.path, e.code, e.name)
            return jsonify({"message": e.name, "error": e.description}), e.code

        logger.error("[HTTP] server error on %s %s", request.method, request.path, exc_info=e)
        return jsonify({"message": "Internal Server Error", "error": str(e)}), 500
