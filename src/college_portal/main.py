from __future__ import annotations

import importlib
import logging
from typing import Any, Mapping, Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from flask_cors import CORS

from .attendance.controller import register as register_attendance
from .common.log import configure_logging
from .config import get_settings_module
from .container import Container, build_container
from .database.bootstrap import apply_schema, ensure_demo_accounts, list_tables
from .exams.controller import register as register_exams
from .feedback.controller import register as register_feedback
from .fees.controller import register as register_fees
from .marks.controller import register as register_marks
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def load_settings(overrides: Optional[Mapping[str, Any]] = None) -> dict[str, Any]:
    """Settings module selected by APP_ENV, as a plain dict, with `overrides` applied."""

    load_dotenv(override=False)
    module = importlib.import_module(get_settings_module())
    settings = {k: getattr(module, k) for k in dir(module) if k.isupper()}
    settings.update(overrides or {})
    return settings


def create_app(settings_override: Optional[Mapping[str, Any]] = None, *, container: Optional[Container] = None) -> Flask:
    settings = load_settings(settings_override)
    configure_logging(settings.get("LOG_LEVEL", "INFO"))

    app = Flask(__name__)
    app.secret_key = settings["SECRET_KEY"]
    app.config["DEBUG"] = bool(settings.get("DEBUG", False))
    app.config["TESTING"] = bool(settings.get("TESTING", False))
    CORS(app, origins=settings.get("CORS_ORIGINS", "*"))

    if container is None:
        container = build_container(
            db_config=settings["DB_CONFIG"],
            secret_key=settings["SECRET_KEY"],
            token_ttl_hours=int(settings.get("TOKEN_TTL_HOURS", 1)),
            attendance_threshold=float(settings.get("ATTENDANCE_THRESHOLD", 0.85)),
        )
        conn = container.conn
        logger.info("Record store: %s", conn.config.describe())

        if settings.get("AUTO_INIT_DB", False):
            apply_schema(conn)
            logger.info("Schema ready (tables=%d)", len(list_tables(conn)))
        if settings.get("AUTO_SEED_DB", False):
            ensure_demo_accounts(conn)

    app.extensions["container"] = container

    register_users(app, container)
    register_attendance(app, container)
    register_marks(app, container)
    register_fees(app, container)
    register_exams(app, container)
    register_feedback(app, container)

    @app.errorhandler(404)
    def not_found(_e):
        return jsonify({"success": False, "message": "Route not found"}), 404

    @app.route("/api/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"success": True, "status": "ok"})

    return app
