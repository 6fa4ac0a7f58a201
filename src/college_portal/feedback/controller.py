from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.guards import current_session, roles_required
from ..common.http import error_response, server_error
from ..common.validators import require_payload
from ..container import Container
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    tokens = container.tokens

    @app.route("/api/feedback/status/<student_key>", methods=["GET"], endpoint="feedback_status")
    @roles_required(tokens)
    def feedback_status(student_key: str):
        try:
            subjects = container.feedback_service.status(current_session(), student_key)
            return jsonify({"success": True, "submittedSubjects": subjects})
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("Error fetching feedback status")

    @app.route("/api/feedback/submit", methods=["POST"], endpoint="feedback_submit")
    @roles_required(tokens)
    def feedback_submit():
        try:
            container.feedback_service.submit(current_session(), require_payload(request.get_json(silent=True) or {}))
            return jsonify({"success": True, "message": "Feedback submitted successfully"})
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("Error submitting feedback")
