from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.guards import roles_required
from ..common.http import error_response, server_error
from ..common.validators import require_payload
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    tokens = container.tokens

    @app.route("/api/exam/all", methods=["GET"], endpoint="exam_all")
    @roles_required(tokens)
    def exam_all():
        try:
            return jsonify({"success": True, "exams": [e.to_dict() for e in container.exam_service.list_all()]})
        except Exception:
            return server_error("Error fetching exams")

    @app.route("/api/exam/schedule", methods=["GET"], endpoint="exam_schedule")
    @roles_required(tokens)
    def exam_schedule():
        try:
            exams = container.exam_service.schedule(
                department=request.args.get("department"),
                semester=request.args.get("semester"),
            )
            return jsonify({"success": True, "exams": [e.to_dict() for e in exams]})
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("Error fetching exam schedule")

    @app.route("/api/exam/<int:exam_id>", methods=["GET"], endpoint="exam_get")
    @roles_required(tokens)
    def exam_get(exam_id: int):
        try:
            return jsonify({"success": True, "exam": container.exam_service.get(exam_id).to_dict()})
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("Error fetching exam")

    @app.route("/api/exam", methods=["POST"], endpoint="exam_create")
    @roles_required(tokens, Role.ADMIN)
    def exam_create():
        try:
            exam = container.exam_service.create(require_payload(request.get_json(silent=True) or {}))
            return jsonify({"success": True, "exam": exam.to_dict(), "message": "Exam created successfully"})
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("Error creating exam")

    @app.route("/api/exam/<int:exam_id>", methods=["PUT"], endpoint="exam_update")
    @roles_required(tokens, Role.ADMIN)
    def exam_update(exam_id: int):
        try:
            exam = container.exam_service.update(exam_id, require_payload(request.get_json(silent=True) or {}))
            return jsonify({"success": True, "exam": exam.to_dict(), "message": "Exam updated successfully"})
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("Error updating exam")

    @app.route("/api/exam/<int:exam_id>", methods=["DELETE"], endpoint="exam_delete")
    @roles_required(tokens, Role.ADMIN)
    def exam_delete(exam_id: int):
        try:
            container.exam_service.delete(exam_id)
            return jsonify({"success": True, "message": "Exam deleted successfully"})
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("Error deleting exam")
