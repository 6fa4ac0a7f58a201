from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.guards import current_session, roles_required
from ..common.http import batch_response, error_response, server_error
from ..common.validators import require_payload
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    tokens = container.tokens

    @app.route("/api/marks/<student_key>", methods=["GET"], endpoint="student_marks")
    @roles_required(tokens)
    def student_marks(student_key: str):
        try:
            data = container.marks_service.get_marks(current_session(), student_key)
            return jsonify({"success": True, **data})
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("Error fetching marks")

    @app.route("/api/teacher/students-for-marks", methods=["GET"], endpoint="teacher_students_for_marks")
    @roles_required(tokens, Role.TEACHER, Role.ADMIN)
    def teacher_students_for_marks():
        try:
            data = container.student_service.find_for_teacher(
                year=request.args.get("year"),
                department=request.args.get("department"),
                section=request.args.get("section"),
            )
            return jsonify({"success": True, **data})
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("Error fetching students")

    @app.route("/api/teacher/marks", methods=["POST"], endpoint="teacher_submit_marks")
    @roles_required(tokens, Role.TEACHER, Role.ADMIN)
    def teacher_submit_marks():
        try:
            body = require_payload(request.get_json(silent=True) or {})
            result = container.marks_service.submit_batch(body.get("marksData"))
            return batch_response(result, saved="Marks saved successfully", partial="Some marks could not be saved")
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("Error saving marks")

    @app.route("/api/cgpa", methods=["POST"], endpoint="calculate_cgpa")
    def calculate_cgpa():
        try:
            body = require_payload(request.get_json(silent=True) or {})
            return jsonify({"success": True, **container.marks_service.cgpa(body.get("subjects"))})
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("Error calculating CGPA")
