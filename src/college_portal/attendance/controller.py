from __future__ import annotations

import csv
import io

from flask import Flask, jsonify, request

from ..auth.guards import current_session, roles_required
from ..common.http import batch_response, error_response, server_error
from ..common.validators import require_non_empty, require_payload
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import DomainError

REPORT_FIELDS = [
    "student_key",
    "subject",
    "total_classes",
    "present_classes",
    "absent_classes",
    "percentage",
    "classes_needed",
]


def register(app: Flask, container: Container) -> None:
    tokens = container.tokens

    def _write_report_csv(*, rows, filename: str):
        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=REPORT_FIELDS)
        writer.writeheader()
        for row in rows:
            writer.writerow(row)

        csv_bytes = out.getvalue().encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/attendance/<student_key>", methods=["GET"], endpoint="attendance_summary")
    @roles_required(tokens)
    def attendance_summary(student_key: str):
        try:
            data = container.attendance_service.get_summary(current_session(), student_key)
            return jsonify({"success": True, **data})
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("Error fetching attendance data")

    @app.route("/api/teacher/students", methods=["GET"], endpoint="teacher_students")
    @roles_required(tokens, Role.TEACHER, Role.ADMIN)
    def teacher_students():
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

    @app.route("/api/teacher/attendance", methods=["POST"], endpoint="teacher_submit_attendance")
    @roles_required(tokens, Role.TEACHER, Role.ADMIN)
    def teacher_submit_attendance():
        try:
            body = require_payload(request.get_json(silent=True) or {})
            result = container.attendance_service.submit_batch(body.get("attendanceData"))
            return batch_response(
                result,
                saved="Attendance saved successfully",
                partial="Some attendance records could not be saved",
            )
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("Error saving attendance")

    @app.route("/api/admin/attendance/report.csv", methods=["GET"], endpoint="admin_attendance_report_csv")
    @roles_required(tokens, Role.ADMIN)
    def admin_attendance_report_csv():
        try:
            student_key = require_non_empty(request.args.get("studentKey"), "studentKey")
            rows = container.attendance_service.report_rows(student_key)
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("Error exporting attendance report")

        return _write_report_csv(rows=rows, filename=f"attendance_{student_key}.csv")
