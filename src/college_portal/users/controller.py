from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.guards import current_session, roles_required
from ..common.http import error_response, server_error
from ..common.validators import require_payload
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    tokens = container.tokens

    def _body() -> dict:
        return require_payload(request.get_json(silent=True) or {})

    # --- login ---

    @app.route("/api/auth/login", methods=["POST"], endpoint="student_login")
    def student_login():
        try:
            body = _body()
            result = container.auth_service.login_student(body.get("usn", ""), body.get("password", ""))
            return jsonify({"success": True, **result.to_dict()})
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("Server error")

    @app.route("/api/auth/teacher/login", methods=["POST"], endpoint="teacher_login")
    def teacher_login():
        try:
            body = _body()
            result = container.auth_service.login_teacher(
                body.get("teacherId") or body.get("email", ""),
                body.get("password", ""),
            )
            return jsonify({"success": True, **result.to_dict()})
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("Server error")

    @app.route("/api/auth/admin/login", methods=["POST"], endpoint="admin_login")
    def admin_login():
        try:
            body = _body()
            result = container.auth_service.login_admin(body.get("username", ""), body.get("password", ""))
            return jsonify({"success": True, "message": "Admin logged in successfully", **result.to_dict()})
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("Login failed")

    @app.route("/api/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        # Tokens are stateless; the client drops its copy.
        return jsonify({"success": True, "message": "Logged out successfully"})

    # --- profiles ---

    @app.route("/api/auth/student/<usn>", methods=["GET"], endpoint="student_profile")
    @roles_required(tokens)
    def student_profile(usn: str):
        try:
            return jsonify({"success": True, "student": container.student_service.profile(current_session(), usn)})
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("Error fetching student data")

    @app.route("/api/auth/teacher/data/<teacher_id>", methods=["GET"], endpoint="teacher_profile")
    @roles_required(tokens, Role.TEACHER, Role.ADMIN)
    def teacher_profile(teacher_id: str):
        try:
            return jsonify({"success": True, "teacher": container.teacher_service.get(teacher_id).to_public_dict()})
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("Server error")

    # --- admin: students ---

    @app.route("/api/auth/admin/students", methods=["GET"], endpoint="admin_students")
    @roles_required(tokens, Role.ADMIN)
    def admin_students():
        try:
            return jsonify({"success": True, **container.student_service.list_for_admin()})
        except Exception:
            return server_error("Error fetching students")

    @app.route("/api/auth/admin/students/register", methods=["POST"], endpoint="admin_register_student")
    @roles_required(tokens, Role.ADMIN)
    def admin_register_student():
        try:
            container.student_service.register(_body())
            return jsonify({"success": True, "message": "Student registered successfully"}), 201
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("Error registering student")

    @app.route("/api/auth/admin/students/update/<usn>", methods=["PUT"], endpoint="admin_update_student")
    @roles_required(tokens, Role.ADMIN)
    def admin_update_student(usn: str):
        try:
            container.student_service.update(usn, _body())
            return jsonify({"success": True, "message": "Student updated successfully"})
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("Error updating student")

    @app.route("/api/auth/admin/students/delete/<usn>", methods=["DELETE"], endpoint="admin_delete_student")
    @roles_required(tokens, Role.ADMIN)
    def admin_delete_student(usn: str):
        try:
            container.student_service.delete(usn)
            return jsonify({"success": True, "message": "Student deleted successfully"})
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("Error deleting student")

    # --- admin: teachers ---

    @app.route("/api/auth/admin/teachers", methods=["GET"], endpoint="admin_teachers")
    @roles_required(tokens, Role.ADMIN)
    def admin_teachers():
        try:
            return jsonify({"success": True, "teachers": container.teacher_service.list_all()})
        except Exception:
            return server_error("Error fetching teachers")

    @app.route("/api/auth/admin/teachers/register", methods=["POST"], endpoint="admin_register_teacher")
    @roles_required(tokens, Role.ADMIN)
    def admin_register_teacher():
        try:
            container.teacher_service.register(_body())
            return jsonify({"success": True, "message": "Teacher registered successfully"}), 201
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("Error registering teacher")

    @app.route("/api/auth/admin/teachers/update/<teacher_id>", methods=["PUT"], endpoint="admin_update_teacher")
    @roles_required(tokens, Role.ADMIN)
    def admin_update_teacher(teacher_id: str):
        try:
            container.teacher_service.update(teacher_id, _body())
            return jsonify({"success": True, "message": "Teacher updated successfully"})
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("Error updating teacher")

    @app.route("/api/auth/admin/teachers/delete/<teacher_id>", methods=["DELETE"], endpoint="admin_delete_teacher")
    @roles_required(tokens, Role.ADMIN)
    def admin_delete_teacher(teacher_id: str):
        try:
            container.teacher_service.delete(teacher_id)
            return jsonify({"success": True, "message": "Teacher deleted successfully"})
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("Error deleting teacher")
