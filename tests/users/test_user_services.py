from datetime import datetime

import pytest
from werkzeug.security import check_password_hash

from college_portal.core.enums import Role
from college_portal.core.exceptions import AuthenticationError, ConflictError, NotFoundError, ValidationError


class TestAuthService:
    def test_student_login_issues_token_with_role(self, container):
        result = container.auth_service.login_student("1BI22CS001", "student123")

        ctx = container.tokens.decode(result.token)
        assert ctx.role is Role.STUDENT
        assert ctx.user_key == "1BI22CS001"
        assert result.to_dict()["user"] == {"id": "1BI22CS001", "role": "student", "name": "Asha Rao"}

    def test_wrong_password(self, container):
        with pytest.raises(AuthenticationError, match="Invalid credentials"):
            container.auth_service.login_student("1BI22CS001", "nope")

    def test_unknown_user(self, container):
        with pytest.raises(AuthenticationError):
            container.auth_service.login_admin("root", "admin123")

    def test_teacher_can_log_in_by_email(self, container):
        result = container.auth_service.login_teacher("meera@college.edu", "teacher123")

        assert container.tokens.decode(result.token).user_key == "T001"

    def test_admin_login(self, container):
        result = container.auth_service.login_admin("admin", "admin123")

        assert container.tokens.decode(result.token).role == Role.ADMIN


class TestStudentService:
    def _new(self, **overrides):
        data = {
            "usn": "1BI22CS050",
            "name": "Ravi Kumar",
            "department": "CSE",
            "year": "2",
            "section": "A",
            "password": "secret1",
        }
        data.update(overrides)
        return data

    def test_register_hashes_password(self, container, repos):
        container.student_service.register(self._new())

        stored = repos.students.get_by_usn("1BI22CS050")
        assert stored.password_hash != "secret1"
        assert check_password_hash(stored.password_hash, "secret1")

    def test_duplicate_usn(self, container):
        with pytest.raises(ConflictError):
            container.student_service.register(self._new(usn="1BI22CS001"))

    def test_short_password(self, container):
        with pytest.raises(ValidationError):
            container.student_service.register(self._new(password="abc"))

    def test_update_keeps_password_when_blank(self, container, repos):
        before = repos.students.get_by_usn("1BI22CS001").password_hash

        container.student_service.update("1BI22CS001", {"section": "C", "password": ""})

        after = repos.students.get_by_usn("1BI22CS001")
        assert after.section == "C"
        assert after.password_hash == before

    def test_update_sets_new_password(self, container, repos):
        container.student_service.update("1BI22CS001", {"password": "newpass1"})

        assert check_password_hash(repos.students.get_by_usn("1BI22CS001").password_hash, "newpass1")

    def test_update_and_delete_unknown(self, container):
        with pytest.raises(NotFoundError):
            container.student_service.update("NOPE", {"name": "x"})
        with pytest.raises(NotFoundError):
            container.student_service.delete("NOPE")

    def test_admin_listing_counts_this_month(self, container):
        data = container.student_service.list_for_admin(now=datetime(2024, 3, 20, 12, 0))

        assert data["newStudentsThisMonth"] == 1
        assert [s["usn"] for s in data["students"]] == ["1BI22CS001", "1BI22EC014"]
        assert "password_hash" not in data["students"][0]

    def test_teacher_filters_treat_all_as_no_filter(self, container):
        data = container.student_service.find_for_teacher(year="all", department="", section=None)

        assert len(data["students"]) == 2
        assert data["departments"] == ["CSE", "ECE"]
        assert data["sections"] == ["A", "B"]

    def test_teacher_filters_narrow_result(self, container):
        data = container.student_service.find_for_teacher(department="ECE")

        assert [s["usn"] for s in data["students"]] == ["1BI22EC014"]
        assert data["years"] == ["2", "3"]

    def test_profile_derives_semester(self, container, student_ctx):
        profile = container.student_service.profile(student_ctx, "1BI22CS001")

        assert profile["semester"] == 4
        assert "password_hash" not in profile


class TestTeacherService:
    def _new(self, **overrides):
        data = {
            "teacherId": "T002",
            "name": "Anil Desai",
            "email": "Anil@College.edu",
            "department": "ECE",
            "designation": "Professor",
            "subjects": "Signals, VLSI",
            "password": "teach42",
        }
        data.update(overrides)
        return data

    def test_register_normalises_email_and_subjects(self, container, repos):
        container.teacher_service.register(self._new())

        t = repos.teachers.get_by_teacher_id("T002")
        assert t.email == "anil@college.edu"
        assert t.subjects == ("Signals", "VLSI")

    @pytest.mark.parametrize("overrides", [{"teacherId": "T001"}, {"email": "meera@college.edu"}])
    def test_duplicate_id_or_email(self, container, overrides):
        with pytest.raises(ConflictError):
            container.teacher_service.register(self._new(**overrides))

    def test_update_rejects_email_of_another_teacher(self, container):
        container.teacher_service.register(self._new())

        with pytest.raises(ConflictError):
            container.teacher_service.update("T002", {"email": "meera@college.edu"})

    def test_list_is_public(self, container):
        (t,) = container.teacher_service.list_all()

        assert t["teacherId"] == "T001"
        assert "password_hash" not in t
