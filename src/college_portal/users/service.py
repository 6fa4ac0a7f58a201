from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..auth.session import SessionContext, ensure_can_read_student
from ..auth.tokens import TokenIssuer
from ..common.datetime_utils import now_local
from ..common.validators import require_min_length, require_non_empty
from ..core.constants import FILTER_ALL, MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, ConflictError, NotFoundError
from .model import Student, Teacher
from .repository import AdminRepository, StudentRepository, TeacherRepository

logger = logging.getLogger(__name__)


def _password_matches(password_hash: str, password: str) -> bool:
    try:
        return check_password_hash(password_hash, password or "")
    except ValueError:
        # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
        return False


def _filter_value(value: Optional[str]) -> Optional[str]:
    v = (value or "").strip()
    return None if not v or v.lower() == FILTER_ALL else v


def _distinct(values) -> list[str]:
    seen: dict[str, None] = {}
    for v in values:
        if v is not None:
            seen.setdefault(v, None)
    return list(seen)


@dataclass(frozen=True)
class LoginResult:
    token: str
    session: SessionContext

    def to_dict(self) -> dict[str, Any]:
        return {"token": self.token, "user": self.session.to_dict()}


class AuthService:
    """Use case: authenticate students, teachers and admins and issue bearer tokens."""

    def __init__(
        self,
        students: StudentRepository,
        teachers: TeacherRepository,
        admins: AdminRepository,
        tokens: TokenIssuer,
    ):
        self._students = students
        self._teachers = teachers
        self._admins = admins
        self._tokens = tokens

    def _issue(self, ctx: SessionContext) -> LoginResult:
        logger.info("Login successful for %s %s", ctx.role.value, ctx.user_key)
        return LoginResult(token=self._tokens.issue(ctx), session=ctx)

    def login_student(self, usn: str, password: str) -> LoginResult:
        student = self._students.get_by_usn((usn or "").strip())
        if not student or not _password_matches(student.password_hash, password):
            logger.warning("Student login failed for %r", usn)
            raise AuthenticationError("Invalid credentials")
        return self._issue(SessionContext(user_key=student.usn, role=Role.STUDENT, name=student.name))

    def login_teacher(self, login: str, password: str) -> LoginResult:
        login = (login or "").strip()
        teacher = self._teachers.get_by_teacher_id(login) or self._teachers.get_by_email(login)
        if not teacher or not _password_matches(teacher.password_hash, password):
            logger.warning("Teacher login failed for %r", login)
            raise AuthenticationError("Invalid credentials")
        return self._issue(SessionContext(user_key=teacher.teacher_id, role=Role.TEACHER, name=teacher.name))

    def login_admin(self, username: str, password: str) -> LoginResult:
        admin = self._admins.get_by_username((username or "").strip())
        if not admin or not _password_matches(admin.password_hash, password):
            logger.warning("Admin login failed for %r", username)
            raise AuthenticationError("Invalid credentials")
        return self._issue(SessionContext(user_key=admin.username, role=Role.ADMIN, name=admin.name))


class StudentService:
    """Use case: manage student accounts (admin) and look students up (teachers)."""

    def __init__(self, students: StudentRepository):
        self._students = students

    def get(self, usn: str) -> Student:
        student = self._students.get_by_usn(usn)
        if not student:
            raise NotFoundError("Student not found")
        return student

    def profile(self, ctx: SessionContext, usn: str) -> dict[str, Any]:
        ensure_can_read_student(ctx, usn)
        student = self.get(usn)
        out = student.to_public_dict()
        # two semesters per year of study
        out["semester"] = int(student.year) * 2 if student.year.isdigit() else None
        return out

    def list_for_admin(self, *, now: Optional[datetime] = None) -> dict[str, Any]:
        now = now or now_local()
        start_of_month = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
        students = self._students.list_newest_first()
        return {
            "students": [s.to_public_dict() for s in students],
            "newStudentsThisMonth": self._students.count_created_since(start_of_month),
        }

    def find_for_teacher(
        self,
        *,
        year: Optional[str] = None,
        department: Optional[str] = None,
        section: Optional[str] = None,
    ) -> dict[str, Any]:
        """Filtered roster plus the distinct filter values across all students."""

        students = self._students.find(
            year=_filter_value(year),
            department=_filter_value(department),
            section=_filter_value(section),
        )
        everyone = self._students.find()
        return {
            "students": [s.to_public_dict() for s in students],
            "sections": _distinct(s.section for s in everyone),
            "departments": _distinct(s.department for s in everyone),
            "years": _distinct(s.year for s in everyone),
        }

    def register(self, payload: Mapping[str, Any]) -> int:
        usn = require_non_empty(payload.get("usn"), "USN")
        if self._students.get_by_usn(usn):
            raise ConflictError("USN already exists")

        password = require_min_length(payload.get("password"), "Password", MIN_PASSWORD_LENGTH)
        student = Student(
            usn=usn,
            name=require_non_empty(payload.get("name"), "Name"),
            department=require_non_empty(payload.get("department"), "Department"),
            year=require_non_empty(payload.get("year"), "Year"),
            section=require_non_empty(payload.get("section"), "Section"),
            password_hash=generate_password_hash(password),
        )
        student_id = self._students.create(student)
        logger.info("Registered student %s", usn)
        return student_id

    def update(self, usn: str, payload: Mapping[str, Any]) -> None:
        current = self.get(usn)

        password = (payload.get("password") or "").strip()
        password_hash = None
        if password:
            require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
            password_hash = generate_password_hash(password)

        self._students.update(
            usn,
            name=(payload.get("name") or current.name).strip(),
            department=(payload.get("department") or current.department).strip(),
            year=str(payload.get("year") or current.year).strip(),
            section=(payload.get("section") or current.section).strip(),
            password_hash=password_hash,
        )

    def delete(self, usn: str) -> None:
        if not self._students.delete(usn):
            raise NotFoundError("Student not found")
        logger.info("Deleted student %s", usn)


class TeacherService:
    """Use case: manage teacher accounts (admin)."""

    def __init__(self, teachers: TeacherRepository):
        self._teachers = teachers

    def get(self, teacher_id: str) -> Teacher:
        teacher = self._teachers.get_by_teacher_id(teacher_id)
        if not teacher:
            raise NotFoundError("Teacher not found")
        return teacher

    def list_all(self) -> list[dict[str, Any]]:
        return [t.to_public_dict() for t in self._teachers.list_by_name()]

    @staticmethod
    def _subjects(value: Any) -> tuple[str, ...]:
        if not value:
            return ()
        if isinstance(value, str):
            value = value.split(",")
        return tuple(s.strip() for s in value if s and str(s).strip())

    def register(self, payload: Mapping[str, Any]) -> int:
        teacher_id = require_non_empty(payload.get("teacherId"), "Teacher ID")
        email = require_non_empty(payload.get("email"), "Email").lower()
        if self._teachers.get_by_teacher_id(teacher_id) or self._teachers.get_by_email(email):
            raise ConflictError("Teacher with this ID or email already exists")

        password = require_min_length(payload.get("password"), "Password", MIN_PASSWORD_LENGTH)
        teacher = Teacher(
            teacher_id=teacher_id,
            name=require_non_empty(payload.get("name"), "Name"),
            email=email,
            department=require_non_empty(payload.get("department"), "Department"),
            designation=require_non_empty(payload.get("designation"), "Designation"),
            subjects=self._subjects(payload.get("subjects")),
            password_hash=generate_password_hash(password),
        )
        pk = self._teachers.create(teacher)
        logger.info("Registered teacher %s", teacher_id)
        return pk

    def update(self, teacher_id: str, payload: Mapping[str, Any]) -> None:
        current = self.get(teacher_id)

        email = (payload.get("email") or current.email).strip().lower()
        other = self._teachers.get_by_email(email)
        if other and other.teacher_id != teacher_id:
            raise ConflictError("Teacher with this ID or email already exists")

        password = (payload.get("password") or "").strip()
        password_hash = None
        if password:
            require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
            password_hash = generate_password_hash(password)

        subjects: Sequence[str] = self._subjects(payload["subjects"]) if "subjects" in payload else current.subjects
        self._teachers.update(
            teacher_id,
            name=(payload.get("name") or current.name).strip(),
            email=email,
            department=(payload.get("department") or current.department).strip(),
            designation=(payload.get("designation") or current.designation).strip(),
            subjects=subjects,
            password_hash=password_hash,
        )

    def delete(self, teacher_id: str) -> None:
        if not self._teachers.delete(teacher_id):
            raise NotFoundError("Teacher not found")
        logger.info("Deleted teacher %s", teacher_id)
