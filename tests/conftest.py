from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Optional, Sequence

import pytest
from werkzeug.security import generate_password_hash

from college_portal.auth.session import SessionContext
from college_portal.bulk.coordinator import natural_key_of
from college_portal.bulk.result import OperationResult, WriteOutcome
from college_portal.container import Repositories, wire
from college_portal.core.enums import Role
from college_portal.core.exceptions import ConflictError
from college_portal.main import create_app
from college_portal.users.model import Admin, Student, Teacher


class InMemoryUpsertStore:
    """Keyed update-or-insert store reporting outcomes the way MySQL does.

    Keys listed in `fail_keys` are rejected as single-operation failures.
    """

    def __init__(self, fail_keys: Sequence[tuple] = ()):
        self.rows: dict[tuple, object] = {}
        self.calls = 0
        self.fail_keys = set(fail_keys)

    def upsert_many(self, records, *, key_fields):
        self.calls += 1
        results = []
        for index, record in enumerate(records):
            key = natural_key_of(record, key_fields)
            if key in self.fail_keys:
                results.append(OperationResult(index=index, key=key, outcome=WriteOutcome.FAILED, error="rejected"))
                continue
            existing = self.rows.get(key)
            if existing is None:
                outcome = WriteOutcome.UPSERTED
            elif existing == record:
                outcome = WriteOutcome.MATCHED
            else:
                outcome = WriteOutcome.MODIFIED
            self.rows[key] = record
            results.append(OperationResult(index=index, key=key, outcome=outcome))
        return results

    def list_for_student(self, student_key: str):
        return [r for r in self.rows.values() if r.student_key == student_key]

    def delete_all(self) -> int:
        n = len(self.rows)
        self.rows.clear()
        return n


class InMemoryStudents:
    def __init__(self, students: Sequence[Student] = ()):
        self.by_usn: dict[str, Student] = {s.usn: s for s in students}

    def get_by_usn(self, usn):
        return self.by_usn.get(usn)

    def find(self, *, year=None, department=None, section=None):
        out = [
            s
            for s in self.by_usn.values()
            if (year is None or s.year == year)
            and (department is None or s.department == department)
            and (section is None or s.section == section)
        ]
        return sorted(out, key=lambda s: s.usn)

    def list_newest_first(self):
        return sorted(self.by_usn.values(), key=lambda s: s.created_at or datetime.min, reverse=True)

    def count_created_since(self, since):
        return sum(1 for s in self.by_usn.values() if s.created_at and s.created_at >= since)

    def create(self, student):
        pk = len(self.by_usn) + 1
        self.by_usn[student.usn] = replace(student, student_id=pk, created_at=student.created_at or datetime.now())
        return pk

    def update(self, usn, *, name, department, year, section, password_hash=None):
        s = self.by_usn[usn]
        self.by_usn[usn] = replace(
            s,
            name=name,
            department=department,
            year=year,
            section=section,
            password_hash=password_hash or s.password_hash,
        )

    def delete(self, usn):
        return self.by_usn.pop(usn, None) is not None


class InMemoryTeachers:
    def __init__(self, teachers: Sequence[Teacher] = ()):
        self.by_id: dict[str, Teacher] = {t.teacher_id: t for t in teachers}

    def get_by_teacher_id(self, teacher_id):
        return self.by_id.get(teacher_id)

    def get_by_email(self, email):
        return next((t for t in self.by_id.values() if t.email == email), None)

    def list_by_name(self):
        return sorted(self.by_id.values(), key=lambda t: t.name)

    def create(self, teacher):
        pk = len(self.by_id) + 1
        self.by_id[teacher.teacher_id] = replace(teacher, teacher_pk=pk)
        return pk

    def update(self, teacher_id, *, name, email, department, designation, subjects, password_hash=None):
        t = self.by_id[teacher_id]
        self.by_id[teacher_id] = replace(
            t,
            name=name,
            email=email,
            department=department,
            designation=designation,
            subjects=tuple(subjects),
            password_hash=password_hash or t.password_hash,
        )

    def delete(self, teacher_id):
        return self.by_id.pop(teacher_id, None) is not None


class InMemoryAdmins:
    def __init__(self, admins: Sequence[Admin] = ()):
        self.by_username = {a.username: a for a in admins}

    def get_by_username(self, username):
        return self.by_username.get(username)

    def upsert(self, admin):
        self.by_username[admin.username] = admin


class InMemoryCrud:
    """id -> entity store for fees and exams."""

    def __init__(self, id_field: str):
        self._id_field = id_field
        self.items: dict[int, object] = {}
        self._next = 1

    def get(self, item_id):
        return self.items.get(int(item_id))

    def create(self, item):
        item_id = self._next
        self._next += 1
        self.items[item_id] = replace(item, **{self._id_field: item_id})
        return item_id

    def update(self, item_id, item):
        self.items[int(item_id)] = replace(item, **{self._id_field: int(item_id)})

    def delete(self, item_id):
        return self.items.pop(int(item_id), None) is not None


class InMemoryFees(InMemoryCrud):
    def __init__(self):
        super().__init__("fee_id")

    def list_all(self):
        return sorted(self.items.values(), key=lambda f: f.fee_id, reverse=True)

    def list_for_student(self, student_key):
        return [f for f in self.list_all() if f.student_key == student_key]


class InMemoryExams(InMemoryCrud):
    def __init__(self):
        super().__init__("exam_id")

    def list_by_date(self, *, department=None, semester=None):
        out = [
            e
            for e in self.items.values()
            if (department is None or e.department == department) and (semester is None or e.semester == semester)
        ]
        return sorted(out, key=lambda e: (e.exam_date, e.exam_id))


class InMemoryFeedback:
    def __init__(self):
        self.items: dict[tuple[str, str, str], object] = {}

    def submitted_subjects(self, student_key, academic_year):
        return [subj for (key, subj, year) in self.items if key == student_key and year == academic_year]

    def create(self, feedback):
        key = (feedback.student_key, feedback.subject, feedback.academic_year)
        if key in self.items:
            raise ConflictError("Feedback already submitted for this subject")
        self.items[key] = feedback
        return len(self.items)


DEMO_STUDENT = Student(
    usn="1BI22CS001",
    name="Asha Rao",
    department="CSE",
    year="2",
    section="A",
    password_hash=generate_password_hash("student123"),
    student_id=1,
    created_at=datetime(2024, 3, 2, 9, 0),
)
OTHER_STUDENT = Student(
    usn="1BI22EC014",
    name="Vikram Shetty",
    department="ECE",
    year="3",
    section="B",
    password_hash=generate_password_hash("student123"),
    student_id=2,
    created_at=datetime(2024, 1, 15, 9, 0),
)
DEMO_TEACHER = Teacher(
    teacher_id="T001",
    name="Meera Iyer",
    email="meera@college.edu",
    department="CSE",
    designation="Associate Professor",
    password_hash=generate_password_hash("teacher123"),
    subjects=("Computer Networks",),
    teacher_pk=1,
)
DEMO_ADMIN = Admin(username="admin", name="Admin", password_hash=generate_password_hash("admin123"), admin_id=1)

SECRET = "test-secret"


@pytest.fixture
def repos() -> Repositories:
    return Repositories(
        students=InMemoryStudents([DEMO_STUDENT, OTHER_STUDENT]),
        teachers=InMemoryTeachers([DEMO_TEACHER]),
        admins=InMemoryAdmins([DEMO_ADMIN]),
        attendance=InMemoryUpsertStore(),
        marks=InMemoryUpsertStore(),
        fees=InMemoryFees(),
        exams=InMemoryExams(),
        feedback=InMemoryFeedback(),
    )


@pytest.fixture
def container(repos):
    return wire(repos, secret_key=SECRET)


@pytest.fixture
def app(container):
    app = create_app(
        {"SECRET_KEY": SECRET, "TESTING": True, "DEBUG": False, "LOG_LEVEL": "WARNING", "CORS_ORIGINS": ["*"]},
        container=container,
    )
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_header(container):
    def make(role: Role, user_key: str, name: Optional[str] = None) -> dict[str, str]:
        token = container.tokens.issue(SessionContext(user_key=user_key, role=role, name=name))
        return {"Authorization": f"Bearer {token}"}

    return make


@pytest.fixture
def student_ctx() -> SessionContext:
    return SessionContext(user_key=DEMO_STUDENT.usn, role=Role.STUDENT, name=DEMO_STUDENT.name)


@pytest.fixture
def teacher_ctx() -> SessionContext:
    return SessionContext(user_key=DEMO_TEACHER.teacher_id, role=Role.TEACHER, name=DEMO_TEACHER.name)


@pytest.fixture
def make_store():
    return InMemoryUpsertStore
