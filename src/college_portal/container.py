from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .auth.tokens import TokenIssuer
from .core.constants import ATTENDANCE_THRESHOLD
from .database.connection import DBConfig, DatabaseConnection
from .exams.mysql_exam_repository import MySQLExamRepository
from .exams.repository import ExamRepository
from .exams.service import ExamService
from .feedback.mysql_feedback_repository import MySQLFeedbackRepository
from .feedback.repository import FeedbackRepository
from .feedback.service import FeedbackService
from .fees.mysql_fee_repository import MySQLFeeRepository
from .fees.repository import FeeRepository
from .fees.service import FeeService
from .marks.mysql_mark_repository import MySQLMarkRepository
from .marks.repository import MarkRepository
from .marks.service import MarksService
from .users.mysql_admin_repository import MySQLAdminRepository
from .users.mysql_student_repository import MySQLStudentRepository
from .users.mysql_teacher_repository import MySQLTeacherRepository
from .users.repository import AdminRepository, StudentRepository, TeacherRepository
from .users.service import AuthService, StudentService, TeacherService


@dataclass(frozen=True)
class Repositories:
    students: StudentRepository
    teachers: TeacherRepository
    admins: AdminRepository
    attendance: AttendanceRepository
    marks: MarkRepository
    fees: FeeRepository
    exams: ExamRepository
    feedback: FeedbackRepository


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection | None
    repos: Repositories
    tokens: TokenIssuer

    auth_service: AuthService
    student_service: StudentService
    teacher_service: TeacherService
    attendance_service: AttendanceService
    marks_service: MarksService
    fee_service: FeeService
    exam_service: ExamService
    feedback_service: FeedbackService


def mysql_repositories(conn: DatabaseConnection) -> Repositories:
    return Repositories(
        students=MySQLStudentRepository(conn),
        teachers=MySQLTeacherRepository(conn),
        admins=MySQLAdminRepository(conn),
        attendance=MySQLAttendanceRepository(conn),
        marks=MySQLMarkRepository(conn),
        fees=MySQLFeeRepository(conn),
        exams=MySQLExamRepository(conn),
        feedback=MySQLFeedbackRepository(conn),
    )


def wire(
    repos: Repositories,
    *,
    secret_key: str,
    token_ttl_hours: int = 1,
    attendance_threshold: float = ATTENDANCE_THRESHOLD,
    conn: DatabaseConnection | None = None,
) -> Container:
    """Build services over any set of repositories (MySQL in the app, in-memory fakes in tests)."""

    tokens = TokenIssuer(secret_key, ttl_hours=token_ttl_hours)
    return Container(
        conn=conn,
        repos=repos,
        tokens=tokens,
        auth_service=AuthService(repos.students, repos.teachers, repos.admins, tokens),
        student_service=StudentService(repos.students),
        teacher_service=TeacherService(repos.teachers),
        attendance_service=AttendanceService(repos.attendance, threshold=attendance_threshold),
        marks_service=MarksService(repos.marks, repos.students),
        fee_service=FeeService(repos.fees),
        exam_service=ExamService(repos.exams),
        feedback_service=FeedbackService(repos.feedback),
    )


def build_container(
    *,
    db_config: dict,
    secret_key: str,
    token_ttl_hours: int = 1,
    attendance_threshold: float = ATTENDANCE_THRESHOLD,
) -> Container:
    conn = DatabaseConnection(DBConfig.from_mapping(db_config))
    return wire(
        mysql_repositories(conn),
        secret_key=secret_key,
        token_ttl_hours=token_ttl_hours,
        attendance_threshold=attendance_threshold,
        conn=conn,
    )
