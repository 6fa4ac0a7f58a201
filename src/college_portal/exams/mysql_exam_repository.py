from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_where, db_cursor, fetchall, fetchone
from .model import Exam
from .repository import ExamRepository

_COLUMNS = "exam_id, exam_name, subject, exam_date, start_time, duration, total_marks, department, semester"


def _to_exam(r: dict) -> Exam:
    return Exam(
        exam_id=int(r["exam_id"]),
        exam_name=r["exam_name"],
        subject=r["subject"],
        exam_date=r["exam_date"],
        start_time=r["start_time"],
        duration=r["duration"],
        total_marks=r["total_marks"],
        department=r["department"],
        semester=r["semester"],
    )


def _params(e: Exam) -> tuple:
    return (e.exam_name, e.subject, e.exam_date, e.start_time, e.duration, e.total_marks, e.department, e.semester)


class MySQLExamRepository(ExamRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_by_date(self, *, department: Optional[str] = None, semester: Optional[str] = None) -> Sequence[Exam]:
        where, params = build_where({"department": department, "semester": semester})
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM exams {where} ORDER BY exam_date ASC, exam_id ASC", tuple(params))
            return [_to_exam(r) for r in fetchall(cur)]

    def get(self, exam_id: int) -> Optional[Exam]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM exams WHERE exam_id=%s", (int(exam_id),))
            r = fetchone(cur)
            return _to_exam(r) if r else None

    def create(self, exam: Exam) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO exams(exam_name, subject, exam_date, start_time, duration, total_marks, department, semester)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                _params(exam),
            )
            return int(cur.lastrowid)

    def update(self, exam_id: int, exam: Exam) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE exams
                SET exam_name=%s, subject=%s, exam_date=%s, start_time=%s, duration=%s,
                    total_marks=%s, department=%s, semester=%s
                WHERE exam_id=%s
                """,
                _params(exam) + (int(exam_id),),
            )

    def delete(self, exam_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM exams WHERE exam_id=%s", (int(exam_id),))
            return cur.rowcount > 0
