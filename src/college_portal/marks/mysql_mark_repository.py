from __future__ import annotations

from decimal import Decimal
from typing import Sequence

from ..bulk.result import OperationResult
from ..core.enums import ExamType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from ..database.upsert import execute_upserts
from .model import MarkRecord
from .repository import MarkRepository

_UPSERT_SQL = """
    INSERT INTO mark_records(student_key, subject, exam_type, marks, total_marks, semester, academic_year)
    VALUES(%s,%s,%s,%s,%s,%s,%s)
    ON DUPLICATE KEY UPDATE
        marks=VALUES(marks), total_marks=VALUES(total_marks), academic_year=VALUES(academic_year)
"""


class MySQLMarkRepository(MarkRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_student(self, student_key: str) -> Sequence[MarkRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT mark_id, student_key, subject, exam_type, marks, total_marks, semester, academic_year
                FROM mark_records
                WHERE student_key=%s
                ORDER BY semester ASC, subject ASC, exam_type ASC
                """,
                (student_key,),
            )
            return [
                MarkRecord(
                    mark_id=int(r["mark_id"]),
                    student_key=r["student_key"],
                    subject=r["subject"],
                    exam_type=ExamType.parse(r["exam_type"]),
                    marks=Decimal(r["marks"]),
                    total_marks=Decimal(r["total_marks"]),
                    semester=r["semester"],
                    academic_year=r["academic_year"],
                )
                for r in fetchall(cur)
            ]

    def upsert_many(self, records: Sequence[MarkRecord], *, key_fields: Sequence[str]) -> Sequence[OperationResult]:
        return execute_upserts(
            self._conn_factory,
            sql=_UPSERT_SQL,
            records=records,
            key_fields=key_fields,
            params=lambda m: (
                m.student_key,
                m.subject,
                m.exam_type.value,
                m.marks,
                m.total_marks,
                m.semester,
                m.academic_year,
            ),
        )

    def delete_all(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM mark_records")
            return cur.rowcount
