from __future__ import annotations

from typing import Sequence

from ..bulk.result import OperationResult
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from ..database.upsert import execute_upserts
from .model import AttendanceRecord
from .repository import AttendanceRepository

_UPSERT_SQL = """
    INSERT INTO attendance_records(student_key, year, section, subject, att_date, status)
    VALUES(%s,%s,%s,%s,%s,%s)
    ON DUPLICATE KEY UPDATE year=VALUES(year), section=VALUES(section), status=VALUES(status)
"""


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_student(self, student_key: str) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT attendance_id, student_key, year, section, subject, att_date, status
                FROM attendance_records
                WHERE student_key=%s
                ORDER BY att_date DESC, subject ASC
                """,
                (student_key,),
            )
            return [
                AttendanceRecord(
                    attendance_id=int(r["attendance_id"]),
                    student_key=r["student_key"],
                    year=r["year"],
                    section=r["section"],
                    subject=r["subject"],
                    date=r["att_date"],
                    status=r.get("status"),
                )
                for r in fetchall(cur)
            ]

    def upsert_many(self, records: Sequence[AttendanceRecord], *, key_fields: Sequence[str]) -> Sequence[OperationResult]:
        return execute_upserts(
            self._conn_factory,
            sql=_UPSERT_SQL,
            records=records,
            key_fields=key_fields,
            params=lambda r: (r.student_key, r.year, r.section, r.subject, r.date, r.status_value),
        )

    def delete_all(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance_records")
            return cur.rowcount
