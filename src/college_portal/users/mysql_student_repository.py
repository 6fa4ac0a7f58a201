from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_where, db_cursor, fetchall, fetchone
from .model import Student
from .repository import StudentRepository

_COLUMNS = "student_id, usn, name, department, year, section, password_hash, created_at"


def _to_student(r: dict) -> Student:
    return Student(
        student_id=int(r["student_id"]),
        usn=r["usn"],
        name=r["name"],
        department=r["department"],
        year=r["year"],
        section=r["section"],
        password_hash=r["password_hash"],
        created_at=r.get("created_at"),
    )


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_usn(self, usn: str) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE usn=%s", (usn,))
            r = fetchone(cur)
            return _to_student(r) if r else None

    def find(
        self,
        *,
        year: Optional[str] = None,
        department: Optional[str] = None,
        section: Optional[str] = None,
    ) -> Sequence[Student]:
        where, params = build_where({"year": year, "department": department, "section": section})
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students {where} ORDER BY usn ASC", tuple(params))
            return [_to_student(r) for r in fetchall(cur)]

    def list_newest_first(self) -> Sequence[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students ORDER BY created_at DESC, student_id DESC")
            return [_to_student(r) for r in fetchall(cur)]

    def count_created_since(self, since: datetime) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM students WHERE created_at >= %s", (since,))
            r = fetchone(cur)
            return int(r["n"]) if r else 0

    def create(self, student: Student) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO students(usn, name, department, year, section, password_hash)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (student.usn, student.name, student.department, student.year, student.section, student.password_hash),
            )
            return int(cur.lastrowid)

    def update(
        self,
        usn: str,
        *,
        name: str,
        department: str,
        year: str,
        section: str,
        password_hash: Optional[str] = None,
    ) -> None:
        sets = ["name=%s", "department=%s", "year=%s", "section=%s"]
        params: list[object] = [name, department, year, section]
        if password_hash:
            sets.append("password_hash=%s")
            params.append(password_hash)
        params.append(usn)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE students SET {', '.join(sets)} WHERE usn=%s", tuple(params))

    def delete(self, usn: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM students WHERE usn=%s", (usn,))
            return cur.rowcount > 0
