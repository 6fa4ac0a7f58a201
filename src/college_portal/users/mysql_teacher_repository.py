from __future__ import annotations

import json
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Teacher
from .repository import TeacherRepository

_COLUMNS = "teacher_pk, teacher_id, name, email, department, designation, subjects, password_hash, created_at"


def _to_teacher(r: dict) -> Teacher:
    subjects = json.loads(r["subjects"]) if r.get("subjects") else []
    return Teacher(
        teacher_pk=int(r["teacher_pk"]),
        teacher_id=r["teacher_id"],
        name=r["name"],
        email=r["email"],
        department=r["department"],
        designation=r["designation"],
        subjects=tuple(subjects),
        password_hash=r["password_hash"],
        created_at=r.get("created_at"),
    )


class MySQLTeacherRepository(TeacherRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get_one(self, column: str, value: str) -> Optional[Teacher]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM teachers WHERE {column}=%s", (value,))
            r = fetchone(cur)
            return _to_teacher(r) if r else None

    def get_by_teacher_id(self, teacher_id: str) -> Optional[Teacher]:
        return self._get_one("teacher_id", teacher_id)

    def get_by_email(self, email: str) -> Optional[Teacher]:
        return self._get_one("email", email)

    def list_by_name(self) -> Sequence[Teacher]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM teachers ORDER BY name ASC")
            return [_to_teacher(r) for r in fetchall(cur)]

    def create(self, teacher: Teacher) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO teachers(teacher_id, name, email, department, designation, subjects, password_hash)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    teacher.teacher_id,
                    teacher.name,
                    teacher.email,
                    teacher.department,
                    teacher.designation,
                    json.dumps(list(teacher.subjects)),
                    teacher.password_hash,
                ),
            )
            return int(cur.lastrowid)

    def update(
        self,
        teacher_id: str,
        *,
        name: str,
        email: str,
        department: str,
        designation: str,
        subjects: Sequence[str],
        password_hash: Optional[str] = None,
    ) -> None:
        sets = ["name=%s", "email=%s", "department=%s", "designation=%s", "subjects=%s"]
        params: list[object] = [name, email, department, designation, json.dumps(list(subjects))]
        if password_hash:
            sets.append("password_hash=%s")
            params.append(password_hash)
        params.append(teacher_id)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE teachers SET {', '.join(sets)} WHERE teacher_id=%s", tuple(params))

    def delete(self, teacher_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM teachers WHERE teacher_id=%s", (teacher_id,))
            return cur.rowcount > 0
