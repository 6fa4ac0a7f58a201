from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional


@dataclass(frozen=True)
class Student:
    """Domain entity: a student account, identified by USN.

    Note: Plain data object (no DB access code).
    """

    usn: str
    name: str
    department: str
    year: str
    section: str
    password_hash: str
    student_id: Optional[int] = None
    created_at: Optional[datetime] = None

    def to_public_dict(self) -> dict[str, Any]:
        return {
            "id": self.student_id,
            "usn": self.usn,
            "name": self.name,
            "department": self.department,
            "year": self.year,
            "section": self.section,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass(frozen=True)
class Teacher:
    teacher_id: str
    name: str
    email: str
    department: str
    designation: str
    password_hash: str
    subjects: tuple[str, ...] = field(default_factory=tuple)
    teacher_pk: Optional[int] = None
    created_at: Optional[datetime] = None

    def to_public_dict(self) -> dict[str, Any]:
        return {
            "id": self.teacher_pk,
            "teacherId": self.teacher_id,
            "name": self.name,
            "email": self.email,
            "department": self.department,
            "designation": self.designation,
            "subjects": list(self.subjects),
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass(frozen=True)
class Admin:
    username: str
    name: str
    password_hash: str
    admin_id: Optional[int] = None
