from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Role claim carried in bearer tokens."""

    STUDENT = "student"
    TEACHER = "teacher"
    ADMIN = "admin"


class AttendanceStatus(str, Enum):
    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"


class ExamType(str, Enum):
    """Assessment kinds a mark can be recorded against.

    Values are the long labels the client renders; `parse` also accepts the
    short codes teachers type into the marks entry sheet.
    """

    IA1 = "Internal Assessment 1"
    IA2 = "Internal Assessment 2"
    IA3 = "Internal Assessment 3"
    SEMESTER = "Semester"

    @classmethod
    def parse(cls, value: str) -> "ExamType":
        v = (value or "").strip()
        for member in cls:
            if v == member.value or v.upper() == member.name:
                return member
        raise ValueError(f"Unknown exam type: {value!r}")


class FeeStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    OVERDUE = "overdue"
