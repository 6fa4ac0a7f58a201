from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import Admin, Student, Teacher


class StudentRepository(Protocol):
    """Repository interface for students.

    Note (DIP): services depend on this interface, never on a concrete DB.
    """

    def get_by_usn(self, usn: str) -> Optional[Student]:
        raise NotImplementedError

    def find(
        self,
        *,
        year: Optional[str] = None,
        department: Optional[str] = None,
        section: Optional[str] = None,
    ) -> Sequence[Student]:
        """Students matching every given filter, ordered by USN."""

        raise NotImplementedError

    def list_newest_first(self) -> Sequence[Student]:
        raise NotImplementedError

    def count_created_since(self, since: datetime) -> int:
        raise NotImplementedError

    def create(self, student: Student) -> int:
        raise NotImplementedError

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
        raise NotImplementedError

    def delete(self, usn: str) -> bool:
        raise NotImplementedError


class TeacherRepository(Protocol):
    def get_by_teacher_id(self, teacher_id: str) -> Optional[Teacher]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Teacher]:
        raise NotImplementedError

    def list_by_name(self) -> Sequence[Teacher]:
        raise NotImplementedError

    def create(self, teacher: Teacher) -> int:
        raise NotImplementedError

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
        raise NotImplementedError

    def delete(self, teacher_id: str) -> bool:
        raise NotImplementedError


class AdminRepository(Protocol):
    def get_by_username(self, username: str) -> Optional[Admin]:
        raise NotImplementedError

    def upsert(self, admin: Admin) -> None:
        raise NotImplementedError
