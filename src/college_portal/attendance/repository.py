from __future__ import annotations

from typing import Protocol, Sequence

from ..bulk.result import OperationResult
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def list_for_student(self, student_key: str) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def upsert_many(self, records: Sequence[AttendanceRecord], *, key_fields: Sequence[str]) -> Sequence[OperationResult]:
        """Update-or-insert keyed by (student_key, subject, date); last write wins."""

        raise NotImplementedError

    def delete_all(self) -> int:
        """Bulk clear, used only when reseeding demo data."""

        raise NotImplementedError
