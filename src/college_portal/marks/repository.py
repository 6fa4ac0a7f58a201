from __future__ import annotations

from typing import Protocol, Sequence

from ..bulk.result import OperationResult
from .model import MarkRecord


class MarkRepository(Protocol):
    def list_for_student(self, student_key: str) -> Sequence[MarkRecord]:
        """Ordered by semester, subject, exam type."""

        raise NotImplementedError

    def upsert_many(self, records: Sequence[MarkRecord], *, key_fields: Sequence[str]) -> Sequence[OperationResult]:
        raise NotImplementedError

    def delete_all(self) -> int:
        raise NotImplementedError
