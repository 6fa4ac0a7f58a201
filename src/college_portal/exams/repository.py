from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Exam


class ExamRepository(Protocol):
    def list_by_date(self, *, department: Optional[str] = None, semester: Optional[str] = None) -> Sequence[Exam]:
        raise NotImplementedError

    def get(self, exam_id: int) -> Optional[Exam]:
        raise NotImplementedError

    def create(self, exam: Exam) -> int:
        raise NotImplementedError

    def update(self, exam_id: int, exam: Exam) -> None:
        raise NotImplementedError

    def delete(self, exam_id: int) -> bool:
        raise NotImplementedError
