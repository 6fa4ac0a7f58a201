from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Mapping, Optional

from ..common.datetime_utils import parse_iso_date
from ..common.validators import require_non_empty
from ..core.exceptions import NotFoundError, ValidationError
from .model import Exam
from .repository import ExamRepository

logger = logging.getLogger(__name__)

# payload key -> (Exam field, label used in messages)
_FIELDS = {
    "examName": ("exam_name", "Exam name"),
    "subject": ("subject", "Subject"),
    "startTime": ("start_time", "Start time"),
    "duration": ("duration", "Duration"),
    "totalMarks": ("total_marks", "Total marks"),
    "department": ("department", "Department"),
    "semester": ("semester", "Semester"),
}


def _exam_date(value: Any):
    try:
        return parse_iso_date(require_non_empty(value, "Date"))
    except ValueError:
        raise ValidationError("Date must be YYYY-MM-DD")


class ExamService:
    def __init__(self, exams: ExamRepository):
        self._exams = exams

    def list_all(self) -> list[Exam]:
        return list(self._exams.list_by_date())

    def schedule(self, *, department: Optional[str], semester: Optional[str]) -> list[Exam]:
        return list(
            self._exams.list_by_date(
                department=require_non_empty(department, "Department"),
                semester=require_non_empty(semester, "Semester"),
            )
        )

    def get(self, exam_id: int) -> Exam:
        exam = self._exams.get(exam_id)
        if not exam:
            raise NotFoundError("Exam not found")
        return exam

    def create(self, payload: Mapping[str, Any]) -> Exam:
        values = {field: require_non_empty(payload.get(key), label) for key, (field, label) in _FIELDS.items()}
        exam = Exam(exam_date=_exam_date(payload.get("date")), **values)
        exam_id = self._exams.create(exam)
        logger.info("Created exam %s (%s)", exam_id, exam.exam_name)
        return replace(exam, exam_id=exam_id)

    def update(self, exam_id: int, payload: Mapping[str, Any]) -> Exam:
        current = self.get(exam_id)
        changes: dict[str, Any] = {
            field: require_non_empty(payload[key], label) for key, (field, label) in _FIELDS.items() if key in payload
        }
        if "date" in payload:
            changes["exam_date"] = _exam_date(payload["date"])

        updated = replace(current, **changes)
        self._exams.update(exam_id, updated)
        return updated

    def delete(self, exam_id: int) -> None:
        if not self._exams.delete(exam_id):
            raise NotFoundError("Exam not found")
        logger.info("Deleted exam %s", exam_id)
