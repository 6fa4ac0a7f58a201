from __future__ import annotations

from typing import Any, Mapping, Optional

from ..auth.session import SessionContext, ensure_can_read_student
from ..bulk.coordinator import BulkUpsertCoordinator
from ..bulk.result import BatchResult
from ..common.numbers import plain_number
from ..common.validators import require_number
from ..core.constants import MARK_NATURAL_KEY
from ..core.exceptions import NotFoundError, ValidationError
from ..users.repository import StudentRepository
from .aggregation import compute_marks_summary, grouped_to_dict, summarize_marks_by_semester
from .grading import calculate_cgpa
from .model import MarkRecord
from .repository import MarkRepository

REQUIRED_FIELDS = ("studentKey", "subject", "examType", "marks", "semester")
FIELD_ALIASES = {"studentId": "studentKey"}


def marks_coordinator(repo: MarkRepository) -> BulkUpsertCoordinator[MarkRecord]:
    return BulkUpsertCoordinator(
        repo,
        natural_key=MARK_NATURAL_KEY,
        required_fields=REQUIRED_FIELDS,
        build=MarkRecord.from_payload,
        aliases=FIELD_ALIASES,
        label="marks",
    )


class MarksService:
    def __init__(
        self,
        marks_repo: MarkRepository,
        students_repo: StudentRepository,
        *,
        coordinator: Optional[BulkUpsertCoordinator[MarkRecord]] = None,
    ):
        self._repo = marks_repo
        self._students = students_repo
        self._coordinator = coordinator or marks_coordinator(marks_repo)

    def get_marks(self, ctx: SessionContext, student_key: str) -> dict[str, Any]:
        """Grouped marks and per-semester summary for one student."""

        ensure_can_read_student(ctx, student_key)
        student = self._students.get_by_usn(student_key)
        if not student:
            raise NotFoundError("Student not found")

        records = self._repo.list_for_student(student_key)
        if not records:
            raise NotFoundError("No marks found for this student")

        grouped = summarize_marks_by_semester(records)
        summary = compute_marks_summary(grouped)
        return {
            "student": {
                "name": student.name,
                "usn": student.usn,
                "department": student.department,
                "year": student.year,
                "section": student.section,
            },
            "marks": grouped_to_dict(grouped),
            "summary": {semester: s.to_dict() for semester, s in summary.items()},
        }

    def submit_batch(self, payload: Any) -> BatchResult:
        return self._coordinator.upsert_batch(payload)

    @staticmethod
    def cgpa(subjects: Any) -> dict[str, Any]:
        if not isinstance(subjects, list) or not subjects:
            raise ValidationError("subjects must be a non-empty list")

        pairs: list[tuple[float, float]] = []
        for i, s in enumerate(subjects):
            if not isinstance(s, Mapping):
                raise ValidationError(f"Subject {i} is not an object")
            marks = require_number(s.get("marks"), "marks", minimum=0)
            if marks > 100:
                raise ValidationError("marks must be at most 100")
            pairs.append((marks, require_number(s.get("credits"), "credits", minimum=0)))

        result = calculate_cgpa(pairs)
        return {"cgpa": str(result["cgpa"]), "totalCredits": plain_number(result["totalCredits"])}
