from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Optional

from ..common.datetime_utils import current_academic_year
from ..common.numbers import plain_number
from ..core.constants import DEFAULT_TOTAL_MARKS
from ..core.enums import ExamType


def _decimal(value: Any, field_name: str) -> Decimal:
    if isinstance(value, bool):
        raise ValueError(f"{field_name} must be a number")
    try:
        d = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ValueError(f"{field_name} must be a number")
    if not d.is_finite():
        raise ValueError(f"{field_name} must be a number")
    return d


@dataclass(frozen=True)
class MarkRecord:
    """Marks scored by one student in one assessment of one subject."""

    student_key: str
    subject: str
    exam_type: ExamType
    marks: Decimal
    semester: str
    academic_year: str
    total_marks: Decimal = Decimal(DEFAULT_TOTAL_MARKS)
    mark_id: Optional[int] = None

    @classmethod
    def from_payload(cls, raw: Mapping[str, Any]) -> "MarkRecord":
        marks = _decimal(raw["marks"], "marks")
        total = raw.get("totalMarks")
        total_marks = Decimal(DEFAULT_TOTAL_MARKS) if total in (None, "") else _decimal(total, "totalMarks")
        if total_marks <= 0:
            raise ValueError("totalMarks must be greater than 0")
        if not 0 <= marks <= total_marks:
            raise ValueError(f"marks must be between 0 and {plain_number(total_marks)}")

        return cls(
            student_key=str(raw["studentKey"]).strip(),
            subject=str(raw["subject"]).strip(),
            exam_type=ExamType.parse(str(raw["examType"])),
            marks=marks,
            total_marks=total_marks,
            semester=str(raw["semester"]).strip(),
            academic_year=str(raw.get("academicYear") or current_academic_year()).strip(),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.mark_id,
            "studentKey": self.student_key,
            "subject": self.subject,
            "examType": self.exam_type.value,
            "marks": plain_number(self.marks),
            "totalMarks": plain_number(self.total_marks),
            "semester": self.semester,
            "academicYear": self.academic_year,
        }


@dataclass(frozen=True)
class SemesterMarksSummary:
    semester: str
    total_marks: Decimal
    obtained_marks: Decimal
    subjects: int
    percentage: Decimal

    def to_dict(self) -> dict[str, Any]:
        return {
            "semester": self.semester,
            "totalMarks": plain_number(self.total_marks),
            "obtainedMarks": plain_number(self.obtained_marks),
            "subjects": self.subjects,
            "percentage": str(self.percentage),
        }
