from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Optional


@dataclass(frozen=True)
class Exam:
    """A scheduled exam. Times, duration and total marks are free-form labels."""

    exam_name: str
    subject: str
    exam_date: date
    start_time: str
    duration: str
    total_marks: str
    department: str
    semester: str
    exam_id: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.exam_id,
            "examName": self.exam_name,
            "subject": self.subject,
            "date": self.exam_date.isoformat(),
            "startTime": self.start_time,
            "duration": self.duration,
            "totalMarks": self.total_marks,
            "department": self.department,
            "semester": self.semester,
        }
