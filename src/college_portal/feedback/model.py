from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional


@dataclass(frozen=True)
class FeedbackResponse:
    question_id: int
    rating: int

    def to_dict(self) -> dict[str, Any]:
        return {"questionId": self.question_id, "rating": self.rating}


@dataclass(frozen=True)
class Feedback:
    """A student's course feedback; at most one per subject per academic year."""

    student_key: str
    subject: str
    faculty: str
    semester: str
    academic_year: str
    responses: tuple[FeedbackResponse, ...] = field(default_factory=tuple)
    submitted_at: Optional[datetime] = None
    feedback_id: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.feedback_id,
            "studentId": self.student_key,
            "subject": self.subject,
            "faculty": self.faculty,
            "responses": [r.to_dict() for r in self.responses],
            "semester": self.semester,
            "academicYear": self.academic_year,
            "submittedAt": self.submitted_at.isoformat() if self.submitted_at else None,
        }
