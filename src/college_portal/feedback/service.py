from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Mapping, Optional

from ..auth.session import SessionContext, ensure_can_read_student
from ..common.datetime_utils import current_academic_year, now_local
from ..common.validators import missing_fields
from ..core.constants import MAX_FEEDBACK_RATING, MIN_FEEDBACK_RATING
from ..core.exceptions import ValidationError
from .model import Feedback, FeedbackResponse
from .repository import FeedbackRepository

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("studentId", "subject", "faculty", "responses", "semester")


def _responses(raw: Any) -> tuple[FeedbackResponse, ...]:
    if not isinstance(raw, list) or not raw:
        raise ValidationError("Invalid responses format")

    out: list[FeedbackResponse] = []
    seen: set[int] = set()
    for item in raw:
        if not isinstance(item, Mapping):
            raise ValidationError("Invalid responses format")
        try:
            question_id = int(item.get("questionId"))
            rating = int(item.get("rating"))
        except (TypeError, ValueError):
            raise ValidationError("Invalid responses format")
        if not MIN_FEEDBACK_RATING <= rating <= MAX_FEEDBACK_RATING:
            raise ValidationError(f"Rating must be between {MIN_FEEDBACK_RATING} and {MAX_FEEDBACK_RATING}")
        if question_id in seen:
            raise ValidationError(f"Duplicate response for question {question_id}")
        seen.add(question_id)
        out.append(FeedbackResponse(question_id=question_id, rating=rating))
    return tuple(out)


class FeedbackService:
    def __init__(self, feedback: FeedbackRepository):
        self._feedback = feedback

    def status(self, ctx: SessionContext, student_key: str, *, academic_year: Optional[str] = None) -> list[str]:
        ensure_can_read_student(ctx, student_key)
        return list(self._feedback.submitted_subjects(student_key, academic_year or current_academic_year()))

    def submit(self, ctx: SessionContext, payload: Mapping[str, Any], *, now: Optional[datetime] = None) -> Feedback:
        if missing_fields(payload, REQUIRED_FIELDS):
            raise ValidationError("Missing required fields")

        student_key = str(payload["studentId"]).strip()
        ensure_can_read_student(ctx, student_key)

        now = now or now_local()
        feedback = Feedback(
            student_key=student_key,
            subject=str(payload["subject"]).strip(),
            faculty=str(payload["faculty"]).strip(),
            responses=_responses(payload["responses"]),
            semester=str(payload["semester"]).strip(),
            academic_year=str(now.year),
            submitted_at=now,
        )
        feedback_id = self._feedback.create(feedback)
        logger.info("Feedback %s submitted by %s for %s", feedback_id, student_key, feedback.subject)
        return feedback
