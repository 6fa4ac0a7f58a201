from __future__ import annotations

from typing import Protocol, Sequence

from .model import Feedback


class FeedbackRepository(Protocol):
    def submitted_subjects(self, student_key: str, academic_year: str) -> Sequence[str]:
        raise NotImplementedError

    def create(self, feedback: Feedback) -> int:
        """Store feedback with its responses.

        Raises ConflictError when the student already has feedback for the
        subject in that academic year.
        """

        raise NotImplementedError
