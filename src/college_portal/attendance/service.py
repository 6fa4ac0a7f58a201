from __future__ import annotations

from typing import Any, Optional

from ..auth.session import SessionContext, ensure_can_read_student
from ..bulk.coordinator import BulkUpsertCoordinator
from ..bulk.result import BatchResult
from ..core.constants import ATTENDANCE_NATURAL_KEY, ATTENDANCE_THRESHOLD
from ..core.exceptions import NotFoundError
from .aggregation import split_overall, summarize_attendance_by_subject
from .eligibility import classes_needed_for_target
from .model import AttendanceRecord, SubjectAttendanceSummary
from .repository import AttendanceRepository

REQUIRED_FIELDS = ("studentKey", "year", "section", "subject", "date", "status")
FIELD_ALIASES = {"usn": "studentKey"}


def attendance_coordinator(repo: AttendanceRepository) -> BulkUpsertCoordinator[AttendanceRecord]:
    return BulkUpsertCoordinator(
        repo,
        natural_key=ATTENDANCE_NATURAL_KEY,
        required_fields=REQUIRED_FIELDS,
        build=AttendanceRecord.from_payload,
        aliases=FIELD_ALIASES,
        label="attendance",
    )


class AttendanceService:
    """Use case: per-subject attendance summaries, eligibility and bulk entry."""

    def __init__(
        self,
        attendance_repo: AttendanceRepository,
        *,
        coordinator: Optional[BulkUpsertCoordinator[AttendanceRecord]] = None,
        threshold: float = ATTENDANCE_THRESHOLD,
    ):
        self._repo = attendance_repo
        self._coordinator = coordinator or attendance_coordinator(attendance_repo)
        self._threshold = threshold

    @property
    def threshold(self) -> float:
        return self._threshold

    def _summaries(self, student_key: str) -> dict[str, SubjectAttendanceSummary]:
        records = self._repo.list_for_student(student_key)
        if not records:
            raise NotFoundError("No attendance records found")
        return summarize_attendance_by_subject(records)

    def get_summary(self, ctx: SessionContext, student_key: str) -> dict[str, Any]:
        ensure_can_read_student(ctx, student_key)
        summaries = self._summaries(student_key)
        overall, subjects = split_overall(summaries)

        eligibility = {
            name: classes_needed_for_target(s.present_classes, s.total_classes, self._threshold)
            for name, s in summaries.items()
        }
        return {
            "overall": overall.to_dict(),
            "subjectWise": {name: s.to_dict() for name, s in subjects.items()},
            "eligibility": {name: {"classesNeeded": n} for name, n in eligibility.items()},
            "threshold": self._threshold,
        }

    def report_rows(self, student_key: str) -> list[dict[str, Any]]:
        """Flat rows for CSV export, one per subject plus the overall line."""

        rows = []
        for name, s in self._summaries(student_key).items():
            rows.append(
                {
                    "student_key": student_key,
                    "subject": name,
                    "total_classes": s.total_classes,
                    "present_classes": s.present_classes,
                    "absent_classes": s.absent_classes,
                    "percentage": str(s.percentage),
                    "classes_needed": classes_needed_for_target(s.present_classes, s.total_classes, self._threshold),
                }
            )
        return rows

    def submit_batch(self, payload: Any) -> BatchResult:
        return self._coordinator.upsert_batch(payload)
