"""Attendance aggregation.

Pure functions over already-fetched records: no I/O, no shared state, a fresh
result on every call.
"""

from __future__ import annotations

from typing import Iterable

from ..common.numbers import percentage
from ..core.constants import OVERALL_KEY
from ..core.enums import AttendanceStatus
from .model import AttendanceRecord, OverallAttendanceSummary, SubjectAttendanceSummary


def is_present(record: AttendanceRecord) -> bool:
    # Anything other than an explicit "present" (late, absent, missing, unknown) counts against.
    return record.status == AttendanceStatus.PRESENT


def summarize_attendance_by_subject(records: Iterable[AttendanceRecord]) -> dict[str, SubjectAttendanceSummary]:
    """Group records by subject (case-sensitive) and add an `Overall` entry.

    Subjects appear in first-seen order; `Overall` is always present and last.
    With no records at all the overall percentage is `0`.
    """

    counts: dict[str, list[int]] = {}
    for r in records:
        c = counts.setdefault(r.subject, [0, 0])
        c[0] += 1
        if is_present(r):
            c[1] += 1

    out: dict[str, SubjectAttendanceSummary] = {}
    for subject, (total, present) in counts.items():
        out[subject] = SubjectAttendanceSummary(
            subject=subject,
            total_classes=total,
            present_classes=present,
            percentage=percentage(present, total),
        )

    total_all = sum(s.total_classes for s in out.values())
    present_all = sum(s.present_classes for s in out.values())
    out[OVERALL_KEY] = OverallAttendanceSummary(
        subject=OVERALL_KEY,
        total_classes=total_all,
        present_classes=present_all,
        percentage=percentage(present_all, total_all),
        absent_days=total_all - present_all,
    )
    return out


def split_overall(summaries: dict[str, SubjectAttendanceSummary]) -> tuple[OverallAttendanceSummary, dict[str, SubjectAttendanceSummary]]:
    subjects = {k: v for k, v in summaries.items() if k != OVERALL_KEY}
    return summaries[OVERALL_KEY], subjects
