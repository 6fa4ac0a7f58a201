"""Deterministic demo attendance and marks, written through the bulk coordinators."""

from __future__ import annotations

import logging
import random
from datetime import date, timedelta
from typing import Sequence

from ..attendance.repository import AttendanceRepository
from ..attendance.service import attendance_coordinator
from ..bulk.result import BatchResult
from ..core.enums import ExamType
from ..marks.repository import MarkRepository
from ..marks.service import marks_coordinator
from ..users.model import Student

logger = logging.getLogger(__name__)

DEMO_SUBJECTS = (
    "Data Structures",
    "Database Management Systems",
    "Computer Networks",
    "Operating Systems",
    "Software Engineering",
)

INTERNAL_EXAMS = (ExamType.IA1, ExamType.IA2, ExamType.IA3)
INTERNAL_TOTAL = 50


def _weekdays(start: date, count: int) -> list[date]:
    days: list[date] = []
    d = start
    while len(days) < count:
        if d.weekday() < 5:
            days.append(d)
        d += timedelta(days=1)
    return days


def demo_attendance_payload(
    students: Sequence[Student],
    *,
    start: date,
    days: int = 30,
    subjects: Sequence[str] = DEMO_SUBJECTS,
    seed: int = 42,
) -> list[dict]:
    """About 80% present, with `seed` fixing the pattern."""

    rng = random.Random(seed)
    payload = []
    for student in students:
        for day in _weekdays(start, days):
            for subject in subjects:
                payload.append(
                    {
                        "studentKey": student.usn,
                        "year": student.year,
                        "section": student.section,
                        "subject": subject,
                        "date": day.isoformat(),
                        "status": "present" if rng.random() < 0.8 else "absent",
                    }
                )
    return payload


def demo_marks_payload(
    students: Sequence[Student],
    *,
    semester: str,
    academic_year: str,
    subjects: Sequence[str] = DEMO_SUBJECTS,
    seed: int = 42,
) -> list[dict]:
    rng = random.Random(seed)
    payload = []
    for student in students:
        for subject in subjects:
            for exam in INTERNAL_EXAMS:
                payload.append(
                    {
                        "studentKey": student.usn,
                        "subject": subject,
                        "examType": exam.value,
                        "marks": rng.randint(20, INTERNAL_TOTAL),
                        "totalMarks": INTERNAL_TOTAL,
                        "semester": semester,
                        "academicYear": academic_year,
                    }
                )
            payload.append(
                {
                    "studentKey": student.usn,
                    "subject": subject,
                    "examType": ExamType.SEMESTER.value,
                    "marks": rng.randint(40, 100),
                    "totalMarks": 100,
                    "semester": semester,
                    "academicYear": academic_year,
                }
            )
    return payload


def seed_attendance(
    repo: AttendanceRepository,
    students: Sequence[Student],
    *,
    start: date,
    days: int = 30,
    clear: bool = False,
) -> BatchResult:
    if clear:
        logger.info("Cleared %d attendance records", repo.delete_all())
    return attendance_coordinator(repo).upsert_batch(demo_attendance_payload(students, start=start, days=days))


def seed_marks(
    repo: MarkRepository,
    students: Sequence[Student],
    *,
    semester: str,
    academic_year: str,
    clear: bool = False,
) -> BatchResult:
    if clear:
        logger.info("Cleared %d mark records", repo.delete_all())
    return marks_coordinator(repo).upsert_batch(
        demo_marks_payload(students, semester=semester, academic_year=academic_year)
    )
