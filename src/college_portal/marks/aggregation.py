"""Marks aggregation: group by semester then subject, and total each semester."""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable

from ..common.numbers import percentage
from .model import MarkRecord, SemesterMarksSummary

GroupedMarks = dict[str, dict[str, list[MarkRecord]]]


def summarize_marks_by_semester(records: Iterable[MarkRecord]) -> GroupedMarks:
    """semester -> subject -> every mark entry, in input order.

    Several exam types for the same subject sit side by side; nothing is
    de-duplicated here.
    """

    grouped: GroupedMarks = {}
    for r in records:
        grouped.setdefault(r.semester, {}).setdefault(r.subject, []).append(r)
    return grouped


def compute_marks_summary(grouped: GroupedMarks) -> dict[str, SemesterMarksSummary]:
    out: dict[str, SemesterMarksSummary] = {}
    for semester, subjects in grouped.items():
        entries = [m for marks in subjects.values() for m in marks]
        total = sum((m.total_marks for m in entries), Decimal(0))
        obtained = sum((m.marks for m in entries), Decimal(0))
        out[semester] = SemesterMarksSummary(
            semester=semester,
            total_marks=total,
            obtained_marks=obtained,
            subjects=len(subjects),
            percentage=percentage(obtained, total),
        )
    return out


def grouped_to_dict(grouped: GroupedMarks) -> dict[str, dict[str, list[dict]]]:
    return {
        semester: {subject: [m.to_dict() for m in marks] for subject, marks in subjects.items()}
        for semester, subjects in grouped.items()
    }
