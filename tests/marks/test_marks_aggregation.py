from decimal import Decimal

import pytest

from college_portal.core.enums import ExamType
from college_portal.marks.aggregation import compute_marks_summary, summarize_marks_by_semester
from college_portal.marks.model import MarkRecord


def _mark(subject, exam, marks, total=100, semester="3"):
    return MarkRecord(
        student_key="1BI22CS001",
        subject=subject,
        exam_type=exam,
        marks=Decimal(marks),
        total_marks=Decimal(total),
        semester=semester,
        academic_year="2024",
    )


def test_groups_by_semester_then_subject_keeping_every_exam():
    records = [
        _mark("CN", ExamType.IA1, 40, 50),
        _mark("CN", ExamType.IA2, 45, 50),
        _mark("OS", ExamType.IA1, 30, 50),
        _mark("DBMS", ExamType.SEMESTER, 70, semester="4"),
    ]

    grouped = summarize_marks_by_semester(records)

    assert set(grouped) == {"3", "4"}
    assert [m.exam_type for m in grouped["3"]["CN"]] == [ExamType.IA1, ExamType.IA2]
    assert list(grouped["4"]) == ["DBMS"]


def test_semester_summary_totals():
    records = [
        _mark("CN", ExamType.IA1, 40, 50),
        _mark("CN", ExamType.SEMESTER, 78),
        _mark("OS", ExamType.IA1, 33, 50),
    ]

    summary = compute_marks_summary(summarize_marks_by_semester(records))["3"]

    assert summary.total_marks == 200
    assert summary.obtained_marks == 151
    assert summary.subjects == 2
    assert summary.to_dict() == {
        "semester": "3",
        "totalMarks": 200,
        "obtainedMarks": 151,
        "subjects": 2,
        "percentage": "75.50",
    }


def test_semester_without_entries_has_zero_percentage():
    summary = compute_marks_summary({"5": {}})["5"]

    assert summary.percentage == 0
    assert summary.subjects == 0


def test_zero_total_marks_does_not_divide():
    summary = compute_marks_summary(summarize_marks_by_semester([_mark("CN", ExamType.IA1, 0, 0)]))["3"]

    assert summary.percentage == 0


def test_no_records_gives_no_semesters():
    assert compute_marks_summary(summarize_marks_by_semester([])) == {}


class TestMarkPayload:
    def _raw(self, **overrides):
        raw = {
            "studentKey": "1BI22CS001",
            "subject": "CN",
            "examType": "IA1",
            "marks": 42,
            "semester": "3",
            "academicYear": "2024",
        }
        raw.update(overrides)
        return raw

    def test_defaults_total_marks_to_hundred(self):
        m = MarkRecord.from_payload(self._raw())

        assert m.total_marks == 100
        assert m.exam_type is ExamType.IA1

    def test_accepts_long_exam_type(self):
        assert MarkRecord.from_payload(self._raw(examType="Internal Assessment 3")).exam_type is ExamType.IA3

    def test_zero_marks_allowed(self):
        assert MarkRecord.from_payload(self._raw(marks=0)).marks == 0

    @pytest.mark.parametrize(
        "overrides",
        [
            {"marks": 101},
            {"marks": -1},
            {"marks": 30, "totalMarks": 25},
            {"totalMarks": 0},
            {"marks": "abc"},
            {"marks": True},
            {"examType": "Quiz"},
        ],
    )
    def test_rejects_out_of_range_or_malformed(self, overrides):
        with pytest.raises(ValueError):
            MarkRecord.from_payload(self._raw(**overrides))

    def test_academic_year_defaults_to_current_year(self, monkeypatch):
        from datetime import datetime

        from college_portal.common import datetime_utils

        monkeypatch.setattr(datetime_utils, "now_local", lambda: datetime(2031, 6, 1))
        raw = self._raw()
        del raw["academicYear"]

        assert MarkRecord.from_payload(raw).academic_year == "2031"
