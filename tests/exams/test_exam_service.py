from datetime import date

import pytest

from college_portal.core.exceptions import NotFoundError, ValidationError
from college_portal.exams.service import ExamService


def _payload(**overrides):
    data = {
        "examName": "Mid-term",
        "subject": "Computer Networks",
        "date": "2024-10-14",
        "startTime": "10:00",
        "duration": "3 hours",
        "totalMarks": 100,
        "department": "CSE",
        "semester": "3",
    }
    data.update(overrides)
    return data


def test_list_is_ordered_by_date(repos):
    svc = ExamService(repos.exams)
    svc.create(_payload(examName="Finals", date="2024-12-02"))
    svc.create(_payload(examName="Mid-term", date="2024-10-14"))

    assert [e.exam_name for e in svc.list_all()] == ["Mid-term", "Finals"]


def test_schedule_filters_department_and_semester(repos):
    svc = ExamService(repos.exams)
    svc.create(_payload())
    svc.create(_payload(department="ECE"))

    exams = svc.schedule(department="CSE", semester="3")

    assert [e.department for e in exams] == ["CSE"]


def test_missing_field_is_rejected(repos):
    with pytest.raises(ValidationError, match="Start time"):
        ExamService(repos.exams).create(_payload(startTime=""))


def test_update_keeps_unchanged_fields(repos):
    svc = ExamService(repos.exams)
    exam = svc.create(_payload())

    updated = svc.update(exam.exam_id, {"date": "2024-10-21T00:00:00.000Z"})

    assert updated.exam_date == date(2024, 10, 21)
    assert updated.subject == "Computer Networks"
    assert updated.total_marks == "100"


def test_delete_missing_exam(repos):
    with pytest.raises(NotFoundError, match="Exam not found"):
        ExamService(repos.exams).delete(7)
