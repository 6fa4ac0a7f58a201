import pytest

from college_portal.core.exceptions import InvalidRecordError, NotFoundError, ValidationError
from college_portal.marks.service import MarksService


def _row(**overrides):
    row = {
        "studentKey": "1BI22CS001",
        "subject": "Computer Networks",
        "examType": "IA1",
        "marks": 38,
        "totalMarks": 50,
        "semester": "3",
        "academicYear": "2024",
    }
    row.update(overrides)
    return row


def test_get_marks_groups_and_summarises(repos, student_ctx):
    svc = MarksService(repos.marks, repos.students)
    svc.submit_batch([_row(), _row(examType="IA2", marks=44), _row(subject="OS", examType="Semester", marks=81, totalMarks=100)])

    data = svc.get_marks(student_ctx, "1BI22CS001")

    assert data["student"]["usn"] == "1BI22CS001"
    assert [m["examType"] for m in data["marks"]["3"]["Computer Networks"]] == [
        "Internal Assessment 1",
        "Internal Assessment 2",
    ]
    assert data["summary"]["3"]["obtainedMarks"] == 163
    assert data["summary"]["3"]["totalMarks"] == 200
    assert data["summary"]["3"]["percentage"] == "81.50"


def test_unknown_student_is_not_found(repos, teacher_ctx):
    with pytest.raises(NotFoundError, match="Student not found"):
        MarksService(repos.marks, repos.students).get_marks(teacher_ctx, "NOPE")


def test_student_without_marks_is_not_found(repos, teacher_ctx):
    with pytest.raises(NotFoundError):
        MarksService(repos.marks, repos.students).get_marks(teacher_ctx, "1BI22EC014")


def test_student_id_alias_and_resubmission_overwrites(repos):
    svc = MarksService(repos.marks, repos.students)
    row = _row()
    row["studentId"] = row.pop("studentKey")

    svc.submit_batch([row])
    result = svc.submit_batch([dict(row, marks=47)])

    assert result.modified_count == 1
    (stored,) = repos.marks.rows.values()
    assert stored.marks == 47


def test_marks_above_total_reject_batch(repos):
    with pytest.raises(InvalidRecordError) as exc:
        MarksService(repos.marks, repos.students).submit_batch([_row(), _row(subject="OS", marks=51)])

    assert exc.value.index == 1
    assert exc.value.record["subject"] == "OS"
    assert repos.marks.rows == {}


def test_cgpa_endpoint_shape():
    assert MarksService.cgpa([{"marks": 92, "credits": 4}, {"marks": 71, "credits": 3}]) == {
        "cgpa": "9.14",
        "totalCredits": 7,
    }


@pytest.mark.parametrize("subjects", [None, [], [{"marks": 120, "credits": 3}], [{"marks": 50}]])
def test_cgpa_rejects_bad_input(subjects):
    with pytest.raises(ValidationError):
        MarksService.cgpa(subjects)
