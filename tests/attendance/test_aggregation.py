from datetime import date
from decimal import Decimal

from college_portal.attendance.aggregation import split_overall, summarize_attendance_by_subject
from college_portal.attendance.model import AttendanceRecord
from college_portal.core.enums import AttendanceStatus


def _rec(subject, status, day=1):
    return AttendanceRecord(
        student_key="1BI22CS001",
        year="2",
        section="A",
        subject=subject,
        date=date(2024, 3, day),
        status=status,
    )


def test_single_subject_two_of_three_present():
    records = [
        _rec("CN", AttendanceStatus.PRESENT, 1),
        _rec("CN", AttendanceStatus.ABSENT, 2),
        _rec("CN", AttendanceStatus.PRESENT, 3),
    ]

    out = summarize_attendance_by_subject(records)

    assert out["CN"].total_classes == 3
    assert out["CN"].present_classes == 2
    assert out["CN"].to_dict()["percentage"] == "66.67"
    assert out["Overall"].to_dict() == {
        "subject": "Overall",
        "totalClasses": 3,
        "presentClasses": 2,
        "percentage": "66.67",
        "absentDays": 1,
    }


def test_no_records_gives_zero_overall():
    out = summarize_attendance_by_subject([])

    assert list(out) == ["Overall"]
    assert out["Overall"].total_classes == 0
    assert out["Overall"].to_dict()["percentage"] == "0"


def test_overall_is_sum_of_subjects():
    records = [
        _rec("CN", AttendanceStatus.PRESENT, 1),
        _rec("CN", AttendanceStatus.ABSENT, 2),
        _rec("DBMS", AttendanceStatus.PRESENT, 1),
        _rec("DBMS", AttendanceStatus.PRESENT, 2),
        _rec("DBMS", AttendanceStatus.LATE, 3),
        _rec("OS", AttendanceStatus.ABSENT, 1),
    ]

    overall, subjects = split_overall(summarize_attendance_by_subject(records))

    assert set(subjects) == {"CN", "DBMS", "OS"}
    assert overall.present_classes == sum(s.present_classes for s in subjects.values()) == 3
    assert overall.total_classes == sum(s.total_classes for s in subjects.values()) == 6
    assert overall.absent_days == 3
    assert overall.percentage == Decimal("50.00")


def test_subjects_are_case_sensitive():
    out = summarize_attendance_by_subject([_rec("cn", AttendanceStatus.PRESENT), _rec("CN", AttendanceStatus.PRESENT)])

    assert {"cn", "CN"} <= set(out)


def test_late_and_unknown_status_count_as_not_present():
    records = [
        _rec("CN", AttendanceStatus.LATE, 1),
        _rec("CN", "excused", 2),
        _rec("CN", None, 3),
        _rec("CN", AttendanceStatus.PRESENT, 4),
    ]

    out = summarize_attendance_by_subject(records)

    assert out["CN"].present_classes == 1
    assert out["CN"].percentage == Decimal("25.00")


def test_percentages_stay_within_bounds():
    records = [_rec("CN", AttendanceStatus.ABSENT, d) for d in range(1, 8)]
    records += [_rec("OS", AttendanceStatus.PRESENT, d) for d in range(1, 8)]

    out = summarize_attendance_by_subject(records)

    assert out["CN"].percentage == Decimal("0.00")
    assert out["OS"].percentage == Decimal("100.00")
    for s in out.values():
        assert Decimal(0) <= s.percentage <= Decimal(100)
