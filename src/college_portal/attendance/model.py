from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Mapping, Optional, Union

from ..common.datetime_utils import parse_iso_date
from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """One student's status in one subject on one day.

    `status` is normally an AttendanceStatus; rows read back from the store
    keep whatever value they hold so aggregation can treat unknown values as
    not present.
    """

    student_key: str
    year: str
    section: str
    subject: str
    date: date
    status: Union[AttendanceStatus, str, None]
    attendance_id: Optional[int] = None

    @classmethod
    def from_payload(cls, raw: Mapping[str, Any]) -> "AttendanceRecord":
        try:
            status = AttendanceStatus(str(raw["status"]).strip().lower())
        except ValueError:
            raise ValueError(f"status must be one of present/absent/late, got {raw['status']!r}")

        return cls(
            student_key=str(raw["studentKey"]).strip(),
            year=str(raw["year"]).strip(),
            section=str(raw["section"]).strip(),
            subject=str(raw["subject"]).strip(),
            date=parse_iso_date(raw["date"]),
            status=status,
        )

    @property
    def status_value(self) -> Optional[str]:
        return self.status.value if isinstance(self.status, AttendanceStatus) else self.status

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.attendance_id,
            "studentKey": self.student_key,
            "year": self.year,
            "section": self.section,
            "subject": self.subject,
            "date": self.date.isoformat(),
            "status": self.status_value,
        }


@dataclass(frozen=True)
class SubjectAttendanceSummary:
    """Derived per-subject figures; recomputed on every read, never stored."""

    subject: str
    total_classes: int
    present_classes: int
    percentage: Decimal

    @property
    def absent_classes(self) -> int:
        return self.total_classes - self.present_classes

    def to_dict(self) -> dict[str, Any]:
        return {
            "subject": self.subject,
            "totalClasses": self.total_classes,
            "presentClasses": self.present_classes,
            "percentage": str(self.percentage),
        }


@dataclass(frozen=True)
class OverallAttendanceSummary(SubjectAttendanceSummary):
    absent_days: int = 0

    def to_dict(self) -> dict[str, Any]:
        out = super().to_dict()
        out["absentDays"] = self.absent_days
        return out
