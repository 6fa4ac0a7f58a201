from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional

from ..common.numbers import plain_number
from ..core.enums import FeeStatus


@dataclass(frozen=True)
class FeeRecord:
    """A fee demand raised by the admin against one student."""

    student_key: str
    amount: Decimal
    due_date: date
    status: FeeStatus
    semester: str
    academic_year: str
    fee_id: Optional[int] = None
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.fee_id,
            "studentId": self.student_key,
            "amount": plain_number(self.amount),
            "dueDate": self.due_date.isoformat(),
            "status": self.status.value,
            "semester": self.semester,
            "academicYear": self.academic_year,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
