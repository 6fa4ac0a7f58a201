from __future__ import annotations

import logging
from dataclasses import replace
from decimal import Decimal
from typing import Any, Mapping, Optional

from ..auth.session import SessionContext, ensure_can_read_student
from ..common.datetime_utils import parse_iso_date
from ..common.validators import require_non_empty, require_number
from ..core.enums import FeeStatus
from ..core.exceptions import NotFoundError, ValidationError
from .model import FeeRecord
from .repository import FeeRepository

logger = logging.getLogger(__name__)


def _status(value: Any) -> FeeStatus:
    try:
        return FeeStatus(str(value).strip().lower())
    except ValueError:
        raise ValidationError("Status must be one of pending/paid/overdue")


def _due_date(value: Any):
    try:
        return parse_iso_date(require_non_empty(value, "Due date"))
    except ValueError:
        raise ValidationError("Due date must be YYYY-MM-DD")


def _amount(value: Any) -> Decimal:
    return Decimal(str(require_number(value, "Amount", minimum=0)))


class FeeService:
    def __init__(self, fees: FeeRepository):
        self._fees = fees

    def list_all(self) -> list[FeeRecord]:
        return list(self._fees.list_all())

    def list_for(self, ctx: SessionContext, student_key: Optional[str]) -> list[FeeRecord]:
        student_key = require_non_empty(student_key, "studentId")
        ensure_can_read_student(ctx, student_key)
        return list(self._fees.list_for_student(student_key))

    def get(self, fee_id: int) -> FeeRecord:
        fee = self._fees.get(fee_id)
        if not fee:
            raise NotFoundError("Fee record not found")
        return fee

    def create(self, payload: Mapping[str, Any]) -> FeeRecord:
        fee = FeeRecord(
            student_key=require_non_empty(payload.get("studentId"), "studentId"),
            amount=_amount(payload.get("amount")),
            due_date=_due_date(payload.get("dueDate")),
            status=_status(payload.get("status") or FeeStatus.PENDING.value),
            semester=require_non_empty(payload.get("semester"), "Semester"),
            academic_year=require_non_empty(payload.get("academicYear"), "Academic year"),
        )
        fee_id = self._fees.create(fee)
        logger.info("Created fee record %s for %s", fee_id, fee.student_key)
        return replace(fee, fee_id=fee_id)

    def update(self, fee_id: int, payload: Mapping[str, Any]) -> FeeRecord:
        """Partial update: fields absent from `payload` keep their stored value."""

        current = self.get(fee_id)
        changes: dict[str, Any] = {}
        if "studentId" in payload:
            changes["student_key"] = require_non_empty(payload["studentId"], "studentId")
        if "amount" in payload:
            changes["amount"] = _amount(payload["amount"])
        if "dueDate" in payload:
            changes["due_date"] = _due_date(payload["dueDate"])
        if "status" in payload:
            changes["status"] = _status(payload["status"])
        if "semester" in payload:
            changes["semester"] = require_non_empty(payload["semester"], "Semester")
        if "academicYear" in payload:
            changes["academic_year"] = require_non_empty(payload["academicYear"], "Academic year")

        updated = replace(current, **changes)
        self._fees.update(fee_id, updated)
        return updated

    def delete(self, fee_id: int) -> None:
        if not self._fees.delete(fee_id):
            raise NotFoundError("Fee record not found")
        logger.info("Deleted fee record %s", fee_id)
