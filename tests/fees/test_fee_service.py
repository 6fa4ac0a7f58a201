from datetime import date
from decimal import Decimal

import pytest

from college_portal.core.enums import FeeStatus
from college_portal.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from college_portal.fees.service import FeeService


def _payload(**overrides):
    data = {
        "studentId": "1BI22CS001",
        "amount": 45000,
        "dueDate": "2024-08-31",
        "semester": "3",
        "academicYear": "2024",
    }
    data.update(overrides)
    return data


def test_create_defaults_to_pending(repos):
    fee = FeeService(repos.fees).create(_payload())

    assert fee.fee_id == 1
    assert fee.status is FeeStatus.PENDING
    assert fee.due_date == date(2024, 8, 31)
    assert fee.to_dict()["amount"] == 45000


@pytest.mark.parametrize(
    "overrides",
    [{"amount": -5}, {"amount": "lots"}, {"status": "waived"}, {"dueDate": "31/08/2024"}, {"studentId": ""}],
)
def test_create_rejects_invalid_fields(repos, overrides):
    with pytest.raises(ValidationError):
        FeeService(repos.fees).create(_payload(**overrides))


def test_update_changes_only_given_fields(repos):
    svc = FeeService(repos.fees)
    fee = svc.create(_payload())

    updated = svc.update(fee.fee_id, {"status": "paid"})

    assert updated.status is FeeStatus.PAID
    assert updated.amount == Decimal("45000")
    assert repos.fees.get(fee.fee_id).status is FeeStatus.PAID


def test_update_and_delete_missing_fee(repos):
    svc = FeeService(repos.fees)

    with pytest.raises(NotFoundError):
        svc.update(99, {"status": "paid"})
    with pytest.raises(NotFoundError):
        svc.delete(99)


def test_student_sees_only_own_records(repos, student_ctx):
    svc = FeeService(repos.fees)
    svc.create(_payload())
    svc.create(_payload(studentId="1BI22EC014"))

    mine = svc.list_for(student_ctx, "1BI22CS001")

    assert [f.student_key for f in mine] == ["1BI22CS001"]
    with pytest.raises(AuthorizationError):
        svc.list_for(student_ctx, "1BI22EC014")
