from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

from ..core.enums import FeeStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import FeeRecord
from .repository import FeeRepository

_COLUMNS = "fee_id, student_key, amount, due_date, status, semester, academic_year, created_at"


def _to_fee(r: dict) -> FeeRecord:
    return FeeRecord(
        fee_id=int(r["fee_id"]),
        student_key=r["student_key"],
        amount=Decimal(r["amount"]),
        due_date=r["due_date"],
        status=FeeStatus(r["status"]),
        semester=r["semester"],
        academic_year=r["academic_year"],
        created_at=r.get("created_at"),
    )


class MySQLFeeRepository(FeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[FeeRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM fee_records ORDER BY created_at DESC, fee_id DESC")
            return [_to_fee(r) for r in fetchall(cur)]

    def list_for_student(self, student_key: str) -> Sequence[FeeRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM fee_records WHERE student_key=%s ORDER BY created_at DESC, fee_id DESC",
                (student_key,),
            )
            return [_to_fee(r) for r in fetchall(cur)]

    def get(self, fee_id: int) -> Optional[FeeRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM fee_records WHERE fee_id=%s", (int(fee_id),))
            r = fetchone(cur)
            return _to_fee(r) if r else None

    def create(self, fee: FeeRecord) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO fee_records(student_key, amount, due_date, status, semester, academic_year)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (fee.student_key, fee.amount, fee.due_date, fee.status.value, fee.semester, fee.academic_year),
            )
            return int(cur.lastrowid)

    def update(self, fee_id: int, fee: FeeRecord) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE fee_records
                SET student_key=%s, amount=%s, due_date=%s, status=%s, semester=%s, academic_year=%s
                WHERE fee_id=%s
                """,
                (
                    fee.student_key,
                    fee.amount,
                    fee.due_date,
                    fee.status.value,
                    fee.semester,
                    fee.academic_year,
                    int(fee_id),
                ),
            )

    def delete(self, fee_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM fee_records WHERE fee_id=%s", (int(fee_id),))
            return cur.rowcount > 0
