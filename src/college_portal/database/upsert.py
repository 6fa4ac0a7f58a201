from __future__ import annotations

from typing import Any, Callable, Sequence

from mysql.connector import errors as mysql_errors

from ..bulk.coordinator import natural_key_of
from ..bulk.result import OperationResult, WriteOutcome
from .connection import DatabaseConnection
from .mysql_base import db_cursor

# MySQL affected-rows for INSERT ... ON DUPLICATE KEY UPDATE
_OUTCOME_BY_ROWCOUNT = {
    0: WriteOutcome.MATCHED,
    1: WriteOutcome.UPSERTED,
    2: WriteOutcome.MODIFIED,
}

# Errors that reject a single row; anything else aborts the batch.
ROW_LEVEL_ERRORS = (mysql_errors.DataError, mysql_errors.IntegrityError)


def execute_upserts(
    conn_factory: DatabaseConnection,
    *,
    sql: str,
    records: Sequence[Any],
    key_fields: Sequence[str],
    params: Callable[[Any], tuple],
) -> list[OperationResult]:
    """Run one keyed INSERT ... ON DUPLICATE KEY UPDATE per record, in order.

    A row the server rejects is reported as FAILED and the rest still run;
    rows written before it are kept.
    """

    results: list[OperationResult] = []
    with db_cursor(conn_factory, dictionary=False) as (_, cur):
        for index, record in enumerate(records):
            key = natural_key_of(record, key_fields)
            try:
                cur.execute(sql, params(record))
            except ROW_LEVEL_ERRORS as e:
                results.append(OperationResult(index=index, key=key, outcome=WriteOutcome.FAILED, error=str(e)))
                continue
            outcome = _OUTCOME_BY_ROWCOUNT.get(cur.rowcount, WriteOutcome.UPSERTED)
            results.append(OperationResult(index=index, key=key, outcome=outcome))
    return results
