import pytest
from mysql.connector import errors as mysql_errors

from college_portal.bulk.result import WriteOutcome
from college_portal.database.mysql_base import build_where
from college_portal.database.upsert import execute_upserts


class FakeCursor:
    def __init__(self, outcomes):
        self._outcomes = list(outcomes)
        self.rowcount = -1
        self.executed = []

    def execute(self, sql, params=None):
        self.executed.append(params)
        outcome = self._outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        self.rowcount = outcome

    def close(self):
        pass


class FakeConnection:
    def __init__(self, cursor):
        self._cursor = cursor
        self.committed = False
        self.rolled_back = False

    def cursor(self, dictionary=True):
        return self._cursor

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        pass


class FakeFactory:
    def __init__(self, outcomes):
        self.cursor = FakeCursor(outcomes)
        self.conn = FakeConnection(self.cursor)

    def connect(self, *, with_database=True):
        return self.conn


RECORDS = [{"k": "a", "v": 1}, {"k": "b", "v": 2}, {"k": "c", "v": 3}]


def _run(factory):
    return execute_upserts(
        factory,
        sql="INSERT ...",
        records=RECORDS,
        key_fields=("k",),
        params=lambda r: (r["k"], r["v"]),
    )


def test_affected_rows_map_to_outcomes():
    factory = FakeFactory([1, 2, 0])

    results = _run(factory)

    assert [r.outcome for r in results] == [WriteOutcome.UPSERTED, WriteOutcome.MODIFIED, WriteOutcome.MATCHED]
    assert [r.key for r in results] == [("a",), ("b",), ("c",)]
    assert factory.cursor.executed == [("a", 1), ("b", 2), ("c", 3)]
    assert factory.conn.committed


def test_rejected_row_is_failed_and_rest_still_run():
    factory = FakeFactory([1, mysql_errors.DataError(msg="Data too long for column 'subject'"), 1])

    results = _run(factory)

    assert [r.outcome for r in results] == [WriteOutcome.UPSERTED, WriteOutcome.FAILED, WriteOutcome.UPSERTED]
    assert "Data too long" in results[1].error
    assert factory.conn.committed


def test_store_failure_propagates_and_rolls_back():
    factory = FakeFactory([1, mysql_errors.OperationalError(msg="Lost connection to MySQL server")])

    with pytest.raises(mysql_errors.OperationalError):
        _run(factory)

    assert factory.conn.rolled_back
    assert not factory.conn.committed


def test_build_where_skips_none_filters():
    assert build_where({"year": "2", "department": None, "section": "A"}) == (
        "WHERE year=%s AND section=%s",
        ["2", "A"],
    )
    assert build_where({"year": None}) == ("", [])
