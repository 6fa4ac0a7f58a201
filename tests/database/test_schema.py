import re

import pytest

from college_portal.database.bootstrap import SCHEMA_PATH, _strip_create_db_and_use, iter_sql_statements


def _table(name):
    sql = _strip_create_db_and_use(SCHEMA_PATH.read_text(encoding="utf-8"))
    for stmt in iter_sql_statements(sql):
        if re.search(rf"CREATE TABLE IF NOT EXISTS {name}\b", stmt):
            return stmt
    raise AssertionError(f"{name} not in schema.sql")


def _column(stmt, column):
    match = re.search(rf"^\s*{column} .*$", stmt, re.MULTILINE)
    assert match, f"column {column} missing"
    return match.group(0)


@pytest.mark.parametrize(
    "table,columns",
    [
        ("attendance_records", ["student_key", "subject"]),
        ("mark_records", ["student_key", "subject", "exam_type", "semester"]),
    ],
)
def test_natural_key_columns_compare_case_sensitively(table, columns):
    # "CN" and "cn" are different subjects; a case-insensitive unique key would merge them.
    stmt = _table(table)
    for column in columns:
        assert "COLLATE utf8mb4_bin" in _column(stmt, column)


def test_natural_unique_keys_cover_the_binary_columns():
    assert "UNIQUE KEY uq_attendance_natural (student_key, subject, att_date)" in _table("attendance_records")
    assert "UNIQUE KEY uq_mark_natural (student_key, subject, exam_type, semester)" in _table("mark_records")
