from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Iterable, Optional

from werkzeug.security import generate_password_hash

from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parent / "schema.sql"


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema files (handles ';' inside quotes).
    buf: list[str] = []
    in_single = False
    in_double = False
    escape = False

    for ch in sql:
        if escape:
            buf.append(ch)
            escape = False
            continue

        if ch == "\\":
            buf.append(ch)
            escape = True
            continue

        if ch == "'" and not in_double:
            in_single = not in_single
        elif ch == '"' and not in_single:
            in_double = not in_double
        elif ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def ensure_database_exists(conn_factory: DatabaseConnection) -> None:
    conn = conn_factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{conn_factory.config.database}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(conn_factory: DatabaseConnection, *, schema_path: Optional[Path] = None) -> None:
    ensure_database_exists(conn_factory)
    sql = _strip_create_db_and_use(Path(schema_path or SCHEMA_PATH).read_text(encoding="utf-8"))

    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()
    logger.info("Schema applied to %s", conn_factory.config.describe())


def ensure_demo_accounts(conn_factory: DatabaseConnection) -> None:
    """Create (or reset) one admin, one teacher and one student for local demos."""

    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        cur.execute(
            """
            INSERT INTO admins(username, name, password_hash)
            VALUES(%s,%s,%s)
            ON DUPLICATE KEY UPDATE name=VALUES(name), password_hash=VALUES(password_hash)
            """,
            ("admin", "Admin", generate_password_hash("admin123")),
        )
        cur.execute(
            """
            INSERT INTO teachers(teacher_id, name, email, department, designation, subjects, password_hash)
            VALUES(%s,%s,%s,%s,%s,%s,%s)
            ON DUPLICATE KEY UPDATE name=VALUES(name), password_hash=VALUES(password_hash)
            """,
            (
                "T001",
                "Demo Teacher",
                "teacher@college.edu",
                "CSE",
                "Assistant Professor",
                json.dumps(["Computer Networks", "Software Engineering"]),
                generate_password_hash("teacher123"),
            ),
        )
        cur.execute(
            """
            INSERT INTO students(usn, name, department, year, section, password_hash)
            VALUES(%s,%s,%s,%s,%s,%s)
            ON DUPLICATE KEY UPDATE name=VALUES(name), password_hash=VALUES(password_hash)
            """,
            ("1BI22CS100", "Demo Student", "CSE", "2", "B", generate_password_hash("student123")),
        )
        conn.commit()
    finally:
        conn.close()
    logger.info("Demo accounts ready (admin / T001 / 1BI22CS100)")


def list_tables(conn_factory: DatabaseConnection) -> list[str]:
    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
