"""Operator commands: schema setup, account creation and demo data.

Usage:
  college-portal init-db
  college-portal create-admin --username admin --name Admin --password secret
  college-portal create-teacher --teacher-id T002 --name ... --email ... --password ...
  college-portal create-student --usn 1BI22CS101 --name ... --password ...
  college-portal seed-attendance --start 2024-01-08 --days 30 [--clear]
  college-portal seed-marks --semester 3 [--academic-year 2024] [--clear]
"""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from werkzeug.security import generate_password_hash

from .common.datetime_utils import current_academic_year, parse_iso_date
from .common.log import configure_logging
from .container import Container, build_container
from .core.exceptions import DomainError
from .database.bootstrap import apply_schema, ensure_demo_accounts, list_tables
from .database.seed import seed_attendance, seed_marks
from .main import load_settings
from .users.model import Admin


def _container() -> Container:
    settings = load_settings()
    configure_logging(settings.get("LOG_LEVEL", "INFO"))
    return build_container(
        db_config=settings["DB_CONFIG"],
        secret_key=settings["SECRET_KEY"],
        token_ttl_hours=int(settings.get("TOKEN_TTL_HOURS", 1)),
        attendance_threshold=float(settings.get("ATTENDANCE_THRESHOLD", 0.85)),
    )


def cmd_init_db(args: argparse.Namespace) -> None:
    c = _container()
    apply_schema(c.conn)
    if args.demo_accounts:
        ensure_demo_accounts(c.conn)
    print(f"OK: Applied schema.sql -> {c.conn.config.describe()} (tables={len(list_tables(c.conn))})")


def cmd_create_admin(args: argparse.Namespace) -> None:
    c = _container()
    c.repos.admins.upsert(
        Admin(username=args.username, name=args.name, password_hash=generate_password_hash(args.password))
    )
    print(f"OK: Admin {args.username} ready")


def cmd_create_teacher(args: argparse.Namespace) -> None:
    c = _container()
    c.teacher_service.register(
        {
            "teacherId": args.teacher_id,
            "name": args.name,
            "email": args.email,
            "department": args.department,
            "designation": args.designation,
            "subjects": args.subjects or [],
            "password": args.password,
        }
    )
    print(f"OK: Teacher {args.teacher_id} created")


def cmd_create_student(args: argparse.Namespace) -> None:
    c = _container()
    c.student_service.register(
        {
            "usn": args.usn,
            "name": args.name,
            "department": args.department,
            "year": args.year,
            "section": args.section,
            "password": args.password,
        }
    )
    print(f"OK: Student {args.usn} created")


def cmd_seed_attendance(args: argparse.Namespace) -> None:
    c = _container()
    students = c.repos.students.find()
    result = seed_attendance(
        c.repos.attendance,
        students,
        start=parse_iso_date(args.start),
        days=args.days,
        clear=args.clear,
    )
    print(f"OK: {result.total} attendance records for {len(students)} students ({result.to_dict()})")


def cmd_seed_marks(args: argparse.Namespace) -> None:
    c = _container()
    students = c.repos.students.find()
    result = seed_marks(
        c.repos.marks,
        students,
        semester=args.semester,
        academic_year=args.academic_year or current_academic_year(),
        clear=args.clear,
    )
    print(f"OK: {result.total} mark records for {len(students)} students ({result.to_dict()})")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="college-portal", description="College portal admin commands")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("init-db", help="apply schema.sql")
    p.add_argument("--demo-accounts", action="store_true", help="also create admin/T001/1BI22CS100 demo logins")
    p.set_defaults(func=cmd_init_db)

    p = sub.add_parser("create-admin")
    p.add_argument("--username", required=True)
    p.add_argument("--name", default="Admin")
    p.add_argument("--password", required=True)
    p.set_defaults(func=cmd_create_admin)

    p = sub.add_parser("create-teacher")
    p.add_argument("--teacher-id", required=True)
    p.add_argument("--name", required=True)
    p.add_argument("--email", required=True)
    p.add_argument("--department", required=True)
    p.add_argument("--designation", default="Assistant Professor")
    p.add_argument("--subjects", nargs="*")
    p.add_argument("--password", required=True)
    p.set_defaults(func=cmd_create_teacher)

    p = sub.add_parser("create-student")
    p.add_argument("--usn", required=True)
    p.add_argument("--name", required=True)
    p.add_argument("--department", default="CSE")
    p.add_argument("--year", default="1")
    p.add_argument("--section", default="A")
    p.add_argument("--password", required=True)
    p.set_defaults(func=cmd_create_student)

    p = sub.add_parser("seed-attendance", help="demo attendance for every student")
    p.add_argument("--start", required=True, help="first day, YYYY-MM-DD")
    p.add_argument("--days", type=int, default=30, help="number of weekdays")
    p.add_argument("--clear", action="store_true", help="delete existing attendance first")
    p.set_defaults(func=cmd_seed_attendance)

    p = sub.add_parser("seed-marks", help="demo IA and semester marks for every student")
    p.add_argument("--semester", required=True)
    p.add_argument("--academic-year")
    p.add_argument("--clear", action="store_true", help="delete existing marks first")
    p.set_defaults(func=cmd_seed_marks)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        args.func(args)
    except DomainError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
