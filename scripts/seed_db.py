"""Create demo accounts, then demo attendance and marks for every student.

Usage: python scripts/seed_db.py [START_DATE] [SEMESTER]
"""

from __future__ import annotations

import sys
from datetime import date, timedelta

from college_portal.cli import main


def run(argv: list[str]) -> int:
    start = argv[0] if argv else (date.today() - timedelta(days=45)).isoformat()
    semester = argv[1] if len(argv) > 1 else "3"

    for command in (
        ["init-db", "--demo-accounts"],
        ["seed-attendance", "--start", start, "--clear"],
        ["seed-marks", "--semester", semester, "--clear"],
    ):
        code = main(command)
        if code:
            return code
    return 0


if __name__ == "__main__":
    raise SystemExit(run(sys.argv[1:]))
