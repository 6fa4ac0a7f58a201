"""Apply schema.sql to the configured database (APP_ENV selects the settings)."""

from __future__ import annotations

import sys

from college_portal.cli import main

if __name__ == "__main__":
    raise SystemExit(main(["init-db", *sys.argv[1:]]))
