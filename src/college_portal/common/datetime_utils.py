from __future__ import annotations

from datetime import date, datetime


def parse_iso_date(value) -> date:
    """Parse YYYY-MM-DD (or a full ISO timestamp) into date.

    The client sends either `2024-03-10` or `2024-03-10T00:00:00.000Z`; both
    resolve to the calendar day.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    s = str(value).strip()
    if len(s) > 10 and s[10] in ("T", " "):
        s = s[:10]
    return datetime.strptime(s, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def current_academic_year() -> str:
    return str(now_local().year)
