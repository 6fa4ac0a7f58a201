from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable, Tuple, Union

from ..common.numbers import TWO_PLACES, ZERO, to_decimal

Number = Union[int, float, Decimal]

# (lower bound on marks out of 100, grade point), highest first
GRADE_BANDS = (
    (90, 10),
    (80, 9),
    (70, 8),
    (60, 7),
    (50, 6),
    (40, 5),
)


def grade_points(marks: Number) -> int:
    m = to_decimal(marks)
    for floor, points in GRADE_BANDS:
        if m >= floor:
            return points
    return 0


def calculate_cgpa(subjects: Iterable[Tuple[Number, Number]]) -> dict[str, Any]:
    """Credit-weighted average of grade points over (marks, credits) pairs."""

    total_credits = Decimal(0)
    weighted = Decimal(0)
    for marks, credits in subjects:
        c = to_decimal(credits)
        if c < 0:
            raise ValueError("credits must be non-negative")
        total_credits += c
        weighted += grade_points(marks) * c

    cgpa = (weighted / total_credits).quantize(TWO_PLACES, rounding=ROUND_HALF_UP) if total_credits else ZERO
    return {"cgpa": cgpa, "totalCredits": total_credits}
