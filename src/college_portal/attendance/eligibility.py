from __future__ import annotations

import math
from fractions import Fraction
from typing import Optional, Union

from ..core.constants import ATTENDANCE_THRESHOLD


def classes_needed_for_target(
    present: int,
    total: int,
    target: Union[float, str, Fraction] = ATTENDANCE_THRESHOLD,
) -> Optional[int]:
    """Fewest further classes a student must attend (all present) to reach `target`.

    Returns None when the target is already met or when there are no classes
    to project from. Solves (present + x) / (total + x) >= target in exact
    rational arithmetic, so 17/20 counts as exactly 85%.
    """

    present = int(present)
    total = int(total)
    if present < 0 or total < 0:
        raise ValueError("present and total must be non-negative")
    if present > total:
        raise ValueError("present cannot exceed total")

    t = Fraction(str(target)) if not isinstance(target, Fraction) else target
    if not 0 < t < 1:
        raise ValueError("target must be between 0 and 1 (exclusive)")

    if total == 0:
        return None
    if Fraction(present, total) >= t:
        return None

    return max(0, math.ceil((t * total - present) / (1 - t)))
