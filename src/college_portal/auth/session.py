from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from ..core.enums import Role
from ..core.exceptions import AuthorizationError


@dataclass(frozen=True)
class SessionContext:
    """Who is calling: decoded from the bearer token and passed explicitly to services."""

    user_key: str
    role: Role
    name: Optional[str] = None

    @property
    def is_staff(self) -> bool:
        return self.role in (Role.ADMIN, Role.TEACHER)

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.user_key, "role": self.role.value, "name": self.name}


def ensure_can_read_student(ctx: SessionContext, student_key: str) -> None:
    """Students may only read their own records; teachers and admins read anyone's."""

    if not ctx.is_staff and ctx.user_key != student_key:
        raise AuthorizationError("Not authorized to view another student's records")
