from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from ..core.enums import Role
from ..core.exceptions import AuthenticationError
from .session import SessionContext

ALGORITHM = "HS256"


class TokenIssuer:
    """Issues and verifies HS256 bearer tokens carrying a role claim."""

    def __init__(self, secret: str, *, ttl_hours: int = 1):
        self._secret = secret
        self._ttl = timedelta(hours=int(ttl_hours))

    def issue(self, ctx: SessionContext, *, now: Optional[datetime] = None) -> str:
        now = now or datetime.now(timezone.utc)
        payload = {
            "sub": ctx.user_key,
            "role": ctx.role.value,
            "name": ctx.name,
            "iat": now,
            "exp": now + self._ttl,
        }
        return jwt.encode(payload, self._secret, algorithm=ALGORITHM)

    def decode(self, token: str) -> SessionContext:
        try:
            data = jwt.decode(token, self._secret, algorithms=[ALGORITHM])
        except jwt.ExpiredSignatureError:
            raise AuthenticationError("Token has expired")
        except jwt.InvalidTokenError:
            raise AuthenticationError("Invalid token")

        try:
            role = Role(data.get("role"))
        except ValueError:
            raise AuthenticationError("Invalid token")
        return SessionContext(user_key=str(data["sub"]), role=role, name=data.get("name"))


def bearer_token(header: Optional[str]) -> str:
    if not header:
        raise AuthenticationError("No authorization header found")
    token = header[7:] if header.startswith("Bearer ") else header
    token = token.strip()
    if not token:
        raise AuthenticationError("No token found")
    return token
