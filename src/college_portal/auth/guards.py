from __future__ import annotations

from functools import wraps

from flask import g, request

from ..common.http import error_response
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, DomainError
from .session import SessionContext
from .tokens import TokenIssuer, bearer_token


def roles_required(tokens: TokenIssuer, *roles: Role):
    """Require a valid bearer token; with `roles`, also one of those roles.

    The decoded SessionContext is put on `flask.g.session`.
    """

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                ctx = tokens.decode(bearer_token(request.headers.get("Authorization")))
                if roles and ctx.role not in roles:
                    raise AuthorizationError("Not authorized as admin" if roles == (Role.ADMIN,) else "Not authorized")
            except DomainError as e:
                return error_response(e)

            g.session = ctx
            return view(*args, **kwargs)

        return wrapper

    return decorator


def current_session() -> SessionContext:
    return g.session

