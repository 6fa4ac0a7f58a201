from __future__ import annotations

from typing import Any, Mapping, Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidRecordError(ValidationError):
    """Raised when one record of a bulk submission is missing or has a bad field.

    Carries the position and raw content of the first offending record so the
    caller can point the user at it.
    """

    def __init__(self, message: str, *, index: int, record: Optional[Mapping[str, Any]] = None):
        super().__init__(message)
        self.index = index
        self.record = dict(record) if isinstance(record, Mapping) else record


class NotFoundError(DomainError):
    """Raised when a student or record does not exist."""


class ConflictError(DomainError):
    """Raised when a unique rule would be broken (duplicate key, second feedback)."""


class AuthenticationError(DomainError):
    """Raised when login credentials or bearer token are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""
