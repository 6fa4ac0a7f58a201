from __future__ import annotations

import logging

from flask import jsonify

from ..bulk.result import BatchResult
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DomainError,
    InvalidRecordError,
    NotFoundError,
)

logger = logging.getLogger(__name__)


def status_for(error: DomainError) -> int:
    if isinstance(error, NotFoundError):
        return 404
    if isinstance(error, AuthenticationError):
        return 401
    if isinstance(error, AuthorizationError):
        return 403
    if isinstance(error, ConflictError):
        return 409
    return 400


def error_response(error: DomainError):
    body = {"success": False, "message": str(error)}
    if isinstance(error, InvalidRecordError):
        body["index"] = error.index
        body["invalidRecord"] = error.record
    return jsonify(body), status_for(error)


def server_error(message: str):
    logger.exception(message)
    return jsonify({"success": False, "message": message}), 500


def batch_response(result: BatchResult, *, saved: str, partial: str):
    """200 when every operation was applied; 207 with success false when the store rejected some."""

    body = {"success": result.ok, "message": saved if result.ok else partial, "result": result.to_dict()}
    return jsonify(body), 200 if result.ok else 207
