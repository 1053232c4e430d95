"""Centralized JSON (RFC 7807) error handling for the API.

Service-layer errors are translated here, and only here, into problem
responses. Client-facing ``detail`` strings are fixed per error family so
that internal messages (driver errors, constraint names) never leak; the
full detail was already logged where the error originated.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from flask import Flask, Response, jsonify, request
from marshmallow import ValidationError as MarshmallowValidationError
from werkzeug.exceptions import HTTPException

from motomarket.core.logger import ensure_request_id
from motomarket.services._shared.errors import (
    ConflictError,
    HashingError,
    InvalidCredentialsError,
    MalformedError,
    NotFoundError,
    ServiceError,
    StorageFaultError,
    TokenError,
    TransactionTimeoutError,
    UnauthenticatedError,
    VerificationError,
)

log = logging.getLogger(__name__)

#: Challenge sent with every 401 response.
BEARER_CHALLENGE = 'Bearer realm="access to system"'

# (error type, status, code, client message). First match wins, so
# subclasses must come before their bases.
SERVICE_ERROR_MAP: tuple[tuple[type[ServiceError], HTTPStatus, str, str], ...] = (
    (MalformedError, HTTPStatus.BAD_REQUEST, "malformed", "Malformed request"),
    (
        InvalidCredentialsError,
        HTTPStatus.UNAUTHORIZED,
        "invalid_credentials",
        "Invalid credentials",
    ),
    (UnauthenticatedError, HTTPStatus.UNAUTHORIZED, "unauthorized", "Authentication required"),
    (TokenError, HTTPStatus.UNAUTHORIZED, "unauthorized", "Authentication required"),
    (NotFoundError, HTTPStatus.NOT_FOUND, "not_found", "Resource not found"),
    (ConflictError, HTTPStatus.CONFLICT, "conflict", "Resource conflict"),
    (
        TransactionTimeoutError,
        HTTPStatus.SERVICE_UNAVAILABLE,
        "timeout",
        "Service temporarily unavailable",
    ),
    (StorageFaultError, HTTPStatus.INTERNAL_SERVER_ERROR, "storage_fault", "Unexpected error"),
    (HashingError, HTTPStatus.INTERNAL_SERVER_ERROR, "internal_server_error", "Unexpected error"),
    (
        VerificationError,
        HTTPStatus.INTERNAL_SERVER_ERROR,
        "internal_server_error",
        "Unexpected error",
    ),
)


def _http_status_to_code(status_code: int) -> str:
    """Map common HTTP status codes to canonical, stable error codes."""
    mapping = {
        400: "bad_request",
        401: "unauthorized",
        404: "not_found",
        405: "method_not_allowed",
        409: "conflict",
        413: "payload_too_large",
        415: "unsupported_media_type",
        422: "unprocessable_entity",
        500: "internal_server_error",
        503: "service_unavailable",
    }
    return mapping.get(status_code, "error")


def _as_problem(
    *,
    status: int,
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """
    Build an RFC 7807 Problem Details dict.

    :param status: HTTP status code.
    :param code: Stable machine-consumable error code.
    :param message: Human-readable error summary (safe for clients).
    :param details: Optional safe, structured details.
    :returns: Problem+JSON dictionary.
    :rtype: dict
    """
    problem: dict[str, Any] = {
        "type": "about:blank",
        "title": HTTPStatus(status).phrase,
        "status": int(status),
        "detail": message,
        "instance": request.path if request else None,
        "code": code,
    }
    if details:
        problem["details"] = details
    problem["request_id"] = ensure_request_id()
    return problem


def _problem_response(problem: dict[str, Any], status: int) -> Response:
    """Return a Flask response with ``application/problem+json`` media type."""
    resp = jsonify(problem)
    resp.status_code = int(status)
    resp.mimetype = "application/problem+json"
    if resp.status_code == HTTPStatus.UNAUTHORIZED:
        resp.headers["WWW-Authenticate"] = BEARER_CHALLENGE
    return resp


def classify(err: ServiceError) -> tuple[HTTPStatus, str, str]:
    """Return ``(status, code, client message)`` for a service error."""
    for err_type, status, code, message in SERVICE_ERROR_MAP:
        if isinstance(err, err_type):
            return status, code, message
    return HTTPStatus.INTERNAL_SERVER_ERROR, "internal_server_error", "Unexpected error"


def init_app(app: Flask) -> None:
    """
    Attach JSON error handlers to the Flask app.

    Notes
    -----
    - Guarantees RFC 7807 responses for all handled errors.
    - Ensures a correlation ``request_id`` is present on every error.
    - Logs only code/status/request id for service errors; 5xx as errors,
      4xx as info.
    """

    @app.errorhandler(ServiceError)
    def handle_service_error(err: ServiceError):
        status, code, message = classify(err)
        problem = _as_problem(status=status, code=code, message=message)
        level = log.error if status >= 500 else log.info
        level(
            "ServiceError: code=%s status=%s request_id=%s",
            code,
            int(status),
            problem["request_id"],
            extra={"code": code, "status": int(status)},
        )
        return _problem_response(problem, status)

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        status = int(err.code or HTTPStatus.INTERNAL_SERVER_ERROR)
        error_code = _http_status_to_code(status)
        message = (err.description or error_code.replace("_", " ").capitalize()).strip()
        if status == HTTPStatus.NOT_FOUND and request:
            message = f"Route '{request.path}' not found"
        problem = _as_problem(status=status, code=error_code, message=message)
        level = log.error if status >= 500 else log.warning
        level(
            "HTTPException: code=%s status=%s request_id=%s",
            error_code,
            status,
            problem["request_id"],
        )
        return _problem_response(problem, status)

    @app.errorhandler(MarshmallowValidationError)
    def handle_validation_error(err: MarshmallowValidationError):
        problem = _as_problem(
            status=HTTPStatus.UNPROCESSABLE_ENTITY,
            code="validation_error",
            message="Validation failed",
            details={"errors": err.messages},
        )
        log.warning("ValidationError: request_id=%s", problem["request_id"])
        return _problem_response(problem, HTTPStatus.UNPROCESSABLE_ENTITY)

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        # Never leak internal details
        problem = _as_problem(
            status=HTTPStatus.INTERNAL_SERVER_ERROR,
            code="internal_server_error",
            message="Unexpected error",
        )
        log.error(
            "Unhandled exception: request_id=%s",
            problem["request_id"],
            exc_info=err,
        )
        return _problem_response(problem, HTTPStatus.INTERNAL_SERVER_ERROR)
