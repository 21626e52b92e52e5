"""
RFC 7807 error responses for the API.

Every error leaves the app as ``application/problem+json`` with a stable
``code`` and the request id. 401 responses also carry a
``WWW-Authenticate: Bearer`` challenge (RFC 6750) and never say which
authentication check failed.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from flask import Flask, Response, has_request_context, jsonify, request
from marshmallow import ValidationError as MarshmallowValidationError
from sqlalchemy.exc import IntegrityError, OperationalError
from werkzeug.exceptions import HTTPException

from wellbite.core.logger import ensure_request_id

log = logging.getLogger(__name__)

BEARER_CHALLENGE = 'Bearer realm="wellbite"'

_STATUS_CODES = {
    HTTPStatus.BAD_REQUEST: "bad_request",
    HTTPStatus.UNAUTHORIZED: "unauthorized",
    HTTPStatus.FORBIDDEN: "forbidden",
    HTTPStatus.NOT_FOUND: "not_found",
    HTTPStatus.METHOD_NOT_ALLOWED: "method_not_allowed",
    HTTPStatus.CONFLICT: "conflict",
    HTTPStatus.UNSUPPORTED_MEDIA_TYPE: "unsupported_media_type",
    HTTPStatus.UNPROCESSABLE_ENTITY: "unprocessable_entity",
    HTTPStatus.INTERNAL_SERVER_ERROR: "internal_server_error",
    HTTPStatus.SERVICE_UNAVAILABLE: "service_unavailable",
}


def code_for_status(status: int) -> str:
    """Stable machine-readable code for an HTTP status (``"error"`` if unmapped)."""
    return _STATUS_CODES.get(status, "error")  # type: ignore[call-overload]


class APIError(Exception):
    """
    An error that already knows its HTTP rendering.

    :param message: Client-safe ``detail``.
    :param status_code: HTTP status, 400 by default.
    :param code: Machine-readable code, derived from the status when omitted.
    :param details: Optional structured, client-safe payload.
    """

    def __init__(
        self,
        message: str,
        status_code: int = HTTPStatus.BAD_REQUEST,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = int(status_code)
        self.code = code or code_for_status(self.status_code)
        self.details = details or {}

    def to_problem(self) -> dict[str, Any]:
        return problem_document(
            self.status_code, self.code, self.message, details=self.details or None
        )


class NotFound(APIError):
    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, HTTPStatus.NOT_FOUND)


class Conflict(APIError):
    def __init__(self, message: str = "Conflict") -> None:
        super().__init__(message, HTTPStatus.CONFLICT)


class Unauthorized(APIError):
    """The only shape an authentication failure takes on the wire."""

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message, HTTPStatus.UNAUTHORIZED)


def problem_document(
    status: int, code: str, message: str, *, details: dict[str, Any] | None = None
) -> dict[str, Any]:
    """Build the Problem Details body (``type``, ``title``, ``status``, ``detail``...)."""
    problem: dict[str, Any] = {
        "type": "about:blank",
        "title": HTTPStatus(status).phrase,
        "status": status,
        "detail": message,
        "instance": request.path if has_request_context() else None,
        "code": code,
    }
    if details:
        problem["details"] = details
    problem["request_id"] = ensure_request_id()
    return problem


def _respond(problem: dict[str, Any], *, exc_info: Any = None) -> tuple[Response, int]:
    status = int(problem["status"])
    if status >= 500:
        log.error("%s %s: %s", status, problem["code"], problem["detail"], exc_info=exc_info)
    else:
        log.warning("%s %s: %s", status, problem["code"], problem["detail"])

    response = jsonify(problem)
    response.mimetype = "application/problem+json"
    if status == HTTPStatus.UNAUTHORIZED:
        response.headers["WWW-Authenticate"] = BEARER_CHALLENGE
    return response, status


def init_app(app: Flask) -> None:
    """
    Register the handlers.

    ``ServiceError`` subclasses go through
    :meth:`wellbite.services._shared.base.BaseService.translate_exceptions`;
    authentication failures additionally log their ``kind`` for operators.
    Database and unexpected errors are reported without internals.
    """
    from wellbite.services._shared.base import BaseService
    from wellbite.services._shared.errors import AuthenticationError, ServiceError

    @app.errorhandler(APIError)
    def handle_api_error(err: APIError):
        return _respond(err.to_problem())

    @app.errorhandler(ServiceError)
    def handle_service_error(err: ServiceError):
        if isinstance(err, AuthenticationError):
            log.warning(
                "Authentication rejected: %s", err.kind, extra={"auth_kind": err.kind}
            )
        translated = BaseService.translate_exceptions(err)
        if isinstance(translated, APIError):
            return handle_api_error(translated)
        return handle_unexpected_error(translated)

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        status = int(err.code or HTTPStatus.INTERNAL_SERVER_ERROR)
        if status == HTTPStatus.NOT_FOUND:
            message = f"Route '{request.path}' not found"
        else:
            message = (err.description or HTTPStatus(status).phrase).strip()
        return _respond(problem_document(status, code_for_status(status), message))

    @app.errorhandler(MarshmallowValidationError)
    def handle_validation_error(err: MarshmallowValidationError):
        return _respond(
            problem_document(
                HTTPStatus.UNPROCESSABLE_ENTITY,
                "validation_error",
                "Validation failed",
                details={"errors": err.messages},
            )
        )

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(err: IntegrityError):
        log.error("Unmapped integrity error", exc_info=err)
        return _respond(problem_document(HTTPStatus.CONFLICT, "conflict", "Resource conflict"))

    @app.errorhandler(OperationalError)
    def handle_operational_error(err: OperationalError):
        return _respond(
            problem_document(
                HTTPStatus.SERVICE_UNAVAILABLE,
                "service_unavailable",
                "Service temporarily unavailable",
            ),
            exc_info=err,
        )

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        return _respond(
            problem_document(
                HTTPStatus.INTERNAL_SERVER_ERROR, "internal_server_error", "Unexpected error"
            ),
            exc_info=err,
        )
