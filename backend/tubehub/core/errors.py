"""Centralized JSON error handling for the API.

Every failure leaves the application as the same envelope used by successful
responses::

    {"status": 404, "data": null, "message": "...", "success": false, "code": "not_found"}

Domain errors raised by services, werkzeug HTTP errors, schema validation,
database errors, JWT failures and unexpected exceptions all pass through the
handlers registered in :func:`init_app`.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from flask import Flask, Response, jsonify, request
from marshmallow import ValidationError as MarshmallowValidationError
from sqlalchemy.exc import IntegrityError, OperationalError
from werkzeug.exceptions import HTTPException

from tubehub.core.logger import ensure_request_id
from tubehub.services._shared.errors import (
    ConflictError,
    InternalFaultError,
    NotFoundError,
    ServiceError,
    UnauthorizedError,
)

log = logging.getLogger(__name__)


def _http_status_to_code(status_code: int) -> str:
    """Map common HTTP status codes to canonical, stable error codes."""
    mapping = {
        400: "bad_request",
        401: "unauthorized",
        403: "forbidden",
        404: "not_found",
        405: "method_not_allowed",
        409: "conflict",
        413: "payload_too_large",
        415: "unsupported_media_type",
        422: "unprocessable_entity",
        429: "too_many_requests",
        500: "internal_server_error",
        503: "service_unavailable",
    }
    return mapping.get(status_code, "error")


def as_envelope(
    *,
    status: int,
    message: str,
    data: Any = None,
    code: str | None = None,
    errors: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """
    Build the response envelope shared by success and error responses.

    :param status: HTTP status code.
    :param message: Human-readable summary (safe for clients).
    :param data: Payload; ``None`` for errors.
    :param code: Stable machine-consumable error code (errors only).
    :param errors: Optional structured validation details.
    :returns: Envelope dictionary.
    :rtype: dict
    """
    envelope: dict[str, Any] = {
        "status": int(status),
        "data": data,
        "message": message,
        "success": int(status) < 400,
    }
    if code is not None:
        envelope["code"] = code
    if errors:
        envelope["errors"] = errors
    return envelope


def _error_response(envelope: dict[str, Any]) -> tuple[Response, int]:
    return jsonify(envelope), envelope["status"]


class APIError(Exception):
    """
    Represent a JSON-serializable API error.

    Parameters
    ----------
    message : str
        Human-readable description presented to clients.
    status_code : int, optional
        HTTP status code to return. Defaults to ``400``.
    code : str, optional
        Machine-readable identifier, typically snake_case. Defaults to
        ``"bad_request"``.
    details : dict[str, Any] | None, optional
        Optional structured payload (e.g., validation messages) included in the
        response body under ``errors``.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 400,
        code: str = "bad_request",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = int(status_code)
        self.code = code
        self.details = details or {}

    def to_envelope(self) -> dict[str, Any]:
        """
        Serialize error metadata into the response envelope.

        :returns: Envelope dictionary.
        :rtype: dict
        """
        return as_envelope(
            status=self.status_code,
            message=self.message,
            code=self.code,
            errors=self.details or None,
        )


# Domain conveniences
class BadRequest(APIError):
    """400 for missing or invalid input."""

    def __init__(self, message: str = "Bad request") -> None:
        super().__init__(message, status_code=HTTPStatus.BAD_REQUEST, code="bad_request")


class NotFound(APIError):
    """404 when resources are missing."""

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, status_code=HTTPStatus.NOT_FOUND, code="not_found")


class Conflict(APIError):
    """409 for uniqueness/constraint collisions."""

    def __init__(self, message: str = "Conflict") -> None:
        super().__init__(message, status_code=HTTPStatus.CONFLICT, code="conflict")


class Unauthorized(APIError):
    """401 when authentication fails."""

    def __init__(self, message: str = "Unauthorized request") -> None:
        super().__init__(message, status_code=HTTPStatus.UNAUTHORIZED, code="unauthorized")


class InternalFault(APIError):
    """500 when a downstream dependency fails."""

    def __init__(self, message: str = "Something went wrong") -> None:
        super().__init__(
            message,
            status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
            code="internal_server_error",
        )


def translate_service_error(exc: ServiceError) -> APIError:
    """
    Map domain/service-level errors to API-level (HTTP) errors.

    :param exc: Exception raised within the service layer.
    :type exc: ServiceError
    :returns: Translated error ready to be rendered.
    :rtype: APIError
    """
    if isinstance(exc, UnauthorizedError):
        return Unauthorized(str(exc))
    if isinstance(exc, NotFoundError):
        return NotFound(str(exc))
    if isinstance(exc, ConflictError):
        return Conflict(str(exc))
    if isinstance(exc, InternalFaultError):
        return InternalFault(str(exc))
    # Any other ServiceError → 400 Bad Request
    return BadRequest(str(exc))


def init_app(app: Flask) -> None:
    """
    Attach JSON error handlers to the Flask app.

    Notes
    -----
    - Guarantees the envelope for all handled errors.
    - Ensures a correlation ``request_id`` is present on every error log line.
    - Emits 5xx with ``exc_info`` for traceability; 4xx as warnings.
    """

    def _render_api_error(err: APIError):
        envelope = err.to_envelope()
        # 4xx → warning; 5xx → error
        level = log.error if err.status_code >= 500 else log.warning
        level(
            "APIError: code=%s status=%s msg=%s request_id=%s",
            err.code,
            err.status_code,
            err.message,
            ensure_request_id(),
            exc_info=err.status_code >= 500 and err.__cause__ is not None,
        )
        return _error_response(envelope)

    @app.errorhandler(APIError)
    def handle_api_error(err: APIError):
        return _render_api_error(err)

    @app.errorhandler(ServiceError)
    def handle_service_error(err: ServiceError):
        api_err = translate_service_error(err)
        api_err.__cause__ = err.__cause__
        return _render_api_error(api_err)

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        status = int(err.code or HTTPStatus.INTERNAL_SERVER_ERROR)
        error_code = _http_status_to_code(status)
        # Werkzeug may provide HTML-ish description; normalize for clients
        message = (err.description or error_code.replace("_", " ").capitalize()).strip()
        if status == HTTPStatus.NOT_FOUND and request:
            message = f"Route '{request.path}' not found"
        level = log.error if status >= 500 else log.warning
        level(
            "HTTPException: code=%s status=%s detail=%s request_id=%s",
            error_code,
            status,
            message,
            ensure_request_id(),
        )
        return _error_response(as_envelope(status=status, message=message, code=error_code))

    @app.errorhandler(MarshmallowValidationError)
    def handle_validation_error(err: MarshmallowValidationError):
        log.warning("ValidationError: request_id=%s", ensure_request_id())
        return _error_response(
            as_envelope(
                status=HTTPStatus.BAD_REQUEST,
                message="Validation failed",
                code="validation_error",
                errors=err.normalized_messages(),
            )
        )

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(err: IntegrityError):
        # Do not leak raw DB error to clients
        log.error("IntegrityError: request_id=%s", ensure_request_id(), exc_info=True)
        return _error_response(
            as_envelope(status=HTTPStatus.CONFLICT, message="Resource conflict", code="conflict")
        )

    @app.errorhandler(OperationalError)
    def handle_operational_error(err: OperationalError):
        # E.g., transient DB connectivity, deadlocks, etc.
        log.error("OperationalError: request_id=%s", ensure_request_id(), exc_info=True)
        return _error_response(
            as_envelope(
                status=HTTPStatus.SERVICE_UNAVAILABLE,
                message="Service temporarily unavailable",
                code="service_unavailable",
            )
        )

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        # Unexpected server-side error; never leak internal details
        log.error("Unhandled exception: request_id=%s", ensure_request_id(), exc_info=True)
        return _error_response(
            as_envelope(
                status=HTTPStatus.INTERNAL_SERVER_ERROR,
                message="Unexpected error",
                code="internal_server_error",
            )
        )

    _register_jwt_callbacks()


def _register_jwt_callbacks() -> None:
    """Render flask-jwt-extended failures with the shared envelope.

    Messages stay generic so clients cannot tell a malformed token from an
    expired one.
    """
    from tubehub.core.extensions import jwt

    def _unauthorized(message: str):
        log.warning("JWT rejected: msg=%s request_id=%s", message, ensure_request_id())
        return _error_response(
            as_envelope(status=HTTPStatus.UNAUTHORIZED, message=message, code="unauthorized")
        )

    @jwt.unauthorized_loader
    def _missing_token(_reason: str):
        return _unauthorized("Unauthorized request")

    @jwt.invalid_token_loader
    def _invalid_token(_reason: str):
        return _unauthorized("Invalid access token")

    @jwt.expired_token_loader
    def _expired_token(_header: dict[str, Any], _payload: dict[str, Any]):
        return _unauthorized("Invalid access token")

    @jwt.token_verification_failed_loader
    def _failed_verification(_header: dict[str, Any], _payload: dict[str, Any]):
        return _unauthorized("Invalid access token")

    @jwt.revoked_token_loader
    def _revoked_token(_header: dict[str, Any], _payload: dict[str, Any]):
        return _unauthorized("Invalid access token")

    @jwt.needs_fresh_token_loader
    def _needs_fresh(_header: dict[str, Any], _payload: dict[str, Any]):
        return _unauthorized("Invalid access token")
