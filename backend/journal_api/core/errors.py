"""Centralized JSON (RFC 7807) error handling for the API."""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from flask import Flask, Response, jsonify, request
from marshmallow import ValidationError
from sqlalchemy.exc import IntegrityError, OperationalError
from werkzeug.exceptions import HTTPException

from journal_api.core.logger import ensure_request_id
from journal_api.services._shared.errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ServiceError,
)

log = logging.getLogger(__name__)

#: Single client-facing message for every authentication failure. The precise
#: kind (wrong password, unknown refresh token, expired token...) is logged only.
AUTH_FAILED_MESSAGE = "Authentication required. Please sign in again."


def _http_status_to_code(status_code: int) -> str:
    """Map common HTTP status codes to canonical, stable error codes."""
    mapping = {
        400: "bad_request",
        401: "unauthorized",
        403: "forbidden",
        404: "not_found",
        405: "method_not_allowed",
        409: "conflict",
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
        "status": status,
        "detail": message,
        "instance": request.path if request else None,
        "code": code,
    }
    if details:
        problem["details"] = details
    problem["request_id"] = ensure_request_id()
    return problem


def _problem_response(problem: dict[str, Any], status: int) -> tuple[Response, int]:
    resp = jsonify(problem)
    resp.mimetype = "application/problem+json"
    return resp, status


def unauthorized_response() -> tuple[Response, int]:
    """Return the uniform 401 problem used for all authentication failures."""
    return _problem_response(
        _as_problem(status=HTTPStatus.UNAUTHORIZED, code="unauthorized", message=AUTH_FAILED_MESSAGE),
        HTTPStatus.UNAUTHORIZED,
    )


class APIError(Exception):
    """
    Represent a JSON-serializable API error raised from the HTTP layer.

    Parameters
    ----------
    message : str
        Human-readable description presented to clients.
    status_code : int, optional
        HTTP status code to return. Defaults to ``400``.
    code : str, optional
        Machine-readable identifier. Defaults to ``"bad_request"``.
    details : dict[str, Any] | None, optional
        Optional structured payload included in the response body.
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

    def to_problem(self) -> dict[str, Any]:
        return _as_problem(
            status=self.status_code,
            code=self.code,
            message=self.message,
            details=self.details or None,
        )


class BadRequest(APIError):
    """400 for malformed requests the schemas cannot express."""

    def __init__(self, message: str = "Bad request") -> None:
        super().__init__(message, status_code=HTTPStatus.BAD_REQUEST, code="bad_request")


def _service_error_status(err: ServiceError) -> tuple[int, str]:
    if isinstance(err, NotFoundError):
        return HTTPStatus.NOT_FOUND, "not_found"
    if isinstance(err, ConflictError):
        return HTTPStatus.CONFLICT, "conflict"
    return HTTPStatus.BAD_REQUEST, "bad_request"


def init_jwt_handlers(jwt_manager: Any) -> None:
    """
    Route every ``flask-jwt-extended`` rejection to the uniform 401 problem.

    :param jwt_manager: The application's :class:`flask_jwt_extended.JWTManager`.
    """

    @jwt_manager.unauthorized_loader
    def _missing_token(reason: str):
        log.warning("auth.header.missing", extra={"kind": "missing_token", "reason": reason})
        return unauthorized_response()

    @jwt_manager.invalid_token_loader
    def _invalid_token(reason: str):
        log.warning("auth.header.invalid", extra={"kind": "malformed", "reason": reason})
        return unauthorized_response()

    @jwt_manager.expired_token_loader
    def _expired_token(jwt_header: dict, jwt_payload: dict):
        log.warning(
            "auth.header.expired",
            extra={"kind": "expired", "user_id": jwt_payload.get("sub")},
        )
        return unauthorized_response()

    @jwt_manager.token_verification_failed_loader
    def _verification_failed(jwt_header: dict, jwt_payload: dict):
        log.warning("auth.header.rejected", extra={"kind": "verification_failed"})
        return unauthorized_response()


def init_app(app: Flask) -> None:
    """
    Attach JSON error handlers to the Flask app.

    Notes
    -----
    - Guarantees RFC 7807 responses for all handled errors.
    - Ensures a correlation ``request_id`` is present on every error.
    - Emits 5xx with ``exc_info`` for traceability; 4xx as warnings.
    """
    from journal_api.core.extensions import jwt

    init_jwt_handlers(jwt)

    @app.errorhandler(AuthenticationError)
    def handle_authentication_error(err: AuthenticationError):
        log.warning("auth.rejected", extra={"kind": err.kind})
        return unauthorized_response()

    @app.errorhandler(ServiceError)
    def handle_service_error(err: ServiceError):
        status, code = _service_error_status(err)
        problem = _as_problem(status=status, code=code, message=str(err))
        log.warning("ServiceError: code=%s status=%s msg=%s", code, status, err)
        return _problem_response(problem, status)

    @app.errorhandler(APIError)
    def handle_api_error(err: APIError):
        problem = err.to_problem()
        level = log.error if err.status_code >= 500 else log.warning
        level("APIError: code=%s status=%s msg=%s", err.code, err.status_code, err.message)
        return _problem_response(problem, err.status_code)

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        status = int(err.code or HTTPStatus.INTERNAL_SERVER_ERROR)
        error_code = _http_status_to_code(status)
        # Werkzeug may provide HTML-ish description; normalize for clients
        message = (err.description or error_code.replace("_", " ").capitalize()).strip()
        if status == HTTPStatus.NOT_FOUND and request:
            message = f"Route '{request.path}' not found"
        problem = _as_problem(status=status, code=error_code, message=message)
        level = log.error if status >= 500 else log.warning
        level("HTTPException: code=%s status=%s detail=%s", error_code, status, message)
        return _problem_response(problem, status)

    @app.errorhandler(ValidationError)
    def handle_validation_error(err: ValidationError):
        problem = _as_problem(
            status=HTTPStatus.UNPROCESSABLE_ENTITY,
            code="validation_error",
            message="Validation failed",
            details={"errors": err.messages},
        )
        log.warning("ValidationError: request_id=%s", problem.get("request_id"))
        return _problem_response(problem, HTTPStatus.UNPROCESSABLE_ENTITY)

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(err: IntegrityError):
        # Do not leak raw DB error to clients
        log.error("IntegrityError", exc_info=True)
        return _problem_response(
            _as_problem(status=HTTPStatus.CONFLICT, code="conflict", message="Resource conflict"),
            HTTPStatus.CONFLICT,
        )

    @app.errorhandler(OperationalError)
    def handle_operational_error(err: OperationalError):
        log.error("OperationalError", exc_info=True)
        return _problem_response(
            _as_problem(
                status=HTTPStatus.SERVICE_UNAVAILABLE,
                code="service_unavailable",
                message="Service temporarily unavailable",
            ),
            HTTPStatus.SERVICE_UNAVAILABLE,
        )

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        # Unexpected server-side error; never leak internal details
        log.error("Unhandled exception", exc_info=True)
        return _problem_response(
            _as_problem(
                status=HTTPStatus.INTERNAL_SERVER_ERROR,
                code="internal_server_error",
                message="Unexpected error",
            ),
            HTTPStatus.INTERNAL_SERVER_ERROR,
        )
