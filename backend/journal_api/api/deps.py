"""Shared API helpers for request parsing, service wiring and cross-cutting concerns."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from datetime import timedelta
from typing import Any, TypeVar, cast
from zoneinfo import ZoneInfo

from flask import Response, current_app, jsonify, request
from flask_jwt_extended import get_jwt_identity, verify_jwt_in_request

from journal_api.core.errors import BadRequest
from journal_api.core.extensions import get_redis
from journal_api.core.logger import ensure_request_id
from journal_api.infra.redis.redis_refresh_token_store import RedisRefreshTokenStore
from journal_api.infra.sql.stores import (
    SqlContentSelector,
    SqlCredentialVerifier,
    SqlRefreshTokenStore,
    SqlUserSettingsStore,
)
from journal_api.services import (
    AuthService,
    DeliveryEligibilityEngine,
    DeliveryService,
    ServiceContext,
    SettingsService,
    TokenCodec,
    UserRegistrationService,
)
from journal_api.services._shared.ports import RefreshTokenStore

F = TypeVar("F", bound=Callable[..., Any])


def get_json_body() -> dict[str, Any]:
    """Return the JSON object body of the request (``{}`` when absent)."""

    payload = request.get_json(silent=True)
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise BadRequest("Request body must be a JSON object")
    return payload


def require_auth(func: F) -> F:
    """Ensure the request carries a valid JWT access token."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        verify_jwt_in_request(optional=False)
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def current_user_id() -> str:
    """Return the login id of the authenticated caller."""

    return str(get_jwt_identity())


def service_context(actor_id: str | None = None) -> ServiceContext:
    """Build a :class:`ServiceContext` for the current request."""

    return ServiceContext(actor_id=actor_id, request_id=ensure_request_id())


# --------------------------------------------------------------------------- #
# Service wiring
# --------------------------------------------------------------------------- #


def token_codec() -> TokenCodec:
    """Return the process-wide codec built by the application factory."""

    return cast(TokenCodec, current_app.extensions["token_codec"])


def refresh_token_store() -> RefreshTokenStore:
    """Return the refresh token store selected by ``REFRESH_TOKEN_BACKEND``."""

    backend = current_app.config.get("REFRESH_TOKEN_BACKEND", "sql")
    if backend == "redis":
        return RedisRefreshTokenStore(get_redis())
    return SqlRefreshTokenStore()


def build_auth_service() -> AuthService:
    return AuthService(
        codec=token_codec(),
        credentials=SqlCredentialVerifier(),
        refresh_store=refresh_token_store(),
        rotate_refresh_tokens=bool(current_app.config.get("ROTATE_REFRESH_TOKENS", False)),
    )


def build_delivery_service() -> DeliveryService:
    config = current_app.config
    engine = DeliveryEligibilityEngine(
        rearm_interval=timedelta(minutes=int(config.get("DELIVERY_REARM_MINUTES", 180))),
        tz=ZoneInfo(str(config.get("DELIVERY_TIMEZONE", "UTC"))),
    )
    return DeliveryService(
        settings=SqlUserSettingsStore(),
        content=SqlContentSelector(),
        engine=engine,
        category=str(config.get("SCHEDULED_CONTENT_CATEGORY", "SCHEDULED_MESSAGE")),
    )


def build_settings_service() -> SettingsService:
    return SettingsService(ctx=service_context(current_user_id()))


def build_registration_service() -> UserRegistrationService:
    return UserRegistrationService(ctx=service_context())


# --------------------------------------------------------------------------- #
# Responses
# --------------------------------------------------------------------------- #


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
