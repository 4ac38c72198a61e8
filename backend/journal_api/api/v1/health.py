"""Health check endpoint."""

from __future__ import annotations

from flask import Blueprint, current_app
from redis.exceptions import RedisError  # type: ignore[import-untyped]
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from journal_api.api.deps import json_response, timing
from journal_api.core.extensions import db, get_redis

bp = Blueprint("health", __name__)


def _db_status() -> str:
    try:
        db.session.execute(text("SELECT 1"))
    except SQLAlchemyError:  # pragma: no cover - depends on DB backend
        current_app.logger.exception("healthcheck.db_error")
        return "fail"
    return "ok"


def _token_store_status() -> str:
    backend = current_app.config.get("REFRESH_TOKEN_BACKEND", "sql")
    if backend != "redis":
        return _db_status()
    try:
        get_redis().ping()
    except (RedisError, RuntimeError):  # pragma: no cover - needs a live Redis
        current_app.logger.exception("healthcheck.redis_error")
        return "fail"
    return "ok"


@bp.get("/health")
@timing
def healthcheck():
    """Return application, database and refresh-token store health."""

    payload = {
        "status": "ok",
        "db": _db_status(),
        "token_store": _token_store_status(),
        "version": current_app.config.get("APP_VERSION", "dev"),
    }
    return json_response(payload)
