"""Flask extension singletons and their start-up wiring."""

from __future__ import annotations

import redis  # type: ignore[import-untyped]
from flask import Flask, current_app
from flask_jwt_extended import JWTManager
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from redis.exceptions import RedisError  # type: ignore[import-untyped]
from sqlalchemy import MetaData

REDIS_EXTENSION_KEY = "redis_client"

# Constraint names must be stable for Alembic batch migrations on SQLite
NAMING_CONVENTION = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

db: SQLAlchemy = SQLAlchemy(
    session_options={"autoflush": False},
    metadata=MetaData(naming_convention=NAMING_CONVENTION),
)
migrate = Migrate(render_as_batch=True)
jwt = JWTManager()


def init_redis(app: Flask) -> redis.Redis | None:
    """
    Connect the refresh-token Redis client when that backend is selected.

    :param app: Application being configured.
    :returns: The connected client, or ``None`` for the SQL backend.
    :raises RuntimeError: ``REDIS_URL`` missing or the server unreachable.
    """
    app.extensions.pop(REDIS_EXTENSION_KEY, None)
    if app.config.get("REFRESH_TOKEN_BACKEND") != "redis":
        return None

    redis_url = app.config.get("REDIS_URL")
    if not redis_url:
        raise RuntimeError("REFRESH_TOKEN_BACKEND=redis requires REDIS_URL.")
    client = redis.Redis.from_url(redis_url)
    try:
        client.ping()
    except RedisError as exc:
        raise RuntimeError(f"Failed to connect to Redis at {redis_url!r}") from exc
    app.extensions[REDIS_EXTENSION_KEY] = client
    return client


def init_app(app: Flask) -> None:
    """
    Bind the database, migrations, JWT guard and optional Redis to ``app``.

    Models are imported here so the metadata Alembic autogenerates from
    contains every table.
    """
    db.init_app(app)

    from journal_api import models as _models  # noqa: F401

    migrate.init_app(app, db)
    jwt.init_app(app)
    init_redis(app)


def get_redis() -> redis.Redis:
    """Return the Redis client of the current application."""
    client = current_app.extensions.get(REDIS_EXTENSION_KEY)
    if client is None:
        raise RuntimeError("Redis client is not initialized; REFRESH_TOKEN_BACKEND is not 'redis'.")
    return client
