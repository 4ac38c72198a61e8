"""Application factory wiring Flask extensions and blueprints."""

from __future__ import annotations

from datetime import timedelta

from flask import Flask

from journal_api.core.config import BaseConfig, get_config
from journal_api.core.logger import configure_logging, init_app as init_logging
from journal_api.services.tokens.codec import TokenCodec
from journal_api.services.tokens.signing_key import SigningKeyProvider


def init_tokens(app: Flask) -> TokenCodec:
    """
    Derive the signing key once and build the process-wide :class:`TokenCodec`.

    ``flask-jwt-extended`` is pointed at the same key bytes so access tokens
    issued by the codec authenticate requests.
    """
    provider = SigningKeyProvider.from_secret(app.config["JWT_SECRET_KEY"])
    app.config["JWT_SECRET_KEY"] = provider.key.material
    app.config["JWT_ALGORITHM"] = app.config.get("JWT_ALGORITHM", "HS256")
    app.config["JWT_DECODE_ALGORITHMS"] = [app.config["JWT_ALGORITHM"]]
    app.config["JWT_ACCESS_TOKEN_EXPIRES"] = timedelta(seconds=app.config["ACCESS_TOKEN_TTL_SECONDS"])

    codec = TokenCodec(
        key=provider.key,
        access_ttl=timedelta(seconds=app.config["ACCESS_TOKEN_TTL_SECONDS"]),
        refresh_ttl=timedelta(seconds=app.config["REFRESH_TOKEN_TTL_SECONDS"]),
        algorithm=app.config["JWT_ALGORITHM"],
    )
    app.extensions["token_codec"] = codec
    return codec


def create_app(
    config: str | type[BaseConfig] | object | None = None,
    *,
    instance_relative_config: bool = True,
    instance_config_filename: str = "config.py",
) -> Flask:
    """Build and configure the Flask application."""

    app = Flask(__name__, instance_relative_config=instance_relative_config)

    app.config.from_object(get_config() if config is None else config)
    if instance_relative_config and instance_config_filename:
        app.config.from_pyfile(instance_config_filename, silent=True)

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    # Signing key must exist before JWTManager reads its config
    init_tokens(app)

    from journal_api.core import proxy

    proxy.init_app(app)

    from journal_api.core import extensions

    extensions.init_app(app)

    init_logging(app)

    from journal_api.core import cors

    cors.init_app(app)

    from journal_api.api import init_app as init_api

    init_api(app)

    from journal_api.core import errors

    errors.init_app(app)

    from journal_api import cli as app_cli

    app_cli.init_app(app)

    return app
