"""CORS policy for the JSON API."""

from __future__ import annotations

from flask import Flask
from flask_cors import CORS

from journal_api.core.logger import REQUEST_ID_HEADER


def parse_origins(raw: str | None) -> list[str]:
    """Split a comma separated ``CORS_ORIGINS`` value; blank entries are dropped."""
    return [origin.strip() for origin in (raw or "").split(",") if origin.strip()]


def init_app(app: Flask) -> None:
    """
    Apply CORS to every route under ``API_BASE_PREFIX``.

    An empty origin list or ``*`` allows any origin; credentials are then
    refused, as browsers require. Clients send tokens in ``Authorization`` and
    may read ``X-Request-ID`` back.
    """
    origins = parse_origins(app.config.get("CORS_ORIGINS"))
    allow_any = not origins or origins == ["*"]
    prefix = app.config.get("API_BASE_PREFIX", "/api").rstrip("/")

    CORS(
        app,
        resources={rf"{prefix}/*": {"origins": "*" if allow_any else origins}},
        supports_credentials=not allow_any,
        allow_headers=["Authorization", "Content-Type", REQUEST_ID_HEADER],
        expose_headers=[REQUEST_ID_HEADER],
        max_age=app.config.get("CORS_MAX_AGE", 600),
    )
