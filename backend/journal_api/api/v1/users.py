"""Endpoints for the authenticated user's own resources."""

from __future__ import annotations

from flask import Blueprint

from journal_api.api.deps import (
    build_settings_service,
    current_user_id,
    get_json_body,
    json_response,
    require_auth,
    timing,
)
from journal_api.schemas import SettingsSchema, SettingsUpdateSchema
from journal_api.services import SettingsUpdateIn

bp = Blueprint("users", __name__, url_prefix="/users")

settings_schema = SettingsSchema()
settings_update_schema = SettingsUpdateSchema()


@bp.get("/me/settings")
@require_auth
@timing
def get_settings():
    """Return the caller's notification settings."""

    settings = build_settings_service().get(current_user_id())
    return json_response({"data": settings_schema.dump(settings)})


@bp.put("/me/settings")
@require_auth
@timing
def update_settings():
    """Partially update the caller's notification settings."""

    payload = settings_update_schema.load(get_json_body())
    dto = SettingsUpdateIn(user_id=current_user_id(), **payload)
    settings = build_settings_service().update(dto)
    return json_response({"data": settings_schema.dump(settings)})
