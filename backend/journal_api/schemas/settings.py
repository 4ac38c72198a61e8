"""Notification settings schemas."""

from __future__ import annotations

from typing import Any

from marshmallow import Schema, ValidationError, fields, validate, validates_schema

from journal_api.services.delivery.policy import IntervalMode

_MODES = [mode.value for mode in IntervalMode.selectable()]


class SettingsSchema(Schema):
    """Current notification settings of the authenticated user."""

    notification_interval = fields.String(required=True)
    notification_time = fields.Time(format="%H:%M", allow_none=True)
    in_app_enabled = fields.Boolean(required=True)
    push_enabled = fields.Boolean(required=True)
    last_delivered_at = fields.DateTime(allow_none=True)


class SettingsUpdateSchema(Schema):
    """Partial update; omitted fields keep their stored value."""

    notification_interval = fields.String(validate=validate.OneOf(_MODES))
    notification_time = fields.Time(format="%H:%M", allow_none=True)
    in_app_enabled = fields.Boolean()
    push_enabled = fields.Boolean()

    @validates_schema
    def require_any(self, data: dict[str, Any], **_: Any) -> None:
        if not data:
            raise ValidationError("At least one setting must be provided.")
