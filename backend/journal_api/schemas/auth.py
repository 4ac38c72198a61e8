"""Authentication-related Marshmallow schemas."""

from __future__ import annotations

from typing import Any

from marshmallow import Schema, fields, pre_load, validate


class SignupSchema(Schema):
    """Input payload for account registration."""

    login_id = fields.String(required=True, validate=validate.Length(min=3, max=100))
    email = fields.Email(required=True, validate=validate.Length(max=254))
    username = fields.String(required=True, validate=validate.Length(min=1, max=50))
    password = fields.String(required=True, validate=validate.Length(min=8, max=128))

    @pre_load
    def strip_identifiers(self, data: dict[str, Any], **_: Any) -> dict[str, Any]:
        if not isinstance(data, dict):
            return data
        for key in ("login_id", "email", "username"):
            value = data.get(key)
            if isinstance(value, str):
                data[key] = value.strip()
        return data


class LoginSchema(Schema):
    """Input payload for authenticating a user."""

    user_id = fields.String(required=True, validate=validate.Length(min=1, max=100))
    password = fields.String(required=True, validate=validate.Length(min=1, max=128))


class RefreshTokenSchema(Schema):
    """Input payload carrying the refresh token to exchange."""

    refresh_token = fields.String(required=True, validate=validate.Length(min=1, max=1024))


class TokenPairSchema(Schema):
    """Response payload containing the issued tokens."""

    access_token = fields.String(required=True)
    refresh_token = fields.String(required=True)
    user_id = fields.String(required=True)
    token_type = fields.String(dump_default="Bearer")


class UserPublicSchema(Schema):
    """Public representation of a registered user."""

    id = fields.Integer(required=True)
    login_id = fields.String(required=True)
    email = fields.Email(required=True)
    username = fields.String(required=True)
