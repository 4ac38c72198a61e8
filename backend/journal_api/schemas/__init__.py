"""Convenience exports for application schemas."""

from __future__ import annotations

from .auth import (
    LoginSchema,
    RefreshTokenSchema,
    SignupSchema,
    TokenPairSchema,
    UserPublicSchema,
)
from .question import DeliveryCheckSchema, QuestionSchema
from .settings import SettingsSchema, SettingsUpdateSchema

__all__ = [
    "LoginSchema",
    "RefreshTokenSchema",
    "SignupSchema",
    "TokenPairSchema",
    "UserPublicSchema",
    "DeliveryCheckSchema",
    "QuestionSchema",
    "SettingsSchema",
    "SettingsUpdateSchema",
]
