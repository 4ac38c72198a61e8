"""Service layer public API.

This package exposes the essential building blocks for the service layer so that
callers can import from :mod:`journal_api.services` without knowing internal structure.

Re-exports
----------
- Base primitives (from ``journal_api.services._shared.base``)
    * :class:`BaseService`
    * :class:`ServiceContext`

- Tokens (from ``journal_api.services.tokens``)
    * :class:`SigningKeyProvider`, :class:`SigningKey`, :class:`TokenCodec`

- Auth service (from ``journal_api.services.auth``)
    * :class:`AuthService`
    * DTOs: :class:`LoginIn`, :class:`RefreshIn`, :class:`LogoutIn`, :class:`TokenPairOut`

- Delivery (from ``journal_api.services.delivery``)
    * :class:`DeliveryEligibilityEngine`, :class:`DeliveryService`
    * Types: :class:`IntervalMode`, :class:`NotificationPolicy`, :class:`Decision`

- Settings and registration services
"""

from __future__ import annotations

from ._shared.base import BaseService, ServiceContext
from .auth.dto import LoginIn, LogoutIn, RefreshIn, TokenPairOut
from .auth.service import AuthService
from .delivery.dto import ContentOut, DeliveryOut
from .delivery.engine import DeliveryEligibilityEngine
from .delivery.policy import Decision, IntervalMode, NotificationPolicy
from .delivery.service import DeliveryService
from .registration.dto import UserPublicOut, UserRegistrationIn
from .registration.service import UserRegistrationService
from .settings.dto import SettingsOut, SettingsUpdateIn
from .settings.service import SettingsService
from .tokens.codec import TokenClaims, TokenCodec
from .tokens.signing_key import SigningKey, SigningKeyProvider

__all__ = [
    # Base
    "BaseService",
    "ServiceContext",
    # Tokens
    "SigningKey",
    "SigningKeyProvider",
    "TokenClaims",
    "TokenCodec",
    # Auth
    "AuthService",
    "LoginIn",
    "LogoutIn",
    "RefreshIn",
    "TokenPairOut",
    # Delivery
    "ContentOut",
    "Decision",
    "DeliveryEligibilityEngine",
    "DeliveryOut",
    "DeliveryService",
    "IntervalMode",
    "NotificationPolicy",
    # Settings / registration
    "SettingsOut",
    "SettingsService",
    "SettingsUpdateIn",
    "UserPublicOut",
    "UserRegistrationIn",
    "UserRegistrationService",
]
