"""
journal_api.services._shared.ports
==================================

Collection of *ports* (hexagonal interfaces) consumed by the token lifecycle
and delivery services.

Modules
-------
- :mod:`refresh_token_store`:
    Defines :class:`~.RefreshTokenStore` and :class:`~.RefreshTokenRecord`,
    one refresh token per user, upserted by user id.

- :mod:`credential_verifier`:
    Defines :class:`~.CredentialVerifier` for password checks.

- :mod:`user_settings_store`:
    Defines :class:`~.UserSettingsStore`, load/save of a notification policy.

- :mod:`content_selector`:
    Defines :class:`~.ContentSelector` and the :class:`~.Content` it returns.

Every port ships with an in-memory implementation used by unit tests.
Concrete adapters (SQLAlchemy, Redis) live under ``journal_api.infra``.
"""

from __future__ import annotations

from .content_selector import Content, ContentSelector, InMemoryContentSelector
from .credential_verifier import CredentialVerifier, InMemoryCredentialVerifier
from .refresh_token_store import (
    InMemoryRefreshTokenStore,
    RefreshTokenRecord,
    RefreshTokenStore,
)
from .user_settings_store import InMemoryUserSettingsStore, UserSettingsStore

__all__ = [
    "Content",
    "ContentSelector",
    "CredentialVerifier",
    "InMemoryContentSelector",
    "InMemoryCredentialVerifier",
    "InMemoryRefreshTokenStore",
    "InMemoryUserSettingsStore",
    "RefreshTokenRecord",
    "RefreshTokenStore",
    "UserSettingsStore",
]
