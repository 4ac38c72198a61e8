"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and should never import or depend
on Flask, HTTP, or SQLAlchemy directly. They serve as stable contracts between
repositories, token handling, and application services.

The translation to HTTP responses (RFC 7807) is handled by
``journal_api/core/errors.py``.
"""

from __future__ import annotations

from dataclasses import dataclass

# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - They can be safely raised from repositories, adapters, or domain logic.
    - The error layer later translates them to ``APIError``.
    """

    pass


# --------------------------------------------------------------------------- #
# Lookup / consistency errors
# --------------------------------------------------------------------------- #


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found in the repository.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str | int
    """

    entity: str
    key: str | int

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.entity} not found: {self.key}"


class UserNotFoundError(NotFoundError):
    """Raised by collaborators when a user identifier does not resolve."""

    def __init__(self, user_id: str) -> None:
        super().__init__("User", user_id)


@dataclass(slots=True)
class ConflictError(ServiceError):
    """
    Raised when a unique constraint or business rule conflict occurs.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param detail: Short human-readable explanation.
    :type detail: str
    """

    entity: str
    detail: str

    def __str__(self) -> str:  # pragma: no cover
        return f"Conflict on {self.entity}: {self.detail}"


# --------------------------------------------------------------------------- #
# Authentication errors
# --------------------------------------------------------------------------- #


class AuthenticationError(ServiceError):
    """
    Base class for every "not authenticated" outcome.

    ``kind`` is a stable diagnostic label meant for logs. Clients always get
    the same message regardless of the kind, so a failed login never reveals
    whether the account exists.
    """

    kind = "authentication_failed"

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message)


class InvalidCredentialsError(AuthenticationError):
    """Raised when the credential verifier rejects a login attempt."""

    kind = "invalid_credentials"


class RefreshTokenNotFoundError(AuthenticationError):
    """Raised when a presented refresh token has no stored record."""

    kind = "refresh_token_not_found"


class RefreshTokenExpiredError(AuthenticationError):
    """Raised when a stored refresh token is past its expiry (record is deleted)."""

    kind = "refresh_token_expired"


class TokenError(AuthenticationError):
    """Base class for signed-token verification failures."""

    kind = "token_invalid"


class InvalidSignatureError(TokenError):
    """Signature does not match the signing key."""

    kind = "invalid_signature"


class TokenExpiredError(TokenError):
    """Token ``exp`` is at or before the verification instant."""

    kind = "expired"


class MalformedTokenError(TokenError):
    """Token cannot be parsed or lacks required claims."""

    kind = "malformed"


class UnsupportedTokenError(TokenError):
    """Token uses an algorithm or type the verifier does not accept."""

    kind = "unsupported_format"


# --------------------------------------------------------------------------- #
# Internal errors (never surfaced)
# --------------------------------------------------------------------------- #


class PolicyMalformedError(ServiceError):
    """
    Raised while reading an inconsistent notification policy.

    The eligibility engine absorbs it and answers "no delivery"; it must never
    reach the HTTP layer.
    """


# --------------------------------------------------------------------------- #
# Validation errors
# --------------------------------------------------------------------------- #


class InvalidSettingsError(ServiceError):
    """Raised when a settings update would leave an inconsistent policy."""
