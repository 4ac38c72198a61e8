"""
Signed token codec (PyJWT, HS256).

Access and refresh tokens share one shape: ``sub``, ``iat``, ``exp``, ``jti`` and a
``type`` claim (``"access"`` / ``"refresh"``). The ``type`` claim keeps the
tokens readable by ``flask-jwt-extended``, which guards the HTTP layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import uuid4

import jwt

from journal_api.services._shared.clock import Clock, as_utc, utc_now
from journal_api.services._shared.errors import (
    InvalidSignatureError,
    MalformedTokenError,
    TokenExpiredError,
    UnsupportedTokenError,
)
from journal_api.services.tokens.signing_key import SigningKey

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"

_REQUIRED_CLAIMS = ["sub", "iat", "exp"]


@dataclass(frozen=True, slots=True)
class TokenClaims:
    """
    Verified token content.

    :ivar subject: User identifier carried in ``sub``.
    :ivar issued_at: ``iat`` as an aware UTC datetime.
    :ivar expires_at: ``exp`` as an aware UTC datetime.
    :ivar token_type: ``access`` or ``refresh``.
    """

    subject: str
    issued_at: datetime
    expires_at: datetime
    token_type: str


class TokenCodec:
    """
    Create and verify self-contained signed tokens.

    The codec is stateless apart from the injected key and lifetimes; it never
    touches storage.

    :param key: Signing key derived at start-up.
    :param access_ttl: Access token lifetime.
    :param refresh_ttl: Refresh token lifetime.
    :param algorithm: JWS algorithm, the only one accepted on verification.
    :param clock: Source of "now" when callers do not pass one.
    """

    def __init__(
        self,
        *,
        key: SigningKey,
        access_ttl: timedelta,
        refresh_ttl: timedelta,
        algorithm: str = "HS256",
        clock: Clock = utc_now,
    ) -> None:
        if access_ttl <= timedelta(0) or refresh_ttl <= timedelta(0):
            raise ValueError("Token lifetimes must be positive.")
        self._key = key
        self.access_ttl = access_ttl
        self.refresh_ttl = refresh_ttl
        self.algorithm = algorithm
        self._clock = clock

    # ------------------------------------------------------------------ #
    # Issuance
    # ------------------------------------------------------------------ #

    def issue_access_token(self, subject: str, now: datetime | None = None) -> str:
        """Issue an access token for ``subject`` valid for ``access_ttl``."""
        return self._issue(subject, ACCESS_TOKEN_TYPE, self.access_ttl, now)

    def issue_refresh_token(self, subject: str, now: datetime | None = None) -> str:
        """Issue a refresh token for ``subject`` valid for ``refresh_ttl``."""
        return self._issue(subject, REFRESH_TOKEN_TYPE, self.refresh_ttl, now)

    def _issue(self, subject: str, token_type: str, ttl: timedelta, now: datetime | None) -> str:
        if not isinstance(subject, str) or not subject:
            raise ValueError("Token subject must be a non-empty string.")
        issued_at = int(as_utc(now or self._clock()).timestamp())
        payload: dict[str, Any] = {
            "sub": subject,
            "iat": issued_at,
            "exp": issued_at + int(ttl.total_seconds()),
            "type": token_type,
            # distinct value per issuance, even within the same second
            "jti": uuid4().hex,
        }
        return jwt.encode(payload, self._key.material, algorithm=self.algorithm)

    # ------------------------------------------------------------------ #
    # Verification
    # ------------------------------------------------------------------ #

    def verify(
        self,
        token: str,
        *,
        now: datetime | None = None,
        expected_type: str | None = None,
    ) -> TokenClaims:
        """
        Verify signature, shape and expiry of ``token``.

        :param token: Encoded token.
        :param now: Verification instant (defaults to the codec clock).
        :param expected_type: When given, the ``type`` claim must match.
        :raises InvalidSignatureError: Signature mismatch.
        :raises TokenExpiredError: ``exp`` at or before ``now``.
        :raises MalformedTokenError: Unparsable token or missing claims.
        :raises UnsupportedTokenError: Algorithm or token type not accepted.
        """
        claims = self._decode(token, expected_type=expected_type)
        instant = as_utc(now or self._clock())
        if claims.expires_at <= instant:
            raise TokenExpiredError("Token has expired")
        return claims

    def subject_of(self, token: str) -> str:
        """
        Return the subject of a correctly signed token, expired or not.

        :raises InvalidSignatureError | MalformedTokenError | UnsupportedTokenError:
        """
        return self._decode(token).subject

    def _decode(self, token: str, *, expected_type: str | None = None) -> TokenClaims:
        if not isinstance(token, str) or not token.strip():
            raise MalformedTokenError("Token is empty")

        try:
            header = jwt.get_unverified_header(token)
        except jwt.DecodeError as exc:
            raise MalformedTokenError("Token cannot be parsed") from exc
        typ = header.get("typ")
        if typ is not None and str(typ).upper() != "JWT":
            raise UnsupportedTokenError(f"Unsupported token media type: {typ}")

        try:
            payload = jwt.decode(
                token,
                self._key.material,
                algorithms=[self.algorithm],
                options={
                    "require": _REQUIRED_CLAIMS,
                    # expiry is checked against the injected clock
                    "verify_exp": False,
                    "verify_iat": False,
                    "verify_nbf": False,
                },
            )
        except jwt.InvalidAlgorithmError as exc:
            raise UnsupportedTokenError("Token algorithm is not accepted") from exc
        except jwt.InvalidSignatureError as exc:
            raise InvalidSignatureError("Token signature does not match") from exc
        except jwt.DecodeError as exc:
            raise MalformedTokenError("Token cannot be parsed") from exc
        except jwt.InvalidTokenError as exc:
            raise MalformedTokenError(f"Token claims are invalid: {exc}") from exc

        return self._to_claims(payload, expected_type)

    @staticmethod
    def _to_claims(payload: dict[str, Any], expected_type: str | None) -> TokenClaims:
        subject = payload.get("sub")
        if not isinstance(subject, str) or not subject:
            raise MalformedTokenError("Token subject is missing")
        try:
            iat = int(payload["iat"])
            exp = int(payload["exp"])
        except (TypeError, ValueError) as exc:
            raise MalformedTokenError("Token timestamps are not integers") from exc

        token_type = str(payload.get("type", ACCESS_TOKEN_TYPE))
        if token_type not in (ACCESS_TOKEN_TYPE, REFRESH_TOKEN_TYPE):
            raise UnsupportedTokenError(f"Unsupported token type: {token_type}")
        if expected_type is not None and token_type != expected_type:
            raise UnsupportedTokenError(f"Expected a {expected_type} token")

        return TokenClaims(
            subject=subject,
            issued_at=datetime.fromtimestamp(iat, tz=UTC),
            expires_at=datetime.fromtimestamp(exp, tz=UTC),
            token_type=token_type,
        )
