# journal_api/services/auth/service.py
from __future__ import annotations

import logging

from journal_api.services._shared.clock import Clock, utc_now, whole_seconds
from journal_api.services._shared.errors import (
    InvalidCredentialsError,
    RefreshTokenExpiredError,
    RefreshTokenNotFoundError,
)
from journal_api.services._shared.ports import CredentialVerifier, RefreshTokenStore
from journal_api.services.auth.dto import LoginIn, LogoutIn, RefreshIn, TokenPairOut
from journal_api.services.tokens.codec import TokenCodec

log = logging.getLogger(__name__)


class AuthService:
    """
    Authentication lifecycle service (login / refresh / logout).

    Tokens are issued by a :class:`TokenCodec` built once at start-up; refresh
    tokens are persisted through a :class:`RefreshTokenStore` that keeps a
    single record per user, upserted on every login.

    :param codec: Token codec holding the signing key.
    :param credentials: Password verifier.
    :param refresh_store: Refresh token persistence.
    :param clock: Source of "now".
    :param rotate_refresh_tokens: Issue and persist a new refresh token on
        every refresh instead of returning the presented one.
    """

    def __init__(
        self,
        *,
        codec: TokenCodec,
        credentials: CredentialVerifier,
        refresh_store: RefreshTokenStore,
        clock: Clock = utc_now,
        rotate_refresh_tokens: bool = False,
    ) -> None:
        self.codec = codec
        self.credentials = credentials
        self.refresh_store = refresh_store
        self.clock = clock
        self.rotate_refresh_tokens = rotate_refresh_tokens

    # ------------------------------------------------------------------ #
    # Login
    # ------------------------------------------------------------------ #

    def login(self, dto: LoginIn) -> TokenPairOut:
        """
        Authenticate credentials and issue a fresh token pair.

        Any refresh token previously issued to the user stops resolving.

        :param dto: Login input.
        :returns: Access/Refresh token pair.
        :raises InvalidCredentialsError: Unknown user or wrong password (same error).
        """
        user_id = (dto.user_id or "").strip()
        if not user_id or not self.credentials.verify(user_id, dto.password):
            log.warning("auth.login.failed", extra={"user_id": user_id, "kind": "invalid_credentials"})
            raise InvalidCredentialsError()

        now = whole_seconds(self.clock())
        access = self.codec.issue_access_token(user_id, now)
        refresh = self.codec.issue_refresh_token(user_id, now)
        self.refresh_store.upsert_for_user(user_id, refresh, now + self.codec.refresh_ttl)

        log.info("auth.login.ok", extra={"user_id": user_id})
        return TokenPairOut(access_token=access, refresh_token=refresh, user_id=user_id)

    # ------------------------------------------------------------------ #
    # Refresh
    # ------------------------------------------------------------------ #

    def refresh(self, dto: RefreshIn) -> TokenPairOut:
        """
        Exchange a stored refresh token for a new access token.

        The stored record, not the token's own claims, decides validity: an
        unknown value fails even when correctly signed, and an expired record
        is deleted before failing.

        :param dto: Refresh input.
        :returns: New access token and the refresh token to keep using.
        :raises RefreshTokenNotFoundError: The value is not stored.
        :raises RefreshTokenExpiredError: The stored record is past its expiry.
        """
        presented = (dto.refresh_token or "").strip()
        record = self.refresh_store.find_by_token(presented) if presented else None
        if record is None:
            log.warning("auth.refresh.not_found", extra={"kind": "refresh_token_not_found"})
            raise RefreshTokenNotFoundError()

        now = whole_seconds(self.clock())
        if record.is_expired(now):
            self.refresh_store.delete(record)
            log.warning(
                "auth.refresh.expired",
                extra={"user_id": record.user_id, "kind": "refresh_token_expired"},
            )
            raise RefreshTokenExpiredError()

        access = self.codec.issue_access_token(record.user_id, now)
        refresh = record.token
        if self.rotate_refresh_tokens:
            refresh = self.codec.issue_refresh_token(record.user_id, now)
            self.refresh_store.upsert_for_user(record.user_id, refresh, now + self.codec.refresh_ttl)

        log.info("auth.refresh.ok", extra={"user_id": record.user_id})
        return TokenPairOut(access_token=access, refresh_token=refresh, user_id=record.user_id)

    # ------------------------------------------------------------------ #
    # Logout
    # ------------------------------------------------------------------ #

    def logout(self, dto: LogoutIn) -> None:
        """
        Delete the stored refresh token of the caller. Idempotent.

        Access tokens already issued stay valid until they expire.
        """
        self.refresh_store.delete_by_user(dto.user_id)
        log.info("auth.logout.ok", extra={"user_id": dto.user_id})
