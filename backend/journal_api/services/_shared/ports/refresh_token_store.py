from __future__ import annotations

import itertools
import threading
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Protocol

from journal_api.services._shared.clock import as_utc


@dataclass(frozen=True, slots=True)
class RefreshTokenRecord:
    """
    Read-model for the single stored refresh token of a user.

    :ivar id: Stable record identity (kept across upserts).
    :ivar user_id: Owning user identifier (plain lookup key, unique).
    :ivar token: Encoded refresh token (unique).
    :ivar expires_at: Absolute expiration (UTC).
    """

    id: int | str
    user_id: str
    token: str
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        """Return ``True`` when ``expires_at`` is at or before ``now``."""
        return as_utc(self.expires_at) <= as_utc(now)


class RefreshTokenStore(Protocol):
    """
    Persistence port for refresh tokens, at most one per user.

    ``upsert_for_user`` MUST be atomic with respect to concurrent calls for the
    same user: the record for ``user_id`` is replaced in place (same ``id``,
    new token and expiry) and the previous token value stops resolving.
    """

    def find_by_token(self, token: str) -> RefreshTokenRecord | None:
        """Return the record holding ``token``, if any."""

    def find_by_user(self, user_id: str) -> RefreshTokenRecord | None:
        """Return the record owned by ``user_id``, if any."""

    def upsert_for_user(self, user_id: str, token: str, expires_at: datetime) -> RefreshTokenRecord:
        """Create or replace the record for ``user_id``."""

    def delete_by_user(self, user_id: str) -> None:
        """Delete the record for ``user_id``; no-op when absent."""

    def delete(self, record: RefreshTokenRecord) -> None:
        """Delete ``record``; no-op when it no longer exists."""


class InMemoryRefreshTokenStore(RefreshTokenStore):
    """
    In-memory refresh token store.

    .. note::
       Uses a threading lock so upserts are atomic within one process.
    """

    def __init__(self) -> None:
        self._by_user: dict[str, RefreshTokenRecord] = {}
        self._user_by_token: dict[str, str] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def find_by_token(self, token: str) -> RefreshTokenRecord | None:
        with self._lock:
            user_id = self._user_by_token.get(token)
            return self._by_user.get(user_id) if user_id is not None else None

    def find_by_user(self, user_id: str) -> RefreshTokenRecord | None:
        with self._lock:
            return self._by_user.get(user_id)

    def upsert_for_user(self, user_id: str, token: str, expires_at: datetime) -> RefreshTokenRecord:
        with self._lock:
            current = self._by_user.get(user_id)
            if current is not None:
                self._user_by_token.pop(current.token, None)
                record = replace(current, token=token, expires_at=as_utc(expires_at))
            else:
                record = RefreshTokenRecord(
                    id=next(self._ids),
                    user_id=user_id,
                    token=token,
                    expires_at=as_utc(expires_at),
                )
            self._by_user[user_id] = record
            self._user_by_token[token] = user_id
            return record

    def delete_by_user(self, user_id: str) -> None:
        with self._lock:
            current = self._by_user.pop(user_id, None)
            if current is not None:
                self._user_by_token.pop(current.token, None)

    def delete(self, record: RefreshTokenRecord) -> None:
        with self._lock:
            current = self._by_user.get(record.user_id)
            # only drop the stored record if it still is the one presented
            if current is not None and current.token == record.token:
                del self._by_user[record.user_id]
                self._user_by_token.pop(current.token, None)

    def __len__(self) -> int:
        return len(self._by_user)
