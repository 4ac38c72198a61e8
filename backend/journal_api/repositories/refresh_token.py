"""Refresh token repository (one row per user)."""

from __future__ import annotations

from datetime import datetime
from typing import cast

from sqlalchemy import delete, select

from journal_api.models.refresh_token import RefreshToken
from journal_api.repositories.base import BaseRepository


class RefreshTokenRepository(BaseRepository[RefreshToken]):
    """Persistence-only repository for :class:`RefreshToken`."""

    model = RefreshToken

    def get_by_token(self, token: str) -> RefreshToken | None:
        stmt = select(RefreshToken).where(RefreshToken.token == token)
        return cast(RefreshToken | None, self.session.execute(stmt).scalars().first())

    def get_by_user(self, user_id: str, *, for_update: bool = False) -> RefreshToken | None:
        """Fetch the row of ``user_id``; ``for_update`` adds ``FOR UPDATE`` where supported."""
        stmt = select(RefreshToken).where(RefreshToken.user_id == user_id)
        if for_update:
            stmt = stmt.with_for_update()
        return cast(RefreshToken | None, self.session.execute(stmt).scalars().first())

    def upsert_for_user(self, user_id: str, token: str, expires_at: datetime) -> RefreshToken:
        """
        Update the row of ``user_id`` in place or insert it, then flush.

        :raises sqlalchemy.exc.IntegrityError: When a concurrent insert won the
            unique ``user_id`` race; the caller retries.
        """
        row = self.get_by_user(user_id, for_update=True)
        if row is None:
            row = RefreshToken(user_id=user_id, token=token, expires_at=expires_at)
            self.session.add(row)
        else:
            row.token = token
            row.expires_at = expires_at
        self.flush()
        return row

    def delete_by_user(self, user_id: str) -> int:
        """Delete the row of ``user_id``; return the number of rows removed."""
        result = self.session.execute(delete(RefreshToken).where(RefreshToken.user_id == user_id))
        return int(result.rowcount or 0)

    def delete_by_token(self, token: str) -> int:
        result = self.session.execute(delete(RefreshToken).where(RefreshToken.token == token))
        return int(result.rowcount or 0)
