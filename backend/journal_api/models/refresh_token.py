"""Persisted refresh token, one row per user."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from journal_api.core.extensions import db

from .base import PKMixin, ReprMixin


class RefreshToken(PKMixin, ReprMixin, db.Model):
    """
    Stored refresh token.

    ``user_id`` holds the owner's ``login_id`` as a plain lookup key; there is
    intentionally no ORM relationship in either direction. The row is updated
    in place on every login (same ``id``, new ``token`` and ``expires_at``).
    """

    __tablename__ = "refresh_tokens"
    __repr_fields__ = ("id", "user_id", "expires_at")

    user_id: Mapped[str] = mapped_column(
        String(100),
        ForeignKey("users.login_id", ondelete="CASCADE"),
        nullable=False,
    )
    token: Mapped[str] = mapped_column(String(1024), nullable=False)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        UniqueConstraint("user_id", name="uq_refresh_tokens_user_id"),
        UniqueConstraint("token", name="uq_refresh_tokens_token"),
    )
