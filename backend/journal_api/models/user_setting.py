"""Per-user notification settings."""

from __future__ import annotations

from datetime import datetime, time

from sqlalchemy import Boolean, DateTime, ForeignKey, String, Time, UniqueConstraint, true
from sqlalchemy.orm import Mapped, mapped_column

from journal_api.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin


class UserSetting(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Notification settings of a user.

    ``notification_interval`` is stored as its raw string so that values the
    application does not know can still be read (they map to ``UNKNOWN``).
    """

    __tablename__ = "user_settings"
    __repr_fields__ = ("user_id", "notification_interval")

    user_id: Mapped[str] = mapped_column(
        String(100),
        ForeignKey("users.login_id", ondelete="CASCADE"),
        nullable=False,
    )
    notification_interval: Mapped[str] = mapped_column(
        String(32), nullable=False, default="NONE", server_default="NONE"
    )
    notification_time: Mapped[time | None] = mapped_column(Time, nullable=True)
    last_delivered_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    in_app_enabled: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=true()
    )
    push_enabled: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=true()
    )

    __table_args__ = (UniqueConstraint("user_id", name="uq_user_settings_user_id"),)
