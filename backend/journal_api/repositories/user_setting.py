"""User settings repository."""

from __future__ import annotations

from datetime import datetime
from typing import cast

from sqlalchemy import or_, select, update

from journal_api.models.user_setting import UserSetting
from journal_api.repositories.base import BaseRepository


class UserSettingRepository(BaseRepository[UserSetting]):
    """Persistence-only repository for :class:`UserSetting`."""

    model = UserSetting

    def _updatable_fields(self):
        """Fields the settings use cases may assign."""
        return {
            "notification_interval",
            "notification_time",
            "last_delivered_at",
            "in_app_enabled",
            "push_enabled",
        }

    def get_by_user(self, user_id: str) -> UserSetting | None:
        stmt = select(UserSetting).where(UserSetting.user_id == user_id)
        return cast(UserSetting | None, self.session.execute(stmt).scalars().first())

    def create_default(self, user_id: str) -> UserSetting:
        """Insert the default settings row for ``user_id``.

        New users are prompted when the app opens, with in-app and push on.
        """
        return self.add(
            UserSetting(
                user_id=user_id,
                notification_interval="WHEN_APP_OPENS",
                in_app_enabled=True,
                push_enabled=True,
            )
        )

    def advance_last_delivered(self, user_id: str, at: datetime) -> bool:
        """Set ``last_delivered_at`` to ``at`` unless it is already at or past it.

        A single conditional ``UPDATE``; no other settings column is written,
        and the in-session identity map is left alone (the Unit of Work commit
        expires it).

        :returns: ``True`` when a row was updated.
        """
        stmt = (
            update(UserSetting)
            .where(
                UserSetting.user_id == user_id,
                or_(UserSetting.last_delivered_at.is_(None), UserSetting.last_delivered_at < at),
            )
            .values(last_delivered_at=at)
            .execution_options(synchronize_session=False)
        )
        return self.session.execute(stmt).rowcount > 0
