# journal_api/services/settings/service.py
from __future__ import annotations

import logging

from journal_api.models.user_setting import UserSetting
from journal_api.repositories.user import UserRepository
from journal_api.repositories.user_setting import UserSettingRepository
from journal_api.services._shared.base import BaseService
from journal_api.services._shared.errors import InvalidSettingsError, UserNotFoundError
from journal_api.services.delivery.policy import IntervalMode
from journal_api.services.settings.dto import SettingsOut, SettingsUpdateIn

log = logging.getLogger(__name__)


class SettingsService(BaseService):
    """
    Read and update a user's notification settings.

    A missing settings row is created with the defaults on first access.
    Updates never touch ``last_delivered_at``; only deliveries advance it.
    """

    def get(self, user_id: str) -> SettingsOut:
        """
        Return the settings of ``user_id``.

        :raises UserNotFoundError: If the user does not exist.
        """
        with self.rw_uow() as uow:
            row = self._ensure_row(uow.users, uow.user_settings, user_id)
            return self._to_out(row)

    def update(self, dto: SettingsUpdateIn) -> SettingsOut:
        """
        Apply a partial update.

        Switching to ``NONE`` or ``WHEN_APP_OPENS`` without a time clears the
        stored time; ``DAILY_SPECIFIC_TIME`` requires a time (given now or
        already stored).

        :raises UserNotFoundError: If the user does not exist.
        :raises InvalidSettingsError: Unknown mode or daily mode without a time.
        """
        with self.rw_uow() as uow:
            repo: UserSettingRepository = uow.user_settings
            row = self._ensure_row(uow.users, repo, dto.user_id)

            updates: dict[str, object] = {}
            mode = IntervalMode(row.notification_interval)
            if dto.notification_interval is not None:
                mode = IntervalMode(dto.notification_interval)
                if mode not in IntervalMode.selectable():
                    raise InvalidSettingsError(
                        f"Unknown notification interval: {dto.notification_interval}"
                    )
                updates["notification_interval"] = mode.value

            if dto.notification_time is not None:
                updates["notification_time"] = dto.notification_time
            elif mode in (IntervalMode.NONE, IntervalMode.WHEN_APP_OPENS):
                updates["notification_time"] = None

            effective_time = updates.get("notification_time", row.notification_time)
            if mode is IntervalMode.DAILY_SPECIFIC_TIME and effective_time is None:
                raise InvalidSettingsError(
                    "notification_time is required for DAILY_SPECIFIC_TIME"
                )

            if dto.in_app_enabled is not None:
                updates["in_app_enabled"] = dto.in_app_enabled
            if dto.push_enabled is not None:
                updates["push_enabled"] = dto.push_enabled

            repo.assign_updates(row, updates)
            log.info("settings.updated", extra={"user_id": dto.user_id, "mode": mode.value})
            return self._to_out(row)

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    @staticmethod
    def _ensure_row(
        users: UserRepository, settings: UserSettingRepository, user_id: str
    ) -> UserSetting:
        row = settings.get_by_user(user_id)
        if row is not None:
            return row
        if not users.exists_by_login_id(user_id):
            raise UserNotFoundError(user_id)
        return settings.create_default(user_id)

    @staticmethod
    def _to_out(row: UserSetting) -> SettingsOut:
        return SettingsOut(
            notification_interval=row.notification_interval,
            notification_time=row.notification_time,
            in_app_enabled=row.in_app_enabled,
            push_enabled=row.push_enabled,
            last_delivered_at=row.last_delivered_at,
        )
