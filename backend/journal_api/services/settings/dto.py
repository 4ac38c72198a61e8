"""
DTOs for SettingsService.

Partial updates follow the usual convention: ``None`` means "leave as is".
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time


@dataclass(frozen=True, slots=True)
class SettingsUpdateIn:
    """
    Input DTO for a partial settings update.

    :param user_id: Owner of the settings (authenticated caller).
    :type user_id: str
    :param notification_interval: New interval mode name.
    :type notification_interval: str | None
    :param notification_time: New time of day (daily mode).
    :type notification_time: :class:`datetime.time` | None
    :param in_app_enabled: In-app delivery switch.
    :type in_app_enabled: bool | None
    :param push_enabled: Push delivery switch.
    :type push_enabled: bool | None
    """

    user_id: str
    notification_interval: str | None = None
    notification_time: time | None = None
    in_app_enabled: bool | None = None
    push_enabled: bool | None = None


@dataclass(frozen=True, slots=True)
class SettingsOut:
    """
    Output DTO with the current notification settings.

    :param notification_interval: Interval mode name.
    :param notification_time: Time of day for the daily mode.
    :param in_app_enabled: In-app delivery switch.
    :param push_enabled: Push delivery switch.
    :param last_delivered_at: Last scheduled delivery, if any.
    """

    notification_interval: str
    notification_time: time | None
    in_app_enabled: bool
    push_enabled: bool
    last_delivered_at: datetime | None = None
