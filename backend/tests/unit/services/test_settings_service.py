"""Tests for :class:`SettingsService`."""

from __future__ import annotations

from datetime import UTC, datetime, time

import pytest
from journal_api.services._shared.errors import InvalidSettingsError, UserNotFoundError
from journal_api.services.settings.dto import SettingsUpdateIn
from journal_api.services.settings.service import SettingsService
from tests.factories.user import UserFactory
from tests.factories.user_setting import UserSettingFactory


@pytest.fixture()
def service() -> SettingsService:
    return SettingsService()


def test_get_creates_defaults_for_a_new_user(service, session):
    user = UserFactory()

    out = service.get(user.login_id)

    assert out.notification_interval == "WHEN_APP_OPENS"
    assert out.notification_time is None
    assert out.in_app_enabled is True
    assert out.push_enabled is True
    assert out.last_delivered_at is None


def test_get_unknown_user(service, session):
    with pytest.raises(UserNotFoundError):
        service.get("nobody")


def test_switch_to_daily_with_time(service, session):
    row = UserSettingFactory()

    out = service.update(
        SettingsUpdateIn(
            user_id=row.user_id,
            notification_interval="DAILY_SPECIFIC_TIME",
            notification_time=time(9, 0),
        )
    )

    assert out.notification_interval == "DAILY_SPECIFIC_TIME"
    assert out.notification_time == time(9, 0)


def test_daily_without_time_is_rejected(service, session):
    row = UserSettingFactory()
    with pytest.raises(InvalidSettingsError):
        service.update(
            SettingsUpdateIn(user_id=row.user_id, notification_interval="DAILY_SPECIFIC_TIME")
        )


def test_daily_keeps_a_previously_stored_time(service, session):
    row = UserSettingFactory(
        notification_interval="DAILY_SPECIFIC_TIME", notification_time=time(7, 15)
    )

    out = service.update(SettingsUpdateIn(user_id=row.user_id, push_enabled=False))

    assert out.notification_time == time(7, 15)
    assert out.push_enabled is False


def test_leaving_daily_clears_the_time(service, session):
    row = UserSettingFactory(
        notification_interval="DAILY_SPECIFIC_TIME", notification_time=time(7, 15)
    )

    out = service.update(SettingsUpdateIn(user_id=row.user_id, notification_interval="NONE"))

    assert out.notification_interval == "NONE"
    assert out.notification_time is None


@pytest.mark.parametrize("mode", ["WEEKLY", "UNKNOWN"])
def test_unselectable_modes_are_rejected(service, session, mode):
    row = UserSettingFactory()
    with pytest.raises(InvalidSettingsError):
        service.update(SettingsUpdateIn(user_id=row.user_id, notification_interval=mode))


def test_update_never_touches_last_delivery(service, session):
    delivered = datetime(2025, 3, 1, 10, 0, tzinfo=UTC)
    row = UserSettingFactory(last_delivered_at=delivered)

    out = service.update(SettingsUpdateIn(user_id=row.user_id, in_app_enabled=False))

    assert out.in_app_enabled is False
    assert out.last_delivered_at.replace(tzinfo=UTC) == delivered
